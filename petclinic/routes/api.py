"""
JSON endpoints for deployment checks.

Endpoints:
    GET    /api/health        - Health check
"""

import logging
import os

from flask import Blueprint, Response, current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from petclinic import db

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
        status, code = "healthy", 200
    except SQLAlchemyError as exc:
        logger.error(f"Health check database query failed: {exc}")
        database = "unavailable"
        status, code = "unhealthy", 503

    return jsonify({
        "status": status,
        "service": current_app.config.get("TRACING_SERVICE_NAME", "petclinic"),
        "database": database,
        "environment": os.getenv("ENVIRONMENT", current_app.config.get("TRACING_ENVIRONMENT", "unknown")),
        "version": os.getenv("APP_VERSION", current_app.config.get("TRACING_SERVICE_VERSION", "unknown")),
    }), code


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@api_bp.errorhandler(HTTPException)
def http_error(error: HTTPException) -> tuple[Response, int]:
    return jsonify({"error": error.name}), error.code


@api_bp.errorhandler(Exception)
def internal_error(error: Exception) -> tuple[Response, int]:
    """Handle unexpected errors raised by API routes."""
    logger.error(f"Internal server error: {error}")
    return jsonify({"error": "Internal server error"}), 500
