"""
Application configuration module.

This module defines configuration classes for different environments
(development, testing, production). Configuration values are loaded
from environment variables with sensible defaults.
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag such as ``TRACING_ENABLED=true`` from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """
    Base configuration with default settings.

    Attributes:
        SECRET_KEY: Flask session signing key (flash messages live in the session).
        SQLALCHEMY_DATABASE_URI: Database connection string.
        SEED_DATA: Populate pet types and sample owners on an empty database.
        LOG_LEVEL: Root logging level.
        LOG_DIR: Optional directory for a ``petclinic.log`` file handler.
        TRACING_ENABLED: Install an OpenTelemetry tracer provider at startup.
        TRACING_SERVICE_NAME: ``service.name`` resource attribute.
        TRACING_ENVIRONMENT: ``deployment.environment`` resource attribute.
        TRACING_SERVICE_VERSION: ``service.version`` resource attribute.
        TRACING_SAMPLE_RATE: Ratio of traces kept (0.0 to 1.0).
        TRACING_EXPORTER: ``console`` or ``otlp``.
        OTLP_ENDPOINT: Collector URL used by the ``otlp`` exporter.
    """

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    # Default database location
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'petclinic.db'}"
    )

    SEED_DATA: bool = _env_flag("SEED_DATA", True)

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
    LOG_DIR: str | None = os.environ.get("LOG_DIR")

    TRACING_ENABLED: bool = _env_flag("TRACING_ENABLED", False)
    TRACING_SERVICE_NAME: str = os.environ.get("TRACING_SERVICE_NAME", "petclinic")
    TRACING_ENVIRONMENT: str = os.environ.get("TRACING_ENVIRONMENT", "dev")
    TRACING_SERVICE_VERSION: str = os.environ.get("TRACING_SERVICE_VERSION", "1.0.0")
    TRACING_SAMPLE_RATE: float = float(os.environ.get("TRACING_SAMPLE_RATE", "1.0"))
    TRACING_EXPORTER: str = os.environ.get("TRACING_EXPORTER", "console")
    OTLP_ENDPOINT: str = os.environ.get("OTLP_ENDPOINT", "http://localhost:4318/v1/traces")


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG: bool = True
    TESTING: bool = True

    # In-memory database; Flask-SQLAlchemy shares one connection across threads
    SQLALCHEMY_DATABASE_URI: str = os.environ.get("TEST_DATABASE_URL", "sqlite://")

    # Fixtures create their own reference data
    SEED_DATA: bool = False
    TRACING_ENABLED: bool = False


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False
    SEED_DATA: bool = _env_flag("SEED_DATA", False)


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
