"""
HTML view routes for the PetClinic web interface.

Each route builds a handler with SQLAlchemy-backed repositories, passes
it the path parameters and submitted form, and turns the handler's
result into a rendered page or a redirect with a flash message.

Routes:
    GET       /                                           - Welcome page
    GET/POST  /owners/new                                 - Create owner
    GET       /owners/find                                - Owner search form
    GET       /owners                                     - Search/list owners
    GET       /owners/<id>                                - Owner details
    GET/POST  /owners/<id>/edit                           - Edit owner
    GET/POST  /owners/<id>/pets/new                       - Add pet
    GET/POST  /owners/<id>/pets/<pet_id>/edit             - Edit pet
    GET/POST  /owners/<id>/pets/<pet_id>/visits/new       - Book visit
    GET       /oups                                       - Error page demo
"""

import logging

from flask import Blueprint, flash, redirect, render_template, request
from werkzeug.exceptions import HTTPException

from petclinic import db
from petclinic.errors import NotFoundError, PaginationError
from petclinic.handlers import OwnerHandler, PetHandler, RedirectResult, ViewResult, VisitHandler
from petclinic.repositories import OwnerRepository, PetTypeRepository
from petclinic.validation import FormErrors

logger = logging.getLogger(__name__)

views_bp = Blueprint("views", __name__)


def _owner_repository() -> OwnerRepository:
    return OwnerRepository(db.session)


def respond(result: ViewResult | RedirectResult, owners: OwnerRepository):
    """
    Convert a handler result into a Flask response.

    Args:
        result: Outcome returned by a handler.
        owners: Repository whose pending changes are dropped when the
            result asks for it, after the page has been rendered.

    Returns:
        Redirect response, or rendered template with status code.
    """
    if isinstance(result, RedirectResult):
        if result.message:
            flash(result.message, "success")
        return redirect(result.location)

    if result.message:
        flash(result.message, "error")

    body = render_template(
        result.template,
        errors=result.errors if result.errors is not None else FormErrors(),
        **result.context,
    )
    if result.discard:
        owners.discard()
    return body, result.status


@views_bp.route("/")
def welcome():
    """Render the welcome page."""
    logger.info("GET / - Rendering welcome page")
    return render_template("welcome.html")


# -----------------------------------------------------------------------------
# Owners
# -----------------------------------------------------------------------------

@views_bp.route("/owners/new", methods=["GET"])
def init_owner_creation_form():
    logger.info("GET /owners/new - Rendering new owner form")
    owners = _owner_repository()
    return respond(OwnerHandler(owners).init_creation_form(), owners)


@views_bp.route("/owners/new", methods=["POST"])
def process_owner_creation_form():
    """
    Handle new owner form submission.

    Form Data:
        firstName, lastName, address, city, telephone (all required)

    Returns:
        Redirect to the owner page on success, or the form with errors.
    """
    logger.info("POST /owners/new - Creating owner from form")
    owners = _owner_repository()
    return respond(OwnerHandler(owners).create(request.form), owners)


@views_bp.route("/owners/find")
def init_find_form():
    logger.info("GET /owners/find - Rendering owner search form")
    owners = _owner_repository()
    return respond(OwnerHandler(owners).init_find_form(), owners)


@views_bp.route("/owners")
def process_find_form():
    """
    Search owners by last name.

    Query Parameters:
        lastName: Last name prefix (absent or empty lists every owner)
        page: 1-based page number (default 1)

    Returns:
        Owner list, redirect to a single match, or the search form with
        a "not found" error.
    """
    page = request.args.get("page", 1, type=int)
    last_name = request.args.get("lastName")
    logger.info(f"GET /owners - Searching owners (lastName={last_name!r}, page={page})")

    owners = _owner_repository()
    return respond(OwnerHandler(owners).search(last_name, page), owners)


@views_bp.route("/owners/<int:owner_id>")
def show_owner(owner_id: int):
    logger.info(f"GET /owners/{owner_id} - Viewing owner")
    owners = _owner_repository()
    return respond(OwnerHandler(owners).show(owner_id), owners)


@views_bp.route("/owners/<int:owner_id>/edit", methods=["GET"])
def init_update_owner_form(owner_id: int):
    logger.info(f"GET /owners/{owner_id}/edit - Rendering edit form")
    owners = _owner_repository()
    return respond(OwnerHandler(owners).init_update_form(owner_id), owners)


@views_bp.route("/owners/<int:owner_id>/edit", methods=["POST"])
def process_update_owner_form(owner_id: int):
    logger.info(f"POST /owners/{owner_id}/edit - Updating owner from form")
    owners = _owner_repository()
    return respond(OwnerHandler(owners).update(owner_id, request.form), owners)


# -----------------------------------------------------------------------------
# Pets
# -----------------------------------------------------------------------------

def _pet_handler(owners: OwnerRepository) -> PetHandler:
    return PetHandler(owners, PetTypeRepository(db.session))


@views_bp.route("/owners/<int:owner_id>/pets/new", methods=["GET"])
def init_pet_creation_form(owner_id: int):
    logger.info(f"GET /owners/{owner_id}/pets/new - Rendering new pet form")
    owners = _owner_repository()
    return respond(_pet_handler(owners).init_creation_form(owner_id), owners)


@views_bp.route("/owners/<int:owner_id>/pets/new", methods=["POST"])
def process_pet_creation_form(owner_id: int):
    """
    Handle new pet form submission.

    Form Data:
        name: Pet name (required, unique for this owner)
        birthDate: YYYY-MM-DD, not in the future (required)
        type: Pet type name (required)
    """
    logger.info(f"POST /owners/{owner_id}/pets/new - Creating pet from form")
    owners = _owner_repository()
    return respond(_pet_handler(owners).create(owner_id, request.form), owners)


@views_bp.route("/owners/<int:owner_id>/pets/<int:pet_id>/edit", methods=["GET"])
def init_pet_update_form(owner_id: int, pet_id: int):
    logger.info(f"GET /owners/{owner_id}/pets/{pet_id}/edit - Rendering pet edit form")
    owners = _owner_repository()
    return respond(_pet_handler(owners).init_update_form(owner_id, pet_id), owners)


@views_bp.route("/owners/<int:owner_id>/pets/<int:pet_id>/edit", methods=["POST"])
def process_pet_update_form(owner_id: int, pet_id: int):
    logger.info(f"POST /owners/{owner_id}/pets/{pet_id}/edit - Updating pet from form")
    owners = _owner_repository()
    return respond(_pet_handler(owners).update(owner_id, pet_id, request.form), owners)


# -----------------------------------------------------------------------------
# Visits
# -----------------------------------------------------------------------------

@views_bp.route("/owners/<int:owner_id>/pets/<int:pet_id>/visits/new", methods=["GET"])
def init_new_visit_form(owner_id: int, pet_id: int):
    logger.info(f"GET /owners/{owner_id}/pets/{pet_id}/visits/new - Rendering visit form")
    owners = _owner_repository()
    return respond(VisitHandler(owners).init_new_visit_form(owner_id, pet_id), owners)


@views_bp.route("/owners/<int:owner_id>/pets/<int:pet_id>/visits/new", methods=["POST"])
def process_new_visit_form(owner_id: int, pet_id: int):
    """
    Handle visit booking form submission.

    Form Data:
        date: Visit date YYYY-MM-DD (defaults to today)
        description: Reason for the visit (required)
    """
    logger.info(f"POST /owners/{owner_id}/pets/{pet_id}/visits/new - Booking visit")
    owners = _owner_repository()
    return respond(VisitHandler(owners).create(owner_id, pet_id, request.form), owners)


@views_bp.route("/oups")
def trigger_exception():
    """Raise on purpose to show the error page."""
    raise RuntimeError(
        "Expected: route used to showcase what happens when an exception is thrown"
    )


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@views_bp.app_errorhandler(NotFoundError)
def handle_not_found(error: NotFoundError):
    logger.warning(f"Not found: {error}")
    return render_template("error.html", status=404, message=str(error)), 404


@views_bp.app_errorhandler(PaginationError)
def handle_bad_page(error: PaginationError):
    logger.warning(f"Bad pagination request: {error}")
    return render_template("error.html", status=400, message=str(error)), 400


@views_bp.app_errorhandler(HTTPException)
def handle_http_exception(error: HTTPException):
    return render_template(
        "error.html", status=error.code, message=error.description
    ), error.code


@views_bp.app_errorhandler(Exception)
def handle_unexpected_error(error: Exception):
    """Render the generic error page for anything the handlers did not expect."""
    logger.exception(f"Unhandled error: {error}")
    db.session.rollback()
    return render_template(
        "error.html", status=500, message="Something happened..."
    ), 500
