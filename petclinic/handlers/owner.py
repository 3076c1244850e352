"""
Owner request handling: create, search, update and display owners.

Each operation runs explicit steps in order: resolve path parameters,
load the aggregate, bind the submitted fields, validate, then either
save and redirect or re-render the form with field errors.
"""

import logging
from typing import Mapping

from petclinic.forms import bind_owner
from petclinic.handlers.results import RedirectResult, ViewResult
from petclinic.models import Owner
from petclinic.pagination import paginate
from petclinic.repositories import OwnerRepository, Page, PageRequest
from petclinic.tracing import get_tracer, traced
from petclinic.validation import FormErrors, validate_owner

logger = logging.getLogger(__name__)

VIEWS_OWNER_CREATE_OR_UPDATE_FORM = "owners/create_or_update_owner_form.html"
VIEWS_FIND_OWNERS = "owners/find_owners.html"
VIEWS_OWNERS_LIST = "owners/owners_list.html"
VIEWS_OWNER_DETAILS = "owners/owner_details.html"

PAGE_SIZE = 5


class OwnerHandler:
    """Owner use cases on top of an :class:`OwnerRepository`."""

    def __init__(self, owners: OwnerRepository):
        self.owners = owners

    def find_owner(self, owner_id: int) -> Owner:
        """
        Load an owner for a nested route.

        Raises:
            NotFoundError: If no owner has ``owner_id``.
        """
        return self.owners.get_by_id(owner_id)

    def init_creation_form(self) -> ViewResult:
        return ViewResult(VIEWS_OWNER_CREATE_OR_UPDATE_FORM, {"owner": Owner()})

    def create(self, form_data: Mapping[str, str]) -> ViewResult | RedirectResult:
        """
        Create an owner from the submitted form.

        Returns:
            Redirect to the new owner's page, or the form with field errors.
        """
        logger.info("Processing owner creation form")

        owner = Owner()
        errors = FormErrors()
        bind_owner(owner, form_data)
        validate_owner(owner, errors)

        if errors.has_errors():
            logger.info(f"Owner creation rejected: {errors.error_count} field error(s)")
            return ViewResult(
                VIEWS_OWNER_CREATE_OR_UPDATE_FORM,
                {"owner": owner},
                errors=errors,
                status=400,
                message="There was an error in creating the owner.",
            )

        self.owners.save(owner)
        logger.info(f"Created owner {owner.id}")
        return RedirectResult(f"/owners/{owner.id}", "New Owner Created")

    def init_find_form(self) -> ViewResult:
        return ViewResult(VIEWS_FIND_OWNERS, {"last_name": ""})

    @traced("owner.search")
    def search(self, last_name: str | None = None, page: int = 1) -> ViewResult | RedirectResult:
        """
        Search owners by last name prefix.

        Args:
            last_name: Prefix to match; None or empty matches every owner.
            page: 1-based page number.

        Returns:
            The search form with a ``lastName`` error when the page is
            empty, a redirect when exactly one owner matches, otherwise
            the paginated owner list.
        """
        # empty string signifies broadest possible search
        last_name = last_name or ""
        logger.info(f"Searching owners: last_name={last_name!r}, page={page}")

        with get_tracer(__name__).start_as_current_span("owner.db.search") as span:
            span.set_attribute("owner.lastName", last_name)
            span.set_attribute("search.page", page)
            results = self._find_paginated_for_owners_last_name(page, last_name)
            span.set_attribute("search.results.total", results.total_elements)

        if results.is_empty():
            errors = FormErrors()
            errors.reject("lastName", "notFound", "not found")
            logger.debug(f"No owners found for last_name={last_name!r}")
            return ViewResult(VIEWS_FIND_OWNERS, {"last_name": last_name}, errors=errors)

        if results.total_elements == 1:
            owner = results.content[0]
            logger.debug(f"Single owner found, redirecting to {owner.id}")
            return RedirectResult(f"/owners/{owner.id}")

        model = paginate(page, PAGE_SIZE, results.total_elements, results.content)
        model["last_name"] = last_name
        return ViewResult(VIEWS_OWNERS_LIST, model)

    def _find_paginated_for_owners_last_name(self, page: int, last_name: str) -> Page[Owner]:
        pageable = PageRequest.of(page - 1, PAGE_SIZE)
        return self.owners.find_by_last_name_starting_with(last_name, pageable)

    def init_update_form(self, owner_id: int) -> ViewResult:
        return ViewResult(VIEWS_OWNER_CREATE_OR_UPDATE_FORM, {"owner": self.find_owner(owner_id)})

    def update(self, owner_id: int, form_data: Mapping[str, str]) -> ViewResult | RedirectResult:
        """
        Update an existing owner.

        A submitted ``id`` must match ``owner_id``. Rejected submissions
        are rendered with ``discard`` set, because binding has already
        modified the loaded owner.
        """
        logger.info(f"Processing owner update form for {owner_id}")

        owner = self.find_owner(owner_id)
        errors = FormErrors()

        submitted_id = (form_data.get("id") or "").strip()
        if submitted_id and submitted_id != str(owner_id):
            errors.reject("id", "mismatch", "The owner ID in the form does not match the URL.")
            logger.warning(f"Owner ID mismatch: form={submitted_id}, url={owner_id}")
            return ViewResult(
                VIEWS_OWNER_CREATE_OR_UPDATE_FORM,
                {"owner": owner},
                errors=errors,
                status=400,
                message="Owner ID mismatch. Please try again.",
            )

        bind_owner(owner, form_data)
        validate_owner(owner, errors)

        if errors.has_errors():
            logger.info(f"Owner {owner_id} update rejected: {errors.error_count} field error(s)")
            return ViewResult(
                VIEWS_OWNER_CREATE_OR_UPDATE_FORM,
                {"owner": owner},
                errors=errors,
                status=400,
                message="There was an error in updating the owner.",
                discard=True,
            )

        self.owners.save(owner)
        logger.info(f"Updated owner {owner_id}")
        return RedirectResult(f"/owners/{owner_id}", "Owner Values Updated")

    def show(self, owner_id: int) -> ViewResult:
        """Owner details including pets and their visits."""
        owner = self.find_owner(owner_id)
        logger.debug(f"Displaying owner {owner_id} ({owner.last_name})")
        return ViewResult(VIEWS_OWNER_DETAILS, {"owner": owner})
