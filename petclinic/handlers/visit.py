"""
Visit request handling: book a visit for one of an owner's pets.

The new Visit is attached to the pet's visit list before the form is
bound, so the form and the pet's visit history render from the same
object graph. Nothing is persisted until the owner is saved; rejected
submissions ask for the attached visit to be discarded.
"""

import logging
import time
from typing import Mapping

from opentelemetry import trace

from petclinic.errors import NotFoundError
from petclinic.forms import bind_visit
from petclinic.handlers.results import RedirectResult, ViewResult
from petclinic.models import Owner, Pet, Visit
from petclinic.repositories import OwnerRepository
from petclinic.tracing import traced
from petclinic.validation import FormErrors, validate_visit

logger = logging.getLogger(__name__)

VIEWS_VISIT_CREATE_OR_UPDATE_FORM = "pets/create_or_update_visit_form.html"


class VisitHandler:
    """Visit booking on top of an :class:`OwnerRepository`."""

    def __init__(self, owners: OwnerRepository):
        self.owners = owners

    def resolve_visit_context(self, owner_id: int, pet_id: int) -> tuple[Owner, Pet, Visit]:
        """
        Load the owner and pet and attach a fresh visit to the pet.

        Raises:
            NotFoundError: If the owner does not exist or has no pet ``pet_id``.
        """
        owner = self.owners.get_by_id(owner_id)

        pet = owner.get_pet_by_id(pet_id)
        if pet is None:
            raise NotFoundError(f"Pet with id {pet_id} not found for owner with id {owner_id}.")

        visit = Visit()
        pet.add_visit(visit)
        return owner, pet, visit

    def init_new_visit_form(self, owner_id: int, pet_id: int) -> ViewResult:
        owner, pet, visit = self.resolve_visit_context(owner_id, pet_id)
        return ViewResult(
            VIEWS_VISIT_CREATE_OR_UPDATE_FORM,
            {"owner": owner, "pet": pet, "visit": visit},
            discard=True,
        )

    @traced("visit.booking")
    def create(self, owner_id: int, pet_id: int, form_data: Mapping[str, str]) -> ViewResult | RedirectResult:
        """
        Book a visit from the submitted form.

        Span attributes ``visit.outcome`` and ``visit.booking.duration_ms``
        record whether the booking went through and how long it took.
        """
        started = time.monotonic()
        owner, pet, visit = self.resolve_visit_context(owner_id, pet_id)

        span = trace.get_current_span()
        span.set_attribute("visit.owner.id", owner.id)
        span.set_attribute("visit.pet.id", pet_id)

        errors = FormErrors()
        bind_visit(visit, form_data, errors)
        validate_visit(visit, errors)

        if errors.has_errors():
            span.set_attribute("visit.outcome", "validation_error")
            span.set_attribute("visit.validation.error_count", errors.error_count)
            logger.info(f"Visit for pet {pet_id} rejected: {errors.error_count} field error(s)")
            return ViewResult(
                VIEWS_VISIT_CREATE_OR_UPDATE_FORM,
                {"owner": owner, "pet": pet, "visit": visit},
                errors=errors,
                status=400,
                discard=True,
            )

        owner.add_visit(pet.id, visit)
        self.owners.save(owner)

        span.set_attribute("visit.outcome", "booked")
        span.set_attribute("visit.booking.duration_ms", int((time.monotonic() - started) * 1000))
        logger.info(f"Visit booked for pet {pet_id} of owner {owner_id}")
        return RedirectResult(f"/owners/{owner_id}", "Your visit has been booked")
