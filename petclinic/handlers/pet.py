"""
Pet request handling: pets are created and edited under their owner.

Submitted fields are bound onto a form-backing Pet that is not part of
the owner's collection. Only a valid submission touches the owner
aggregate, which is then saved as a whole.
"""

import logging
from typing import Mapping

from opentelemetry import trace

from petclinic.errors import NotFoundError
from petclinic.forms import bind_pet
from petclinic.handlers.results import RedirectResult, ViewResult
from petclinic.models import Owner, Pet, PetType
from petclinic.repositories import OwnerRepository, PetTypeRepository
from petclinic.tracing import traced
from petclinic.validation import FormErrors, reject_future_birth_date, validate_pet

logger = logging.getLogger(__name__)

VIEWS_PETS_CREATE_OR_UPDATE_FORM = "pets/create_or_update_pet_form.html"


class PetHandler:
    """Pet use cases on top of the owner and pet type repositories."""

    def __init__(self, owners: OwnerRepository, types: PetTypeRepository):
        self.owners = owners
        self.types = types

    def populate_types(self) -> list[PetType]:
        types = self.types.find_pet_types()
        logger.debug(f"Loaded {len(types)} pet types")
        return types

    def resolve_owner(self, owner_id: int) -> Owner:
        return self.owners.get_by_id(owner_id)

    def resolve_pet(self, owner: Owner, pet_id: int | None = None) -> Pet | None:
        """A blank Pet for the creation flow, else the owner's pet with ``pet_id``."""
        if pet_id is None:
            return Pet()
        return owner.get_pet_by_id(pet_id)

    def _form(
        self,
        owner: Owner,
        pet: Pet,
        errors: FormErrors | None = None,
        status: int = 200,
    ) -> ViewResult:
        return ViewResult(
            VIEWS_PETS_CREATE_OR_UPDATE_FORM,
            {"owner": owner, "pet": pet, "types": self.populate_types()},
            errors=errors,
            status=status,
        )

    def init_creation_form(self, owner_id: int) -> ViewResult:
        owner = self.resolve_owner(owner_id)
        return self._form(owner, self.resolve_pet(owner))

    @traced("pet.create")
    def create(self, owner_id: int, form_data: Mapping[str, str]) -> ViewResult | RedirectResult:
        """
        Add a new pet to an owner.

        Rejects a blank name, a missing type or birth date, a name already
        used by another of this owner's pets, and a birth date in the future.
        """
        owner = self.resolve_owner(owner_id)
        pet = self.resolve_pet(owner)
        errors = FormErrors()
        bind_pet(pet, form_data, errors, self.types.find_by_name)

        span = trace.get_current_span()
        span.set_attribute("pet.name", pet.name or "")
        span.set_attribute("owner.id", owner.id)
        if pet.type is not None:
            span.set_attribute("pet.type", pet.type.name)

        validate_pet(pet, errors)
        if pet.name and pet.is_new() and owner.get_pet(pet.name, ignore_new=True) is not None:
            errors.reject("name", "duplicate", "already exists")
        reject_future_birth_date(pet, errors)

        if errors.has_errors():
            span.set_attribute("validation.passed", False)
            span.set_attribute("validation.error_count", errors.error_count)
            logger.info(f"Pet creation for owner {owner_id} rejected: {errors.error_count} field error(s)")
            return self._form(owner, pet, errors, status=400)

        span.set_attribute("validation.passed", True)
        owner.add_pet(pet)
        self.owners.save(owner)
        logger.info(f"Added pet {pet.id} ({pet.name}) to owner {owner_id}")
        return RedirectResult(f"/owners/{owner_id}", "New Pet has been Added")

    def init_update_form(self, owner_id: int, pet_id: int) -> ViewResult:
        owner = self.resolve_owner(owner_id)
        pet = self.resolve_pet(owner, pet_id)
        if pet is None:
            raise NotFoundError(f"Pet with id {pet_id} not found for owner with id {owner_id}.")
        return self._form(owner, pet)

    @traced("pet.update")
    def update(self, owner_id: int, pet_id: int, form_data: Mapping[str, str]) -> ViewResult | RedirectResult:
        """
        Edit one of an owner's pets.

        The duplicate-name check ignores the pet being edited, matched by id.
        """
        owner = self.resolve_owner(owner_id)
        existing = self.resolve_pet(owner, pet_id)

        # unsubmitted fields keep the stored values
        pet = Pet(id=pet_id)
        if existing is not None:
            pet.name = existing.name
            pet.birth_date = existing.birth_date
            pet.type = existing.type

        errors = FormErrors()
        bind_pet(pet, form_data, errors, self.types.find_by_name)

        trace.get_current_span().set_attribute("owner.id", owner.id)

        validate_pet(pet, errors)
        if pet.name:
            same_name = owner.get_pet(pet.name)
            if same_name is not None and same_name.id != pet.id:
                errors.reject("name", "duplicate", "already exists")
        reject_future_birth_date(pet, errors)

        if errors.has_errors():
            logger.info(f"Pet {pet_id} update rejected: {errors.error_count} field error(s)")
            return self._form(owner, pet, errors, status=400)

        self._update_pet_details(owner, pet)
        return RedirectResult(f"/owners/{owner_id}", "Pet details has been edited")

    def _update_pet_details(self, owner: Owner, pet: Pet) -> None:
        """Copy the edited fields onto the owner's pet, or add it if the owner has none with that id."""
        existing = owner.get_pet_by_id(pet.id)
        if existing is not None:
            existing.name = pet.name
            existing.birth_date = pet.birth_date
            existing.type = pet.type
            logger.info(f"Updated pet {pet.id} for owner {owner.id}")
        else:
            # the submitted id belongs to no pet of this owner; store a new pet instead
            owner.add_pet(Pet(name=pet.name, birth_date=pet.birth_date, type=pet.type))
            logger.info(f"Pet {pet.id} not found on owner {owner.id}, added as a new pet")
        self.owners.save(owner)
