"""
Binding of submitted form fields onto model objects.

Only fields present in the submission are bound, so a partial form
leaves the other attributes untouched. The ``id`` field is never bound:
identifiers always come from the URL path.
"""

from datetime import date
from typing import Callable, Mapping

from petclinic.models import Owner, Pet, PetType, Visit
from petclinic.validation import FormErrors

FormData = Mapping[str, str]

OWNER_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "address": "address",
    "city": "city",
    "telephone": "telephone",
}


def _text(form_data: FormData, name: str) -> str:
    return (form_data.get(name) or "").strip()


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` form value; raises ValueError when malformed."""
    return date.fromisoformat(value.strip())


def bind_owner(owner: Owner, form_data: FormData) -> None:
    for field, attribute in OWNER_FIELDS.items():
        if field in form_data:
            setattr(owner, attribute, _text(form_data, field))


def bind_pet(
    pet: Pet,
    form_data: FormData,
    errors: FormErrors,
    find_type: Callable[[str], PetType | None],
) -> None:
    """
    Bind name, birth date and type onto ``pet``.

    The type is submitted by name and resolved through ``find_type``.
    Unparseable dates and unknown type names are recorded as
    ``typeMismatch`` errors and leave the attribute empty.
    """
    if "name" in form_data:
        pet.name = _text(form_data, "name")

    if "birthDate" in form_data:
        raw_birth_date = _text(form_data, "birthDate")
        pet.birth_date = None
        if raw_birth_date:
            try:
                pet.birth_date = parse_date(raw_birth_date)
            except ValueError:
                errors.reject("birthDate", "typeMismatch", "invalid date")

    if "type" in form_data:
        type_name = _text(form_data, "type")
        pet.type = None
        if type_name:
            pet_type = find_type(type_name)
            if pet_type is None:
                errors.reject("type", "typeMismatch", f"type not found: {type_name}")
            pet.type = pet_type


def bind_visit(visit: Visit, form_data: FormData, errors: FormErrors) -> None:
    """Bind date and description; a blank date keeps the default of today."""
    raw_date = _text(form_data, "date")
    if raw_date:
        try:
            visit.visit_date = parse_date(raw_date)
        except ValueError:
            visit.visit_date = None
            errors.reject("date", "typeMismatch", "invalid date")

    if "description" in form_data:
        visit.description = _text(form_data, "description")
