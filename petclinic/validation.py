"""
Field-level validation for owner, pet and visit forms.

Errors are keyed by the submitted form field name (``lastName``,
``birthDate``, ...) so templates can annotate the matching input.
"""

import re
from datetime import date
from typing import NamedTuple

from petclinic.models import Owner, Pet, Visit

TELEPHONE_PATTERN = re.compile(r"^\d{10}$")

NOT_BLANK = "must not be blank"
REQUIRED = "is required"


class FieldError(NamedTuple):
    field: str
    code: str
    message: str


class FormErrors:
    """Collected rejections for one form submission."""

    def __init__(self):
        self._errors: dict[str, list[FieldError]] = {}

    def reject(self, field: str, code: str, message: str) -> None:
        self._errors.setdefault(field, []).append(FieldError(field, code, message))

    def has_errors(self) -> bool:
        return bool(self._errors)

    def has_field_errors(self, field: str) -> bool:
        return field in self._errors

    def messages(self, field: str) -> list[str]:
        return [error.message for error in self._errors.get(field, [])]

    def codes(self, field: str) -> list[str]:
        return [error.code for error in self._errors.get(field, [])]

    @property
    def error_count(self) -> int:
        return sum(len(errors) for errors in self._errors.values())

    def __contains__(self, field: str) -> bool:
        return self.has_field_errors(field)

    def __repr__(self) -> str:
        return f"<FormErrors {sorted(self._errors)}>"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_owner(owner: Owner, errors: FormErrors) -> None:
    """Required name/address fields plus a ten-digit telephone number."""
    required = (
        ("firstName", owner.first_name),
        ("lastName", owner.last_name),
        ("address", owner.address),
        ("city", owner.city),
    )
    for field, value in required:
        if _is_blank(value):
            errors.reject(field, "NotBlank", NOT_BLANK)

    if _is_blank(owner.telephone):
        errors.reject("telephone", "NotBlank", NOT_BLANK)
    elif not TELEPHONE_PATTERN.match(owner.telephone.strip()):
        errors.reject("telephone", "Pattern", "Telephone must be a 10-digit number")


def validate_pet(pet: Pet, errors: FormErrors) -> None:
    """Name and birth date are required; a type is required for new pets."""
    if _is_blank(pet.name):
        errors.reject("name", "required", REQUIRED)

    if pet.is_new() and pet.type is None and "type" not in errors:
        errors.reject("type", "required", REQUIRED)

    if pet.birth_date is None and "birthDate" not in errors:
        errors.reject("birthDate", "required", REQUIRED)


def reject_future_birth_date(pet: Pet, errors: FormErrors, today: date | None = None) -> None:
    today = today or date.today()
    if pet.birth_date is not None and pet.birth_date > today:
        errors.reject("birthDate", "typeMismatch.birthDate", "invalid date")


def validate_visit(visit: Visit, errors: FormErrors) -> None:
    if _is_blank(visit.description):
        errors.reject("description", "NotBlank", NOT_BLANK)

    if visit.visit_date is None and "date" not in errors:
        errors.reject("date", "required", REQUIRED)
