"""
Exception types raised by the PetClinic handlers.

Validation problems are never raised; they are collected in
:class:`petclinic.validation.FormErrors` and the form is re-rendered.
"""


class PetClinicError(Exception):
    """Base class for application errors."""


class NotFoundError(PetClinicError):
    """A referenced owner or pet does not exist."""


class PaginationError(PetClinicError, ValueError):
    """Invalid page index or page size reached the paging code."""
