"""
Request handlers for owners, pets and visits.

Handlers receive their repositories through the constructor and return
a :class:`ViewResult` or :class:`RedirectResult`; the HTTP layer turns
those into Flask responses.
"""

from petclinic.handlers.owner import OwnerHandler
from petclinic.handlers.pet import PetHandler
from petclinic.handlers.results import RedirectResult, ViewResult
from petclinic.handlers.visit import VisitHandler

__all__ = ["OwnerHandler", "PetHandler", "VisitHandler", "RedirectResult", "ViewResult"]
