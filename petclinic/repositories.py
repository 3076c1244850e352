"""
Persistence access for the Owner aggregate and PetType reference data.

Handlers receive repository instances through their constructors and
never touch the SQLAlchemy session themselves. Only owners are saved;
pets and visits are persisted through the owner's cascading relationships.
"""

import logging
import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session, scoped_session

from petclinic.errors import NotFoundError, PaginationError
from petclinic.models import Owner, PetType

logger = logging.getLogger(__name__)

T = TypeVar("T")

# largest OFFSET a 64-bit signed SQL integer can hold
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index plus page size."""

    page: int
    size: int

    @classmethod
    def of(cls, page: int, size: int) -> "PageRequest":
        if page < 0:
            raise PaginationError(f"Page index must not be less than zero, got {page}")
        if size < 1:
            raise PaginationError(f"Page size must not be less than one, got {size}")
        if page * size > MAX_OFFSET:
            raise PaginationError(f"Page index {page} is out of range")
        return cls(page, size)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    """One page of query results together with the total match count."""

    content: list[T]
    request: PageRequest
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.request.size)

    def is_empty(self) -> bool:
        """True when this page holds no rows (even if other pages do)."""
        return not self.content


class OwnerRepository:
    """SQLAlchemy-backed storage for Owner aggregates."""

    def __init__(self, session: Session | scoped_session):
        self.session = session

    def find_by_id(self, owner_id: int) -> Owner | None:
        return self.session.get(Owner, owner_id)

    def get_by_id(self, owner_id: int) -> Owner:
        """
        Load an owner that a request path refers to.

        Raises:
            NotFoundError: If no owner has ``owner_id``.
        """
        owner = self.find_by_id(owner_id)
        if owner is None:
            raise NotFoundError(
                f"Owner not found with id: {owner_id}. Please ensure the ID is correct "
                "and the owner exists in the database."
            )
        return owner

    def find_by_last_name_starting_with(self, last_name: str, pageable: PageRequest) -> Page[Owner]:
        """
        Find owners whose last name starts with ``last_name``.

        An empty prefix matches every owner. Rows are ordered by id so
        pages are stable between requests.

        Args:
            last_name: Last name prefix; LIKE wildcards are escaped.
            pageable: Page index and size.

        Returns:
            The requested page and the total number of matches.
        """
        criteria = Owner.last_name.startswith(last_name, autoescape=True)

        total = self.session.scalar(
            select(func.count()).select_from(Owner).where(criteria)
        ) or 0

        stmt = (
            select(Owner)
            .where(criteria)
            .order_by(Owner.id)
            .offset(pageable.offset)
            .limit(pageable.size)
        )
        owners = list(self.session.scalars(stmt).all())

        logger.debug(
            f"Owner search prefix={last_name!r} page={pageable.page} "
            f"returned {len(owners)} of {total}"
        )
        return Page(owners, pageable, total)

    def save(self, owner: Owner) -> None:
        """Persist the owner together with its pets and visits."""
        self.session.add(owner)
        self.session.commit()

    def discard(self) -> None:
        """Drop unsaved changes made to loaded aggregates during this request."""
        self.session.rollback()


class PetTypeRepository:
    """Read-only access to the PetType reference list."""

    def __init__(self, session: Session | scoped_session):
        self.session = session

    def find_pet_types(self) -> list[PetType]:
        return list(self.session.scalars(select(PetType).order_by(PetType.name)).all())

    def find_by_name(self, name: str) -> PetType | None:
        return self.session.scalars(
            select(PetType).where(PetType.name == name)
        ).first()
