"""
In-memory repositories for handler unit tests.

Handlers take their repositories as constructor arguments, so unit tests
swap the SQLAlchemy-backed ones for these dictionaries and exercise the
request logic without an application or database.
"""

import itertools
from datetime import date

import pytest

from petclinic.models import Owner, Pet, PetType, Visit
from petclinic.repositories import OwnerRepository, Page, PageRequest


class InMemoryOwnerRepository(OwnerRepository):
    """Owner storage that assigns ids on save like the database would."""

    def __init__(self):
        self.owners: dict[int, Owner] = {}
        self.save_count = 0
        self.discard_count = 0
        self._owner_ids = itertools.count(1)
        self._pet_ids = itertools.count(1)
        self._visit_ids = itertools.count(1)

    def find_by_id(self, owner_id: int) -> Owner | None:
        return self.owners.get(owner_id)

    def find_by_last_name_starting_with(self, last_name: str, pageable: PageRequest) -> Page[Owner]:
        matches = sorted(
            (owner for owner in self.owners.values() if (owner.last_name or "").startswith(last_name)),
            key=lambda owner: owner.id,
        )
        content = matches[pageable.offset:pageable.offset + pageable.size]
        return Page(content, pageable, len(matches))

    def save(self, owner: Owner) -> None:
        if owner.id is None:
            owner.id = next(self._owner_ids)
        for pet in owner.pets:
            if pet.id is None:
                pet.id = next(self._pet_ids)
            for visit in pet.visits:
                if visit.id is None:
                    visit.id = next(self._visit_ids)
        self.owners[owner.id] = owner
        self.save_count += 1

    def discard(self) -> None:
        self.discard_count += 1


class InMemoryPetTypeRepository:
    def __init__(self, names):
        self.types = [PetType(id=index, name=name) for index, name in enumerate(sorted(names), start=1)]

    def find_pet_types(self) -> list[PetType]:
        return list(self.types)

    def find_by_name(self, name: str) -> PetType | None:
        return next((pet_type for pet_type in self.types if pet_type.name == name), None)


@pytest.fixture
def owner_repository() -> InMemoryOwnerRepository:
    return InMemoryOwnerRepository()


@pytest.fixture
def type_repository() -> InMemoryPetTypeRepository:
    return InMemoryPetTypeRepository(["bird", "cat", "dog", "hamster", "lizard", "snake"])


@pytest.fixture
def stored_owner(owner_repository):
    """
    Factory that saves an owner, optionally with pets, into the fake repository.

    Pets are given as ``(name, birth_date)`` pairs.
    """

    def _store(last_name: str = "Franklin", pets=(), first_name: str = "George") -> Owner:
        owner = Owner(
            first_name=first_name,
            last_name=last_name,
            address="110 W. Liberty St.",
            city="Madison",
            telephone="6085551023",
        )
        for pet_name, birth_date in pets:
            owner.add_pet(Pet(name=pet_name, birth_date=birth_date))
        owner_repository.save(owner)
        return owner

    return _store


@pytest.fixture
def owner_with_pet(stored_owner, owner_repository) -> Owner:
    """Owner "Franklin" with one pet, Leo, that already has one visit."""
    owner = stored_owner(pets=[("Leo", date(2010, 9, 7))])
    owner.pets[0].add_visit(Visit(visit_date=date(2013, 1, 1), description="rabies shot"))
    owner_repository.save(owner)
    owner_repository.save_count = 0
    return owner
