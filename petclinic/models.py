"""
Database models for the PetClinic application.

Owner is the aggregate root: pets and their visits are added to an
owner's collections in memory and persisted when the owner is saved.
Pet and Visit refer back to their parent only through a foreign key
column; the parent holds the ORM relationship.
"""

from datetime import date

from petclinic import db


class PetType(db.Model):
    """Read-only reference data (cat, dog, ...)."""

    __tablename__ = "types"

    id: int = db.Column(db.Integer, primary_key=True)
    name: str = db.Column(db.String(80), nullable=False, unique=True)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<PetType {self.id}: {self.name}>"


class Visit(db.Model):
    """
    A single booked visit for a pet.

    Attributes:
        id: Unique identifier, None until the owning pet's owner is saved.
        visit_date: Day of the visit; defaults to today.
        description: Reason for the visit.
        pet_id: Identifier of the pet the visit belongs to.
    """

    __tablename__ = "visits"

    id: int = db.Column(db.Integer, primary_key=True)
    visit_date: date | None = db.Column(db.Date, nullable=True)
    description: str | None = db.Column(db.String(255), nullable=True)
    pet_id: int = db.Column(db.Integer, db.ForeignKey("pets.id"), index=True)

    def __init__(self, **kwargs):
        kwargs.setdefault("visit_date", date.today())
        super().__init__(**kwargs)

    def is_new(self) -> bool:
        return self.id is None

    def __repr__(self) -> str:
        return f"<Visit {self.id}: {self.visit_date}>"


class Pet(db.Model):
    """
    A pet belonging to exactly one owner.

    Attributes:
        id: Unique identifier, None until the owner is saved.
        name: Pet name, unique per owner (case-insensitive).
        birth_date: Date of birth; never in the future.
        type_id: Identifier of the pet's PetType.
        owner_id: Identifier of the owning Owner.
    """

    __tablename__ = "pets"

    id: int = db.Column(db.Integer, primary_key=True)
    name: str | None = db.Column(db.String(30), nullable=True)
    birth_date: date | None = db.Column(db.Date, nullable=True)
    type_id: int | None = db.Column(db.Integer, db.ForeignKey("types.id"), nullable=True)
    owner_id: int = db.Column(db.Integer, db.ForeignKey("owners.id"), index=True)

    type = db.relationship(PetType, lazy="joined")
    visits = db.relationship(
        Visit,
        cascade="all, delete-orphan",
        order_by=Visit.visit_date,
    )

    def is_new(self) -> bool:
        return self.id is None

    def add_visit(self, visit: Visit) -> None:
        """Attach a visit; attaching the same visit twice is a no-op."""
        if visit not in self.visits:
            self.visits.append(visit)

    def __repr__(self) -> str:
        return f"<Pet {self.id}: {self.name}>"


class Owner(db.Model):
    """
    A pet owner, the aggregate root for pets and visits.

    Attributes:
        id: Unique identifier, assigned on first save.
        first_name: Given name.
        last_name: Family name, used for searching.
        address: Street address.
        city: City.
        telephone: Ten-digit telephone number.
        pets: Owned pets ordered by name.
    """

    __tablename__ = "owners"

    id: int = db.Column(db.Integer, primary_key=True)
    first_name: str = db.Column(db.String(30), nullable=False, default="")
    last_name: str = db.Column(db.String(30), nullable=False, default="", index=True)
    address: str = db.Column(db.String(255), nullable=False, default="")
    city: str = db.Column(db.String(80), nullable=False, default="")
    telephone: str = db.Column(db.String(20), nullable=False, default="")

    pets = db.relationship(
        Pet,
        cascade="all, delete-orphan",
        order_by=Pet.name,
    )

    def is_new(self) -> bool:
        return self.id is None

    def add_pet(self, pet: Pet) -> None:
        """Add a pet to the collection; pets that already have an id are ignored."""
        if pet.is_new():
            self.pets.append(pet)

    def get_pet(self, name: str, ignore_new: bool = False) -> Pet | None:
        """
        Return the pet with the given name, compared case-insensitively.

        Args:
            name: Pet name to look for.
            ignore_new: Skip pets that have not been persisted yet.

        Returns:
            Matching pet, or None.
        """
        wanted = name.lower()
        for pet in self.pets:
            if pet.name is not None and pet.name.lower() == wanted:
                if not ignore_new or not pet.is_new():
                    return pet
        return None

    def get_pet_by_id(self, pet_id: int) -> Pet | None:
        """Return the persisted pet with the given id, or None."""
        for pet in self.pets:
            if not pet.is_new() and pet.id == pet_id:
                return pet
        return None

    def add_visit(self, pet_id: int, visit: Visit) -> None:
        """
        Attach a visit to one of this owner's pets.

        Raises:
            ValueError: If the owner has no pet with ``pet_id``.
        """
        pet = self.get_pet_by_id(pet_id)
        if pet is None:
            raise ValueError(f"Invalid Pet identifier: {pet_id}")
        pet.add_visit(visit)

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def __repr__(self) -> str:
        return f"<Owner {self.id}: {self.full_name}>"
