"""
Sample data for an empty database.

Loads the pet type reference list and a handful of owners with pets and
visits, so the search, detail and booking pages have something to show.
"""

import logging
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session, scoped_session

from petclinic.models import Owner, Pet, PetType, Visit

logger = logging.getLogger(__name__)

PET_TYPES = ("cat", "dog", "lizard", "snake", "bird", "hamster")

# (first name, last name, address, city, telephone, [(pet, birth date, type, [(visit date, description)])])
OWNERS = (
    ("George", "Franklin", "110 W. Liberty St.", "Madison", "6085551023",
     [("Leo", date(2010, 9, 7), "cat", [])]),
    ("Betty", "Davis", "638 Cardinal Ave.", "Sun Prairie", "6085551749",
     [("Basil", date(2012, 8, 6), "hamster", [])]),
    ("Eduardo", "Rodriquez", "2693 Commerce St.", "McFarland", "6085558763",
     [("Rosy", date(2011, 4, 17), "dog", []), ("Jewel", date(2010, 3, 7), "dog", [])]),
    ("Harold", "Davis", "563 Friendly St.", "Windsor", "6085553198",
     [("Iggy", date(2010, 11, 30), "lizard", [])]),
    ("Peter", "McTavish", "2387 S. Fair Way", "Madison", "6085552765",
     [("George", date(2010, 1, 20), "snake", [])]),
    ("Jean", "Coleman", "105 N. Lake St.", "Monona", "6085552654",
     [("Samantha", date(2012, 9, 4), "cat",
       [(date(2013, 1, 1), "rabies shot"), (date(2013, 1, 4), "spayed")]),
      ("Max", date(2012, 9, 4), "cat",
       [(date(2013, 1, 2), "rabies shot"), (date(2013, 1, 3), "neutered")])]),
    ("Jeff", "Black", "1450 Oak Blvd.", "Monona", "6085555387",
     [("Lucky", date(2011, 8, 6), "bird", [])]),
    ("Maria", "Escobito", "345 Maple St.", "Madison", "6085557683",
     [("Mulligan", date(2007, 2, 24), "dog", [])]),
    ("David", "Schroeder", "2749 Blackhawk Trail", "Madison", "6085559435",
     [("Freddy", date(2010, 3, 9), "bird", [])]),
    ("Carlos", "Estaban", "2335 Independence La.", "Waunakee", "6085555487",
     [("Lucky", date(2010, 6, 24), "dog", []), ("Sly", date(2012, 6, 8), "cat", [])]),
)


def seed_database(session: Session | scoped_session) -> bool:
    """
    Insert pet types and sample owners unless pet types already exist.

    Returns:
        True when data was inserted.
    """
    if session.scalar(select(func.count()).select_from(PetType)):
        logger.debug("Pet types present, skipping seed data")
        return False

    types = {name: PetType(name=name) for name in PET_TYPES}
    session.add_all(types.values())

    for first_name, last_name, address, city, telephone, pets in OWNERS:
        owner = Owner(
            first_name=first_name,
            last_name=last_name,
            address=address,
            city=city,
            telephone=telephone,
        )
        for pet_name, birth_date, type_name, visits in pets:
            pet = Pet(name=pet_name, birth_date=birth_date, type=types[type_name])
            for visit_date, description in visits:
                pet.add_visit(Visit(visit_date=visit_date, description=description))
            owner.add_pet(pet)
        session.add(owner)

    session.commit()
    logger.info(f"Seeded {len(PET_TYPES)} pet types and {len(OWNERS)} owners")
    return True
