"""
Shared pytest fixtures for the PetClinic test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by providing fresh data for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories for the Owner aggregate
- Database setup/teardown
- Test client creation
"""

import os
from datetime import date, timedelta

import pytest
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from petclinic import create_app, db
from petclinic.models import Owner, Pet, PetType, Visit


# Initialize Faker for generating test data
fake = Faker()

PET_TYPE_NAMES = ("bird", "cat", "dog", "hamster", "lizard", "snake")


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    The 'session' scope means the same app instance is reused
    for all tests; the in-memory database is recreated per test
    by the ``db_session`` fixture.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Args:
        app: Flask application fixture.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    This fixture ensures test isolation by:
    1. Creating all tables before the test
    2. Providing a clean database session
    3. Dropping all tables after the test

    Args:
        app: Flask application fixture.

    Yields:
        Flask-SQLAlchemy extension bound to the test app.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def pet_types(db_session) -> dict[str, PetType]:
    """
    Insert the pet type reference list.

    Returns:
        Mapping of type name to persisted PetType.
    """
    types = {name: PetType(name=name) for name in PET_TYPE_NAMES}
    db_session.session.add_all(types.values())
    db_session.session.commit()
    return types


@pytest.fixture
def owner_factory(db_session):
    """
    Factory fixture for creating persisted Owner instances.

    Example:
        def test_something(owner_factory):
            owner = owner_factory(last_name="Davis")
            assert owner.id is not None
    """

    def _create_owner(
        first_name: str | None = None,
        last_name: str | None = None,
        address: str | None = None,
        city: str | None = None,
        telephone: str | None = None,
    ) -> Owner:
        owner = Owner(
            first_name=first_name or fake.first_name(),
            last_name=last_name or fake.last_name(),
            address=address or fake.street_address(),
            city=city or fake.city(),
            telephone=telephone or fake.numerify("##########"),
        )
        db_session.session.add(owner)
        db_session.session.commit()
        return owner

    return _create_owner


@pytest.fixture
def pet_factory(db_session, pet_types):
    """
    Factory fixture that adds a persisted pet to an owner.

    Pets are saved through their owner, the same way the handlers do it.
    """

    def _create_pet(
        owner: Owner,
        name: str | None = None,
        birth_date: date | None = None,
        type_name: str = "dog",
    ) -> Pet:
        pet = Pet(
            name=name or fake.unique.first_name(),
            birth_date=birth_date or fake.date_between(start_date="-10y", end_date="-1y"),
            type=pet_types[type_name],
        )
        owner.add_pet(pet)
        db_session.session.add(owner)
        db_session.session.commit()
        return pet

    return _create_pet


@pytest.fixture
def sample_owner(owner_factory) -> Owner:
    """A single owner for tests that just need one."""
    return owner_factory(
        first_name="George",
        last_name="Franklin",
        address="110 W. Liberty St.",
        city="Madison",
        telephone="6085551023",
    )


@pytest.fixture
def sample_pet(pet_factory, sample_owner) -> Pet:
    """A cat named Leo belonging to ``sample_owner``."""
    return pet_factory(sample_owner, name="Leo", birth_date=date(2010, 9, 7), type_name="cat")


@pytest.fixture
def sample_visit(db_session, sample_owner, sample_pet) -> Visit:
    """A past visit booked for ``sample_pet``."""
    visit = Visit(visit_date=date(2013, 1, 1), description="rabies shot")
    sample_owner.add_visit(sample_pet.id, visit)
    db_session.session.commit()
    return visit


# -----------------------------------------------------------------------------
# Form Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_owner_form() -> dict[str, str]:
    """Owner form fields that pass validation."""
    return {
        "firstName": "Joe",
        "lastName": "Bloggs",
        "address": "123 Caramel Street",
        "city": "London",
        "telephone": "1316761638",
    }


@pytest.fixture
def valid_pet_form() -> dict[str, str]:
    """Pet form fields that pass validation."""
    return {
        "name": "Rex",
        "birthDate": (date.today() - timedelta(days=365)).isoformat(),
        "type": "dog",
    }
