"""
Pytest fixtures for the sales management backend tests.

Provides an in-memory database, a test client, per-test table cleanup and
small factories for master records.
"""

import pytest
from sales_manage import create_app
from sales_manage.config import TestingConfig
from sales_manage.extensions import db
from sales_manage.models import Location, Staff, TaxRate
from sales_manage.services import auth_service
from sales_manage.time_utils import utcnow


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app(TestingConfig)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function', autouse=True)
def db_session(app):
    """Empty every table before each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def user(db_session):
    """Registered user 00001 with password 'password1'."""
    return auth_service.create_user("user1@example.com", "password1")


@pytest.fixture(scope='function')
def make_tax_rate(db_session):
    """Insert a tax rate with an explicit code (bypasses code generation)."""
    def _make(tax_code, tax_name=None, rate=10, calculation_type=3):
        now = utcnow()
        tax_rate = TaxRate(
            tax_code=tax_code,
            tax_name=tax_name or f"Tax {tax_code}",
            rate=rate,
            calculation_type=calculation_type,
            created_by="00001",
            updated_by="00001",
            created_at=now,
            updated_at=now,
        )
        db_session.add(tax_rate)
        db_session.commit()
        return tax_rate
    return _make


@pytest.fixture(scope='function')
def make_location(db_session):
    """Insert a location with an explicit code."""
    def _make(location_code, location_name=None):
        now = utcnow()
        location = Location(
            location_code=location_code,
            location_name=location_name or f"Location {location_code}",
            created_by="00001",
            updated_by="00001",
            created_at=now,
            updated_at=now,
        )
        db_session.add(location)
        db_session.commit()
        return location
    return _make


@pytest.fixture(scope='function')
def staff_member(db_session):
    now = utcnow()
    staff = Staff(
        staff_code="00001",
        staff_name="山田 太郎",
        email="yamada@example.com",
        is_active=True,
        created_by="system",
        created_at=now,
        updated_at=now,
    )
    db_session.add(staff)
    db_session.commit()
    return staff
