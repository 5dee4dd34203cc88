# Overview: Service-layer operations for locations; encapsulates business logic and database work.

"""
Location Service

location_code is generated (2 digits); only the name is editable.
"""

from __future__ import annotations

from ..extensions import db
from ..models import Location
from ..time_utils import utcnow
from ..validation import AUDIT_USER_MAX_LENGTH, NotFoundError, require_text
from .code_service import LOCATION_CODE_WIDTH, coerce_code, insert_with_generated_code, next_code


LOCATION_NAME_MAX_LENGTH = 128


def generate_next_location_code() -> str:
    return next_code(Location.location_code, LOCATION_CODE_WIDTH)


def list_locations() -> list[Location]:
    """All locations ordered by numeric location code."""
    rows = db.session.query(Location).all()
    return sorted(
        rows,
        key=lambda r: (coerce_code(r.location_code) is None, coerce_code(r.location_code) or 0, r.location_code),
    )


def find_location_by_code(location_code: str) -> Location | None:
    if not location_code:
        return None
    return db.session.query(Location).filter_by(location_code=location_code).first()


def get_location(location_code: str) -> Location:
    location = find_location_by_code(location_code)
    if not location:
        raise NotFoundError(f"Location code {location_code} does not exist")
    return location


def create_location(*, location_name: str, created_by: str) -> Location:
    """
    Create a location with the next free location_code.

    Raises:
        ValidationError: If location_name or created_by is blank
        ConflictError: If the 2-digit code space is exhausted
    """
    location_name = require_text(location_name, "location_name", LOCATION_NAME_MAX_LENGTH)
    created_by = require_text(created_by, "user_id", AUDIT_USER_MAX_LENGTH)

    def _build() -> Location:
        now = utcnow()
        return Location(
            location_code=generate_next_location_code(),
            location_name=location_name,
            created_by=created_by,
            updated_by=created_by,
            created_at=now,
            updated_at=now,
        )

    return insert_with_generated_code(_build, conflict_message="Location code already exists")


def update_location(location_code: str, *, location_name: str, updated_by: str) -> Location:
    """
    Raises:
        NotFoundError: If location_code does not exist
        ValidationError: If location_name or updated_by is blank
    """
    location = get_location(location_code)

    location_name = require_text(location_name, "location_name", LOCATION_NAME_MAX_LENGTH)
    updated_by = require_text(updated_by, "user_id", AUDIT_USER_MAX_LENGTH)

    location.location_name = location_name
    location.updated_by = updated_by
    location.updated_at = utcnow()

    db.session.commit()
    db.session.refresh(location)
    return location


def delete_location(location_code: str) -> None:
    """
    Raises:
        NotFoundError: If location_code does not exist
    """
    location = get_location(location_code)
    db.session.delete(location)
    db.session.commit()
