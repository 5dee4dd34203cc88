# Overview: Service-layer operations for staff; encapsulates business logic and database work.

"""
Staff Service

staff_code is entered by the operator and must be unique. Updates are full
replacements (PUT semantics): required fields must be present every time.
"""

from __future__ import annotations

from ..extensions import db
from ..models import Staff
from ..time_utils import utcnow
from ..validation import (
    AUDIT_USER_MAX_LENGTH,
    ConflictError,
    ModelValidationPolicy,
    NotFoundError,
    enforce_rules_staff,
    require_text,
    validate_payload,
)
from .concurrency import commit_or_conflict


STAFF_POLICY = ModelValidationPolicy(
    writable_fields={
        "staff_code",
        "staff_name",
        "email",
        "department",
        "position",
        "phone_number",
        "is_active",
    },
    required_on_create={"staff_code", "staff_name", "is_active"},
    read_only_fields={"id", "created_at", "updated_at", "created_by", "updated_by"},
)

DUPLICATE_MESSAGE = "Staff code '{code}' already exists"


def list_staff() -> list[Staff]:
    return db.session.query(Staff).order_by(Staff.staff_code.asc()).all()


def get_staff(staff_id: int) -> Staff:
    staff = db.session.query(Staff).filter_by(id=staff_id).first()
    if not staff:
        raise NotFoundError("Staff member not found")
    return staff


def find_staff_by_code(staff_code: str) -> Staff | None:
    if not staff_code:
        return None
    return db.session.query(Staff).filter_by(staff_code=staff_code.strip()).first()


def _clean(payload: dict) -> dict:
    patch = validate_payload(model=Staff, payload=payload, policy=STAFF_POLICY)
    enforce_rules_staff(patch)
    return patch


def create_staff(payload: dict, *, created_by: str) -> Staff:
    """
    Raises:
        ValidationError: If required fields are missing or malformed
        ConflictError: If staff_code is already used
    """
    patch = _clean(payload)
    created_by = require_text(created_by, "created_by", AUDIT_USER_MAX_LENGTH)

    message = DUPLICATE_MESSAGE.format(code=patch["staff_code"])
    if find_staff_by_code(patch["staff_code"]):
        raise ConflictError(message)

    now = utcnow()
    staff = Staff(
        **patch,
        created_by=created_by,
        updated_by=created_by,
        created_at=now,
        updated_at=now,
    )
    db.session.add(staff)
    commit_or_conflict(message)

    db.session.refresh(staff)
    return staff


def update_staff(staff_id: int, payload: dict, *, updated_by: str) -> Staff:
    """
    Raises:
        NotFoundError: If staff_id does not exist
        ValidationError: If required fields are missing or malformed
        ConflictError: If another staff member already uses staff_code
    """
    staff = get_staff(staff_id)
    patch = _clean(payload)
    updated_by = require_text(updated_by, "updated_by", AUDIT_USER_MAX_LENGTH)

    message = DUPLICATE_MESSAGE.format(code=patch["staff_code"])
    existing = db.session.query(Staff).filter(
        Staff.staff_code == patch["staff_code"],
        Staff.id != staff.id,
    ).first()
    if existing:
        raise ConflictError(message)

    # Full replacement: optional fields omitted from the payload are cleared
    for key in STAFF_POLICY.writable_fields:
        setattr(staff, key, patch.get(key))
    staff.updated_by = updated_by
    staff.updated_at = utcnow()
    commit_or_conflict(message)

    db.session.refresh(staff)
    return staff


def delete_staff(staff_id: int) -> None:
    """
    Hard delete. Customers referencing this staff member keep the stale staff_id.
    """
    staff = get_staff(staff_id)
    db.session.delete(staff)
    db.session.commit()
