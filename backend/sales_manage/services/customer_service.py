# Overview: Service-layer operations for customers; encapsulates business logic and database work.

"""
Customer Service

customer_code is entered by the operator and must be unique. Updates are
full replacements: the client sends the whole record every time.

STAFF REFERENCE: staff_id, when given, must name an existing staff row at
write time. Deleting that staff row later leaves the customer untouched.
"""

from __future__ import annotations

from ..extensions import db
from ..models import Customer, Staff
from ..time_utils import utcnow
from ..validation import (
    AUDIT_USER_MAX_LENGTH,
    ConflictError,
    ModelValidationPolicy,
    NotFoundError,
    ValidationError,
    enforce_rules_customer,
    require_text,
    validate_payload,
)
from .concurrency import commit_or_conflict


CUSTOMER_POLICY = ModelValidationPolicy(
    writable_fields={
        "customer_code",
        "customer_name",
        "department_name",
        "honorific",
        "postal_code",
        "address1",
        "address2",
        "phone_number",
        "fax_number",
        "email",
        "invoice_number",
        "invoice_issuance",
        "invoice_method",
        "closing_day",
        "payment_day",
        "payment_site_day",
        "tax_processing",
        "tax_rounding",
        "staff_id",
        "wo_special_code",
    },
    required_on_create={
        "customer_code",
        "customer_name",
        "honorific",
        "invoice_issuance",
        "tax_processing",
        "tax_rounding",
    },
    read_only_fields={"id", "created_at", "updated_at", "created_by", "updated_by"},
)

DUPLICATE_MESSAGE = "Customer code '{code}' already exists"


def list_customers() -> list[Customer]:
    return db.session.query(Customer).order_by(Customer.customer_code.asc()).all()


def get_customer(customer_id: int) -> Customer:
    customer = db.session.query(Customer).filter_by(id=customer_id).first()
    if not customer:
        raise NotFoundError("Customer not found")
    return customer


def find_customer_by_code(customer_code: str) -> Customer | None:
    if not customer_code:
        return None
    return db.session.query(Customer).filter_by(customer_code=customer_code.strip()).first()


def _clean(payload: dict) -> dict:
    patch = validate_payload(model=Customer, payload=payload, policy=CUSTOMER_POLICY)
    enforce_rules_customer(patch)

    staff_id = patch.get("staff_id")
    if staff_id is not None and not db.session.query(Staff.id).filter_by(id=staff_id).first():
        raise ValidationError(f"Staff member {staff_id} does not exist")
    return patch


def create_customer(payload: dict, *, created_by: str) -> Customer:
    """
    Raises:
        ValidationError: If required fields are missing or malformed
        ConflictError: If customer_code is already used
    """
    patch = _clean(payload)
    created_by = require_text(created_by, "created_by", AUDIT_USER_MAX_LENGTH)

    message = DUPLICATE_MESSAGE.format(code=patch["customer_code"])
    if find_customer_by_code(patch["customer_code"]):
        raise ConflictError(message)

    now = utcnow()
    customer = Customer(
        **patch,
        created_by=created_by,
        updated_by=created_by,
        created_at=now,
        updated_at=now,
    )
    db.session.add(customer)
    commit_or_conflict(message)

    db.session.refresh(customer)
    return customer


def update_customer(customer_id: int, payload: dict, *, updated_by: str) -> Customer:
    """
    Raises:
        NotFoundError: If customer_id does not exist
        ValidationError: If required fields are missing or malformed
        ConflictError: If another customer already uses customer_code
    """
    customer = get_customer(customer_id)
    patch = _clean(payload)
    updated_by = require_text(updated_by, "updated_by", AUDIT_USER_MAX_LENGTH)

    message = DUPLICATE_MESSAGE.format(code=patch["customer_code"])
    existing = db.session.query(Customer).filter(
        Customer.customer_code == patch["customer_code"],
        Customer.id != customer.id,
    ).first()
    if existing:
        raise ConflictError(message)

    for key in CUSTOMER_POLICY.writable_fields:
        setattr(customer, key, patch.get(key))
    customer.updated_by = updated_by
    customer.updated_at = utcnow()
    commit_or_conflict(message)

    db.session.refresh(customer)
    return customer


def delete_customer(customer_id: int) -> None:
    customer = get_customer(customer_id)
    db.session.delete(customer)
    db.session.commit()
