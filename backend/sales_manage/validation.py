from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeMeta


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """Duplicate business key (e.g., customer_code already exists)."""


class NotFoundError(LookupError):
    """404-level missing record."""


EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_RE = re.compile(r"^\d[\d-]*\d$")
POSTAL_CODE_RE = re.compile(r"^\d{3}-?\d{4}$")
INVOICE_NUMBER_RE = re.compile(r"^T?\d{13}$")
BUSINESS_CODE_RE = re.compile(r"^[0-9A-Za-z-]+$")

CUSTOMER_CODE_MAX_LENGTH = 16
STAFF_CODE_MAX_LENGTH = 10

# created_by / updated_by columns
AUDIT_USER_MAX_LENGTH = 16


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: what clients are allowed to set (security boundary)
    - required_on_create: fields required for POST/PUT
    - read_only_fields: server-owned keys that clients may echo back; dropped silently
    """
    writable_fields: set[str]
    required_on_create: set[str] = field(default_factory=set)
    read_only_fields: set[str] = field(default_factory=lambda: {"id", "created_at", "updated_at"})


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _coerce_value(col, value: Any):
    coltype = col.type

    if value is None:
        return None

    # Integers - strict validation to reject floats and scientific notation
    if isinstance(coltype, Integer):
        # Already an int (but not bool which is a subclass of int)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return None
            if not stripped.lstrip("-").isdigit():
                raise ValidationError(f"{col.key} must be an integer")
            return int(stripped)
        raise ValidationError(f"{col.key} must be an integer")

    if isinstance(coltype, Float):
        if isinstance(value, bool):
            raise ValidationError(f"{col.key} must be a number")
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                raise ValidationError(f"{col.key} must be a number")
        raise ValidationError(f"{col.key} must be a number")

    # Booleans
    if isinstance(coltype, Boolean):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        # fallback: truthiness
        return bool(value)

    # Strings / Text
    if isinstance(coltype, (String, Text)):
        return str(value).strip()

    # Default: leave as-is
    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool = False,
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - SQLAlchemy column metadata (nullable, type, String length)
    - a policy allowlist (writable_fields)
    - required_on_create (if partial=False)
    Returns a cleaned patch dict with only writable fields.

    Optional string columns submitted as "" are stored as NULL.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    payload = {k: v for k, v in payload.items() if k not in policy.read_only_fields}

    if not partial:
        missing = sorted(
            f for f in policy.required_on_create
            if payload.get(f) is None or (isinstance(payload.get(f), str) and not payload[f].strip())
        )
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    cols = _columns_by_key(model)

    # Reject unknown / non-writable fields
    for k in payload.keys():
        if k not in policy.writable_fields:
            raise ValidationError(f"Field not allowed: {k}")
        if k not in cols:
            raise ValidationError(f"Unknown field: {k}")

    patch: dict = {}

    for k, raw in payload.items():
        col = cols[k]

        val = _coerce_value(col, raw)

        if isinstance(val, str) and val == "":
            val = None

        # NULL handling
        if val is None:
            if not col.nullable:
                raise ValidationError(f"{k} cannot be blank")
            patch[k] = None
            continue

        # Max length check for String(n)
        if isinstance(col.type, String) and col.type.length and isinstance(val, str):
            if len(val) > col.type.length:
                raise ValidationError(f"{k} exceeds max length {col.type.length}")

        patch[k] = val

    return patch


def require_text(value: Any, name: str, max_length: int | None = None) -> str:
    """
    Return the stripped string or raise ValidationError when blank.

    max_length mirrors the String(n) column the value is stored in.
    """
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required")
    text = str(value).strip()
    if max_length is not None and len(text) > max_length:
        raise ValidationError(f"{name} exceeds max length {max_length}")
    return text


def json_object(data: Any) -> dict:
    """Request body as a dict; a missing body is treated as empty."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON payload")
    return data


def validate_email(value: str, name: str = "email") -> str:
    value = value.strip()
    if not EMAIL_RE.match(value):
        raise ValidationError(f"{name} is not a valid email address")
    return value


def validate_phone(value: str, name: str = "phone_number") -> str:
    digits = value.replace("-", "")
    if not PHONE_RE.match(value) or not 10 <= len(digits) <= 11:
        raise ValidationError(f"{name} must be 10-11 digits (hyphens allowed)")
    return value


def validate_business_code(value: str, name: str, max_length: int) -> str:
    if len(value) > max_length or not BUSINESS_CODE_RE.match(value):
        raise ValidationError(
            f"{name} must be 1-{max_length} characters of letters, digits or '-'"
        )
    return value


def enforce_rules_staff(patch: dict) -> None:
    if patch.get("staff_code") is not None:
        validate_business_code(patch["staff_code"], "staff_code", STAFF_CODE_MAX_LENGTH)
    if patch.get("email") is not None:
        validate_email(patch["email"])
    if patch.get("phone_number") is not None:
        validate_phone(patch["phone_number"])


def enforce_rules_customer(patch: dict) -> None:
    if patch.get("customer_code") is not None:
        validate_business_code(patch["customer_code"], "customer_code", CUSTOMER_CODE_MAX_LENGTH)
    if patch.get("email") is not None:
        validate_email(patch["email"])
    for key in ("phone_number", "fax_number"):
        if patch.get(key) is not None:
            validate_phone(patch[key], key)
    if patch.get("postal_code") is not None and not POSTAL_CODE_RE.match(patch["postal_code"]):
        raise ValidationError("postal_code must be 7 digits (e.g. 100-0001)")
    if patch.get("invoice_number") is not None and not INVOICE_NUMBER_RE.match(patch["invoice_number"]):
        raise ValidationError("invoice_number must be 13 digits, optionally prefixed with 'T'")
