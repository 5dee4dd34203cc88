# Overview: Service-layer operations for business codes; encapsulates code generation.

"""
Code Service - sequential, zero-padded business codes

Master tables whose code is not entered by the operator (users.user_id,
tax_rates.tax_code, locations.location_code) get the successor of the
highest numeric code already stored, left-padded with '0' to a fixed width.

COERCION: Stored codes that are empty or not purely decimal are ignored
when looking for the maximum. They never block generation.

CONCURRENCY: The scan and the INSERT share one transaction.
insert_with_generated_code() retries the whole generate-and-insert step when
a concurrent writer took the same code first (unique constraint violation).
"""

from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import IntegrityError, OperationalError

from ..extensions import db
from ..validation import ConflictError
from .concurrency import run_with_retry


USER_ID_WIDTH = 5
TAX_CODE_WIDTH = 2
LOCATION_CODE_WIDTH = 2


class CodeExhaustedError(ConflictError):
    """Raised when the successor code no longer fits the column width."""


def coerce_code(value) -> int | None:
    """Return the integer value of a stored code, or None if it is not numeric."""
    if value is None:
        return None
    text = str(value).strip()
    # ASCII only: str.isdigit also accepts superscripts that int() rejects
    if not text or not text.isascii() or not text.isdigit():
        return None
    return int(text)


def format_code(number: int, width: int) -> str:
    """Render number as a zero-padded decimal string of exactly width digits."""
    code = str(number).zfill(width)
    if len(code) > width:
        raise CodeExhaustedError(
            f"No codes left: {code} exceeds the {width}-digit code width"
        )
    return code


def max_numeric_code(column) -> int:
    """Highest numeric value stored in column, 0 for an empty table."""
    values = (coerce_code(value) for (value,) in db.session.query(column))
    return max((v for v in values if v is not None), default=0)


def next_code(column, width: int) -> str:
    """
    Next code for column: max numeric code + 1, zero-padded to width.

    Example: tax codes {"01", "02"} -> "03"; no rows -> "01".
    """
    return format_code(max_numeric_code(column) + 1, width)


def insert_with_generated_code(build_row, *, conflict_message: str):
    """
    Build a row with build_row() (which calls next_code), insert and commit it.

    build_row may also raise ConflictError for its own duplicate checks;
    those are never retried. Returns the committed row, refreshed from the DB.
    """
    attempts = current_app.config.get("CODE_RETRY_ATTEMPTS", 3)

    def _op():
        row = build_row()
        db.session.add(row)
        db.session.commit()
        return row

    try:
        row = run_with_retry(_op, attempts=attempts, retry_on=(IntegrityError, OperationalError))
    except IntegrityError:
        raise ConflictError(conflict_message)

    db.session.refresh(row)
    return row
