# Overview: Service-layer operations for tax rates; encapsulates business logic and database work.

"""
Tax Rate Service

tax_code is generated (2 digits). Name, rate and calculation type are
editable; the code never changes after creation.

CALCULATION TYPES:
- 1: floor (切り捨て)
- 2: ceil (切り上げ)
- 3: round half up (四捨五入)
"""

from __future__ import annotations

from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, InvalidOperation

from ..extensions import db
from ..models import TaxRate
from ..models.tax import CALCULATION_TYPES, CALC_CEIL, CALC_FLOOR
from ..time_utils import utcnow
from ..validation import AUDIT_USER_MAX_LENGTH, NotFoundError, ValidationError, require_text
from .code_service import TAX_CODE_WIDTH, coerce_code, insert_with_generated_code, next_code


MAX_RATE = 100
TAX_NAME_MAX_LENGTH = 64

_ROUNDING = {
    CALC_FLOOR: ROUND_FLOOR,
    CALC_CEIL: ROUND_CEILING,
}


def validate_rate(rate) -> float:
    if rate is None or isinstance(rate, bool) or str(rate).strip() == "":
        raise ValidationError("rate is required")
    try:
        value = Decimal(str(rate).strip())
    except InvalidOperation:
        raise ValidationError("rate must be a number")
    if not value.is_finite() or value < 0 or value > MAX_RATE:
        raise ValidationError(f"rate must be between 0 and {MAX_RATE}")
    return float(value)


def validate_calculation_type(calculation_type) -> int:
    if calculation_type is None or isinstance(calculation_type, bool):
        raise ValidationError("calculation_type is required")
    try:
        value = int(str(calculation_type).strip())
    except ValueError:
        raise ValidationError("calculation_type must be 1 (floor), 2 (ceil) or 3 (round)")
    if value not in CALCULATION_TYPES:
        raise ValidationError("calculation_type must be 1 (floor), 2 (ceil) or 3 (round)")
    return value


def calculate_tax(amount: int, rate: float, calculation_type: int) -> int:
    """
    Tax on an integer amount (yen) at rate percent, resolved to an integer
    according to calculation_type.

    calculate_tax(1099, 10, 1) == 109; with 2 -> 110; with 3 -> 110.
    """
    raw = Decimal(amount) * Decimal(str(rate)) / Decimal(100)
    rounding = _ROUNDING.get(calculation_type, ROUND_HALF_UP)
    return int(raw.quantize(Decimal(1), rounding=rounding))


def generate_next_tax_code() -> str:
    return next_code(TaxRate.tax_code, TAX_CODE_WIDTH)


def list_tax_rates() -> list[TaxRate]:
    """All tax rates ordered by numeric tax code."""
    rows = db.session.query(TaxRate).all()
    return sorted(rows, key=lambda r: (coerce_code(r.tax_code) is None, coerce_code(r.tax_code) or 0, r.tax_code))


def find_tax_rate_by_code(tax_code: str) -> TaxRate | None:
    if not tax_code:
        return None
    return db.session.query(TaxRate).filter_by(tax_code=tax_code).first()


def get_tax_rate(tax_code: str) -> TaxRate:
    """
    Raises:
        NotFoundError: If no tax rate has this code
    """
    tax_rate = find_tax_rate_by_code(tax_code)
    if not tax_rate:
        raise NotFoundError(f"Tax code {tax_code} does not exist")
    return tax_rate


def create_tax_rate(
    *,
    tax_name: str,
    rate,
    calculation_type,
    created_by: str,
) -> TaxRate:
    """
    Create a tax rate with the next free tax_code.

    Raises:
        ValidationError: If a field is missing or out of range
        ConflictError: If the 2-digit code space is exhausted
    """
    tax_name = require_text(tax_name, "tax_name", TAX_NAME_MAX_LENGTH)
    rate = validate_rate(rate)
    calculation_type = validate_calculation_type(calculation_type)
    created_by = require_text(created_by, "user_id", AUDIT_USER_MAX_LENGTH)

    def _build() -> TaxRate:
        now = utcnow()
        return TaxRate(
            tax_code=generate_next_tax_code(),
            tax_name=tax_name,
            rate=rate,
            calculation_type=calculation_type,
            created_by=created_by,
            updated_by=created_by,
            created_at=now,
            updated_at=now,
        )

    return insert_with_generated_code(_build, conflict_message="Tax code already exists")


def update_tax_rate(
    tax_code: str,
    *,
    tax_name: str,
    rate,
    calculation_type,
    updated_by: str,
) -> TaxRate:
    """
    Overwrite name, rate and calculation type of an existing tax rate.

    Raises:
        NotFoundError: If tax_code does not exist
        ValidationError: If a field is missing or out of range
    """
    tax_rate = get_tax_rate(tax_code)

    tax_name = require_text(tax_name, "tax_name", TAX_NAME_MAX_LENGTH)
    rate = validate_rate(rate)
    calculation_type = validate_calculation_type(calculation_type)
    updated_by = require_text(updated_by, "user_id", AUDIT_USER_MAX_LENGTH)

    tax_rate.tax_name = tax_name
    tax_rate.rate = rate
    tax_rate.calculation_type = calculation_type
    tax_rate.updated_by = updated_by
    tax_rate.updated_at = utcnow()

    db.session.commit()
    db.session.refresh(tax_rate)
    return tax_rate


def delete_tax_rate(tax_code: str) -> None:
    """
    Hard delete.

    Raises:
        NotFoundError: If tax_code does not exist
    """
    tax_rate = get_tax_rate(tax_code)
    db.session.delete(tax_rate)
    db.session.commit()
