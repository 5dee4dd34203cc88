from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


CALC_FLOOR = 1
CALC_CEIL = 2
CALC_ROUND = 3

CALCULATION_TYPES = {
    CALC_FLOOR: "floor",
    CALC_CEIL: "ceil",
    CALC_ROUND: "round",
}


class TaxRate(db.Model):
    """
    Tax rate master.

    tax_code is generated (2-digit, zero-padded). rate is a percentage;
    calculation_type selects how fractional tax amounts are resolved.
    """
    __tablename__ = "tax_rates"
    __table_args__ = (
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    tax_code = db.Column(db.String(2), nullable=False, unique=True)
    tax_name = db.Column(db.String(64), nullable=False)
    rate = db.Column(db.Float, nullable=False)
    calculation_type = db.Column(db.Integer, nullable=False, default=CALC_ROUND)

    created_by = db.Column(db.String(16), nullable=False)
    updated_by = db.Column(db.String(16), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "tax_code": self.tax_code,
            "tax_name": self.tax_name,
            "rate": self.rate,
            "calculation_type": self.calculation_type,
            "calculation_type_name": CALCULATION_TYPES.get(self.calculation_type),
            "created_by": self.created_by,
            "updated_by": self.updated_by,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
