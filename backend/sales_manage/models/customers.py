from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


class Customer(db.Model):
    """
    Customer (得意先) master data: billing address, invoice policy and tax handling.

    customer_code is entered by the operator. staff_id points at the Staff
    member in charge (validated on write, not a database foreign key).
    """
    __tablename__ = "customers"
    __table_args__ = (
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    customer_code = db.Column(db.String(16), nullable=False, unique=True)
    customer_name = db.Column(db.String(255), nullable=False)
    department_name = db.Column(db.String(255), nullable=True)
    honorific = db.Column(db.String(16), nullable=False)

    postal_code = db.Column(db.String(8), nullable=True)
    address1 = db.Column(db.String(255), nullable=True)
    address2 = db.Column(db.String(255), nullable=True)
    phone_number = db.Column(db.String(32), nullable=True)
    fax_number = db.Column(db.String(32), nullable=True)
    email = db.Column(db.String(255), nullable=True)

    # Invoice policy
    invoice_number = db.Column(db.String(14), nullable=True)
    invoice_issuance = db.Column(db.String(16), nullable=False)
    invoice_method = db.Column(db.String(32), nullable=True)
    closing_day = db.Column(db.String(16), nullable=True)
    payment_day = db.Column(db.String(16), nullable=True)
    payment_site_day = db.Column(db.String(16), nullable=True)

    # Tax handling
    tax_processing = db.Column(db.String(32), nullable=False)
    tax_rounding = db.Column(db.String(16), nullable=False)

    # staff.id of the person in charge; left as-is when that staff row is deleted
    staff_id = db.Column(db.Integer, nullable=True, index=True)
    wo_special_code = db.Column(db.String(32), nullable=True)

    created_by = db.Column(db.String(16), nullable=False)
    updated_by = db.Column(db.String(16), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=True, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_code": self.customer_code,
            "customer_name": self.customer_name,
            "department_name": self.department_name,
            "honorific": self.honorific,
            "postal_code": self.postal_code,
            "address1": self.address1,
            "address2": self.address2,
            "phone_number": self.phone_number,
            "fax_number": self.fax_number,
            "email": self.email,
            "invoice_number": self.invoice_number,
            "invoice_issuance": self.invoice_issuance,
            "invoice_method": self.invoice_method,
            "closing_day": self.closing_day,
            "payment_day": self.payment_day,
            "payment_site_day": self.payment_site_day,
            "tax_processing": self.tax_processing,
            "tax_rounding": self.tax_rounding,
            "staff_id": self.staff_id,
            "wo_special_code": self.wo_special_code,
            "created_by": self.created_by,
            "updated_by": self.updated_by,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
