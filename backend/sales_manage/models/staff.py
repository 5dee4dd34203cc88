from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


class Staff(db.Model):
    """
    Sales staff master (the person in charge of a customer account).

    staff_code is entered by the operator, not generated.
    """
    __tablename__ = "staff"
    __table_args__ = (
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    staff_code = db.Column(db.String(10), nullable=False, unique=True)
    staff_name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    department = db.Column(db.String(128), nullable=True)
    position = db.Column(db.String(128), nullable=True)
    phone_number = db.Column(db.String(32), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_by = db.Column(db.String(16), nullable=False)
    updated_by = db.Column(db.String(16), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=True, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "staff_code": self.staff_code,
            "staff_name": self.staff_name,
            "email": self.email,
            "department": self.department,
            "position": self.position,
            "phone_number": self.phone_number,
            "is_active": self.is_active,
            "created_by": self.created_by,
            "updated_by": self.updated_by,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
