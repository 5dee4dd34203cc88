from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


class Location(db.Model):
    """Business location (branch, warehouse) identified by a generated 2-digit code."""
    __tablename__ = "locations"
    __table_args__ = (
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    location_code = db.Column(db.String(2), nullable=False, unique=True)
    location_name = db.Column(db.String(128), nullable=False)

    created_by = db.Column(db.String(16), nullable=False)
    updated_by = db.Column(db.String(16), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "location_code": self.location_code,
            "location_name": self.location_name,
            "created_by": self.created_by,
            "updated_by": self.updated_by,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
