from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


class DropdownItem(db.Model):
    """
    One selectable value of a UI dropdown list.

    dropdown_id groups the values of a single list ("priority", "honorific", ...);
    a value may appear only once per list.
    """
    __tablename__ = "dropdown_items"
    __table_args__ = (
        db.UniqueConstraint("dropdown_id", "dropdown_value", name="uq_dropdown_items_id_value"),
        db.Index("ix_dropdown_items_dropdown_id", "dropdown_id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    dropdown_id = db.Column(db.String(64), nullable=False)
    dropdown_value = db.Column(db.String(255), nullable=False)

    created_by = db.Column(db.String(16), nullable=False)
    updated_by = db.Column(db.String(16), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "dropdown_id": self.dropdown_id,
            "dropdown_value": self.dropdown_value,
            "created_by": self.created_by,
            "updated_by": self.updated_by,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
