# Overview: Service-layer operations for dropdown lists; encapsulates business logic and database work.

"""
Dropdown Service

A dropdown list is the set of DropdownItem rows sharing one dropdown_id.
There is no separate list table: a list exists while it has items.

UNIQUENESS: (dropdown_id, dropdown_value) is unique. The same value may
appear in different lists.
"""

from __future__ import annotations

from ..extensions import db
from ..models import DropdownItem
from ..time_utils import utcnow
from ..validation import AUDIT_USER_MAX_LENGTH, ConflictError, NotFoundError, require_text
from .concurrency import commit_or_conflict


DROPDOWN_ID_MAX_LENGTH = 64
DROPDOWN_VALUE_MAX_LENGTH = 255

DUPLICATE_MESSAGE = "This value already exists for dropdown '{dropdown_id}'"


def list_dropdown_ids() -> list[str]:
    rows = db.session.query(DropdownItem.dropdown_id).distinct().order_by(DropdownItem.dropdown_id.asc())
    return [dropdown_id for (dropdown_id,) in rows]


def list_dropdown_items() -> list[DropdownItem]:
    return db.session.query(DropdownItem).order_by(
        DropdownItem.dropdown_id.asc(),
        DropdownItem.id.asc(),
    ).all()


def list_items_for_dropdown(dropdown_id: str) -> list[DropdownItem]:
    """Items of one list in insertion order."""
    return db.session.query(DropdownItem).filter_by(
        dropdown_id=dropdown_id,
    ).order_by(DropdownItem.id.asc()).all()


def get_dropdown_item(item_id: int) -> DropdownItem:
    item = db.session.query(DropdownItem).filter_by(id=item_id).first()
    if not item:
        raise NotFoundError(f"Dropdown item {item_id} not found")
    return item


def _find_duplicate(dropdown_id: str, dropdown_value: str, *, exclude_id: int | None = None):
    query = db.session.query(DropdownItem).filter(
        DropdownItem.dropdown_id == dropdown_id,
        DropdownItem.dropdown_value == dropdown_value,
    )
    if exclude_id is not None:
        query = query.filter(DropdownItem.id != exclude_id)
    return query.first()


def create_dropdown_item(*, dropdown_id: str, dropdown_value: str, created_by: str) -> DropdownItem:
    """
    Add a value to a dropdown list (creating the list implicitly).

    Raises:
        ValidationError: If a field is blank
        ConflictError: If the value already exists in this list
    """
    dropdown_id = require_text(dropdown_id, "dropdown_id", DROPDOWN_ID_MAX_LENGTH)
    dropdown_value = require_text(dropdown_value, "dropdown_value", DROPDOWN_VALUE_MAX_LENGTH)
    created_by = require_text(created_by, "user_id", AUDIT_USER_MAX_LENGTH)

    message = DUPLICATE_MESSAGE.format(dropdown_id=dropdown_id)
    if _find_duplicate(dropdown_id, dropdown_value):
        raise ConflictError(message)

    now = utcnow()
    item = DropdownItem(
        dropdown_id=dropdown_id,
        dropdown_value=dropdown_value,
        created_by=created_by,
        updated_by=created_by,
        created_at=now,
        updated_at=now,
    )
    db.session.add(item)
    commit_or_conflict(message)

    db.session.refresh(item)
    return item


def update_dropdown_item(
    item_id: int,
    *,
    dropdown_id: str,
    dropdown_value: str,
    updated_by: str,
) -> DropdownItem:
    """
    Rewrite an item's list and value.

    Raises:
        NotFoundError: If the item does not exist
        ValidationError: If a field is blank
        ConflictError: If another item already has this (dropdown_id, dropdown_value)
    """
    item = get_dropdown_item(item_id)

    dropdown_id = require_text(dropdown_id, "dropdown_id", DROPDOWN_ID_MAX_LENGTH)
    dropdown_value = require_text(dropdown_value, "dropdown_value", DROPDOWN_VALUE_MAX_LENGTH)
    updated_by = require_text(updated_by, "user_id", AUDIT_USER_MAX_LENGTH)

    message = DUPLICATE_MESSAGE.format(dropdown_id=dropdown_id)
    if _find_duplicate(dropdown_id, dropdown_value, exclude_id=item.id):
        raise ConflictError(message)

    item.dropdown_id = dropdown_id
    item.dropdown_value = dropdown_value
    item.updated_by = updated_by
    item.updated_at = utcnow()
    commit_or_conflict(message)

    db.session.refresh(item)
    return item


def delete_dropdown_item(item_id: int) -> None:
    item = get_dropdown_item(item_id)
    db.session.delete(item)
    db.session.commit()


def delete_items_for_dropdown(dropdown_id: str) -> int:
    """
    Delete a whole dropdown list. Returns the number of items removed.

    Raises:
        NotFoundError: If the list has no items
    """
    count = db.session.query(DropdownItem).filter_by(dropdown_id=dropdown_id).delete(
        synchronize_session=False,
    )
    if count == 0:
        db.session.rollback()
        raise NotFoundError(f"Dropdown '{dropdown_id}' not found")
    db.session.commit()
    return count
