# Overview: Flask API routes for dropdown list operations; parses input and returns JSON responses.

"""
Dropdown Routes

GET    /api/dropdown/ids                         distinct dropdown ids
GET    /api/dropdown/items                       every item
GET    /api/dropdown/items/<dropdown_id>         items of one list
POST   /api/dropdown/items                       add a value to a list
PUT    /api/dropdown/items/<int:item_id>         edit one item
DELETE /api/dropdown/items/<int:item_id>         delete one item
DELETE /api/dropdown/items/by-id/<dropdown_id>   delete a whole list
"""

from flask import Blueprint, request, jsonify, current_app

from ..extensions import db
from ..services import dropdown_service
from ..validation import ConflictError, NotFoundError, ValidationError, json_object


dropdown_bp = Blueprint("dropdown", __name__, url_prefix="/api/dropdown")


@dropdown_bp.get("/ids")
def list_dropdown_ids_route():
    try:
        dropdown_ids = dropdown_service.list_dropdown_ids()
        return jsonify({"success": True, "dropdown_ids": dropdown_ids, "count": len(dropdown_ids)})
    except Exception:
        current_app.logger.exception("Failed to list dropdown ids")
        return jsonify({"error": "Failed to load dropdown ids"}), 500


@dropdown_bp.get("/items")
def list_dropdown_items_route():
    try:
        items = dropdown_service.list_dropdown_items()
        return jsonify({"success": True, "items": [i.to_dict() for i in items], "count": len(items)})
    except Exception:
        current_app.logger.exception("Failed to list dropdown items")
        return jsonify({"error": "Failed to load dropdown items"}), 500


@dropdown_bp.get("/items/<dropdown_id>")
def list_items_for_dropdown_route(dropdown_id: str):
    try:
        items = dropdown_service.list_items_for_dropdown(dropdown_id)
        return jsonify({"success": True, "items": [i.to_dict() for i in items], "count": len(items)})
    except Exception:
        current_app.logger.exception("Failed to list dropdown items")
        return jsonify({"error": "Failed to load dropdown items"}), 500


@dropdown_bp.post("/items")
def create_dropdown_item_route():
    """
    Request body: {"dropdown_id": "priority", "dropdown_value": "高", "user_id": "00001"}

    Returns:
        201 {success: true, item: DropdownItem}
    """
    try:
        data = json_object(request.get_json(silent=True))
        item = dropdown_service.create_dropdown_item(
            dropdown_id=data.get("dropdown_id"),
            dropdown_value=data.get("dropdown_value"),
            created_by=data.get("user_id"),
        )
        current_app.logger.info("Created dropdown item %s in %s", item.id, item.dropdown_id)
        return jsonify({"success": True, "item": item.to_dict()}), 201
    except (ValidationError, ConflictError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create dropdown item")
        return jsonify({"error": "Failed to create dropdown item"}), 500


@dropdown_bp.put("/items/<int:item_id>")
def update_dropdown_item_route(item_id: int):
    try:
        data = json_object(request.get_json(silent=True))
        item = dropdown_service.update_dropdown_item(
            item_id,
            dropdown_id=data.get("dropdown_id"),
            dropdown_value=data.get("dropdown_value"),
            updated_by=data.get("user_id"),
        )
        current_app.logger.info("Updated dropdown item %s", item_id)
        return jsonify({"success": True, "item": item.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except (ValidationError, ConflictError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to update dropdown item")
        return jsonify({"error": "Failed to update dropdown item"}), 500


@dropdown_bp.delete("/items/<int:item_id>")
def delete_dropdown_item_route(item_id: int):
    try:
        dropdown_service.delete_dropdown_item(item_id)
        current_app.logger.info("Deleted dropdown item %s", item_id)
        return jsonify({"success": True, "message": f"Dropdown item {item_id} was deleted"})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to delete dropdown item")
        return jsonify({"error": "Failed to delete dropdown item"}), 500


@dropdown_bp.delete("/items/by-id/<dropdown_id>")
def delete_items_for_dropdown_route(dropdown_id: str):
    try:
        count = dropdown_service.delete_items_for_dropdown(dropdown_id)
        current_app.logger.info("Deleted dropdown %s (%s items)", dropdown_id, count)
        return jsonify({
            "success": True,
            "message": f"Dropdown '{dropdown_id}' was deleted ({count} items)",
        })
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to delete dropdown")
        return jsonify({"error": "Failed to delete dropdown"}), 500
