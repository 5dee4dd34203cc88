# Overview: Flask API routes for staff operations; parses input and returns JSON responses.

"""
Staff Routes

Records are addressed by surrogate id; /code/<code> looks up by staff_code.
The body carries created_by (POST) or updated_by (PUT) for audit columns.
"""

from flask import Blueprint, request, jsonify, current_app

from ..extensions import db
from ..services import staff_service
from ..validation import ConflictError, NotFoundError, ValidationError, json_object


staff_bp = Blueprint("staff", __name__, url_prefix="/api/staff")


@staff_bp.get("")
def list_staff_route():
    try:
        staff = staff_service.list_staff()
        return jsonify({"success": True, "staff": [s.to_dict() for s in staff], "count": len(staff)})
    except Exception:
        current_app.logger.exception("Failed to list staff")
        return jsonify({"error": "Failed to load staff"}), 500


@staff_bp.get("/<int:staff_id>")
def get_staff_route(staff_id: int):
    try:
        staff = staff_service.get_staff(staff_id)
        return jsonify({"success": True, "staff_member": staff.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to load staff member")
        return jsonify({"error": "Failed to load staff member"}), 500


@staff_bp.get("/code/<code>")
def get_staff_by_code_route(code: str):
    try:
        staff = staff_service.find_staff_by_code(code)
        if not staff:
            return jsonify({"error": "Staff member not found"}), 404
        return jsonify({"success": True, "staff_member": staff.to_dict()})
    except Exception:
        current_app.logger.exception("Failed to load staff member")
        return jsonify({"error": "Failed to load staff member"}), 500


@staff_bp.post("")
def create_staff_route():
    """
    Request body:
    {
        "staff_code": "00004",     // required, unique
        "staff_name": "...",       // required
        "is_active": true,         // required
        "email": "...", "department": "...", "position": "...", "phone_number": "...",
        "created_by": "00001"      // required, acting user
    }
    """
    try:
        data = json_object(request.get_json(silent=True))
        staff = staff_service.create_staff(data, created_by=data.get("created_by"))
        current_app.logger.info("Created staff %s", staff.staff_code)
        return jsonify({"success": True, "staff_member": staff.to_dict()}), 201
    except (ValidationError, ConflictError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create staff member")
        return jsonify({"error": "Failed to create staff member"}), 500


@staff_bp.put("/<int:staff_id>")
def update_staff_route(staff_id: int):
    try:
        data = json_object(request.get_json(silent=True))
        staff = staff_service.update_staff(staff_id, data, updated_by=data.get("updated_by"))
        current_app.logger.info("Updated staff %s", staff.staff_code)
        return jsonify({"success": True, "staff_member": staff.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except (ValidationError, ConflictError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to update staff member")
        return jsonify({"error": "Failed to update staff member"}), 500


@staff_bp.delete("/<int:staff_id>")
def delete_staff_route(staff_id: int):
    try:
        staff_service.delete_staff(staff_id)
        current_app.logger.info("Deleted staff id=%s", staff_id)
        return jsonify({"success": True, "message": f"Staff member {staff_id} was deleted"})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to delete staff member")
        return jsonify({"error": "Failed to delete staff member"}), 500
