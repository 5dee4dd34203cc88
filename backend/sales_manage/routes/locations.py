# Overview: Flask API routes for location operations; parses input and returns JSON responses.

"""
Location Routes

location_code is generated on create and used as the resource key afterwards.
"""

from flask import Blueprint, request, jsonify, current_app

from ..extensions import db
from ..services import location_service
from ..validation import ConflictError, NotFoundError, ValidationError, json_object


locations_bp = Blueprint("locations", __name__, url_prefix="/api/locations")


@locations_bp.get("")
def list_locations_route():
    try:
        locations = location_service.list_locations()
        return jsonify({
            "success": True,
            "locations": [loc.to_dict() for loc in locations],
            "count": len(locations),
        })
    except Exception:
        current_app.logger.exception("Failed to list locations")
        return jsonify({"error": "Failed to load locations"}), 500


@locations_bp.get("/next-code")
def next_location_code_route():
    try:
        return jsonify({"success": True, "location_code": location_service.generate_next_location_code()})
    except ConflictError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to generate location code")
        return jsonify({"error": "Failed to generate location code"}), 500


@locations_bp.get("/<location_code>")
def get_location_route(location_code: str):
    try:
        location = location_service.get_location(location_code)
        return jsonify({"success": True, "location": location.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to load location")
        return jsonify({"error": "Failed to load location"}), 500


@locations_bp.post("")
def create_location_route():
    """
    Request body: {"location_name": "本社", "user_id": "00001"}

    Returns:
        201 {success: true, location: Location}
    """
    try:
        data = json_object(request.get_json(silent=True))
        location = location_service.create_location(
            location_name=data.get("location_name"),
            created_by=data.get("user_id"),
        )
        current_app.logger.info("Created location %s", location.location_code)
        return jsonify({"success": True, "location": location.to_dict()}), 201
    except (ValidationError, ConflictError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create location")
        return jsonify({"error": "Failed to create location"}), 500


@locations_bp.put("/<location_code>")
def update_location_route(location_code: str):
    try:
        data = json_object(request.get_json(silent=True))
        location = location_service.update_location(
            location_code,
            location_name=data.get("location_name"),
            updated_by=data.get("user_id"),
        )
        current_app.logger.info("Updated location %s", location_code)
        return jsonify({"success": True, "location": location.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except (ValidationError, ConflictError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to update location")
        return jsonify({"error": "Failed to update location"}), 500


@locations_bp.delete("/<location_code>")
def delete_location_route(location_code: str):
    try:
        location_service.delete_location(location_code)
        current_app.logger.info("Deleted location %s", location_code)
        return jsonify({"success": True, "message": f"Location code {location_code} was deleted"})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to delete location")
        return jsonify({"error": "Failed to delete location"}), 500
