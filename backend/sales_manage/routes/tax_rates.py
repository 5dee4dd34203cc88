# Overview: Flask API routes for tax rate operations; parses input and returns JSON responses.

"""
Tax Rate Routes

tax_code is generated on create and used as the resource key afterwards.
The acting user is taken from the request body (user_id).
"""

from flask import Blueprint, request, jsonify, current_app

from ..extensions import db
from ..services import tax_rate_service
from ..validation import ConflictError, NotFoundError, ValidationError, json_object


tax_rates_bp = Blueprint("tax_rates", __name__, url_prefix="/api/tax-rates")


@tax_rates_bp.get("")
def list_tax_rates_route():
    """
    Returns:
        {success: true, tax_rates: TaxRate[], count: int}
    """
    try:
        tax_rates = tax_rate_service.list_tax_rates()
        return jsonify({
            "success": True,
            "tax_rates": [t.to_dict() for t in tax_rates],
            "count": len(tax_rates),
        })
    except Exception:
        current_app.logger.exception("Failed to list tax rates")
        return jsonify({"error": "Failed to load tax rates"}), 500


@tax_rates_bp.get("/next-code")
def next_tax_code_route():
    """Preview the code the next created tax rate will get."""
    try:
        return jsonify({"success": True, "tax_code": tax_rate_service.generate_next_tax_code()})
    except ConflictError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to generate tax code")
        return jsonify({"error": "Failed to generate tax code"}), 500


@tax_rates_bp.get("/<tax_code>")
def get_tax_rate_route(tax_code: str):
    try:
        tax_rate = tax_rate_service.get_tax_rate(tax_code)
        return jsonify({"success": True, "tax_rate": tax_rate.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to load tax rate")
        return jsonify({"error": "Failed to load tax rate"}), 500


@tax_rates_bp.post("")
def create_tax_rate_route():
    """
    Create a tax rate.

    Request body:
    {
        "tax_name": "10%",        // required
        "rate": 10,               // required, 0-100
        "calculation_type": 3,    // required, 1=floor 2=ceil 3=round
        "user_id": "00001"        // required, acting user
    }

    Returns:
        201 {success: true, tax_rate: TaxRate}
    """
    try:
        data = json_object(request.get_json(silent=True))
        tax_rate = tax_rate_service.create_tax_rate(
            tax_name=data.get("tax_name"),
            rate=data.get("rate"),
            calculation_type=data.get("calculation_type"),
            created_by=data.get("user_id"),
        )
        current_app.logger.info("Created tax rate %s", tax_rate.tax_code)
        return jsonify({"success": True, "tax_rate": tax_rate.to_dict()}), 201
    except (ValidationError, ConflictError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create tax rate")
        return jsonify({"error": "Failed to create tax rate"}), 500


@tax_rates_bp.put("/<tax_code>")
def update_tax_rate_route(tax_code: str):
    """
    Update a tax rate. Same body as create; all fields required.

    Returns:
        {success: true, tax_rate: TaxRate}
    """
    try:
        data = json_object(request.get_json(silent=True))
        tax_rate = tax_rate_service.update_tax_rate(
            tax_code,
            tax_name=data.get("tax_name"),
            rate=data.get("rate"),
            calculation_type=data.get("calculation_type"),
            updated_by=data.get("user_id"),
        )
        current_app.logger.info("Updated tax rate %s", tax_code)
        return jsonify({"success": True, "tax_rate": tax_rate.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except (ValidationError, ConflictError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to update tax rate")
        return jsonify({"error": "Failed to update tax rate"}), 500


@tax_rates_bp.delete("/<tax_code>")
def delete_tax_rate_route(tax_code: str):
    try:
        tax_rate_service.delete_tax_rate(tax_code)
        current_app.logger.info("Deleted tax rate %s", tax_code)
        return jsonify({"success": True, "message": f"Tax code {tax_code} was deleted"})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to delete tax rate")
        return jsonify({"error": "Failed to delete tax rate"}), 500
