# Overview: Flask API routes for customer operations; parses input and returns JSON responses.

"""
Customer Routes

Records are addressed by surrogate id; /code/<code> looks up by customer_code.
PUT replaces the whole record (required fields must be resent).
"""

from flask import Blueprint, request, jsonify, current_app

from ..extensions import db
from ..services import customer_service
from ..validation import ConflictError, NotFoundError, ValidationError, json_object


customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.get("")
def list_customers_route():
    try:
        customers = customer_service.list_customers()
        return jsonify({
            "success": True,
            "customers": [c.to_dict() for c in customers],
            "count": len(customers),
        })
    except Exception:
        current_app.logger.exception("Failed to list customers")
        return jsonify({"error": "Failed to load customers"}), 500


@customers_bp.get("/<int:customer_id>")
def get_customer_route(customer_id: int):
    try:
        customer = customer_service.get_customer(customer_id)
        return jsonify({"success": True, "customer": customer.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to load customer")
        return jsonify({"error": "Failed to load customer"}), 500


@customers_bp.get("/code/<code>")
def get_customer_by_code_route(code: str):
    try:
        customer = customer_service.find_customer_by_code(code)
        if not customer:
            return jsonify({"error": "Customer not found"}), 404
        return jsonify({"success": True, "customer": customer.to_dict()})
    except Exception:
        current_app.logger.exception("Failed to load customer")
        return jsonify({"error": "Failed to load customer"}), 500


@customers_bp.post("")
def create_customer_route():
    """
    Create a customer.

    Required: customer_code, customer_name, honorific, invoice_issuance,
    tax_processing, tax_rounding, created_by. Everything else is optional.

    Returns:
        201 {success: true, customer: Customer}
    """
    try:
        data = json_object(request.get_json(silent=True))
        customer = customer_service.create_customer(data, created_by=data.get("created_by"))
        current_app.logger.info("Created customer %s", customer.customer_code)
        return jsonify({"success": True, "customer": customer.to_dict()}), 201
    except (ValidationError, ConflictError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create customer")
        return jsonify({"error": "Failed to create customer"}), 500


@customers_bp.put("/<int:customer_id>")
def update_customer_route(customer_id: int):
    try:
        data = json_object(request.get_json(silent=True))
        customer = customer_service.update_customer(customer_id, data, updated_by=data.get("updated_by"))
        current_app.logger.info("Updated customer %s", customer.customer_code)
        return jsonify({"success": True, "customer": customer.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except (ValidationError, ConflictError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to update customer")
        return jsonify({"error": "Failed to update customer"}), 500


@customers_bp.delete("/<int:customer_id>")
def delete_customer_route(customer_id: int):
    try:
        customer_service.delete_customer(customer_id)
        current_app.logger.info("Deleted customer id=%s", customer_id)
        return jsonify({"success": True, "message": f"Customer {customer_id} was deleted"})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to delete customer")
        return jsonify({"error": "Failed to delete customer"}), 500
