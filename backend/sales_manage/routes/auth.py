# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

# backend/sales_manage/routes/auth.py
"""
Authentication API routes

- POST /api/register: create a user with a generated user_id
- POST /api/login: check user_id + password

No token is issued. The client keeps the returned user object.
"""

from flask import Blueprint, request, jsonify, current_app

from ..extensions import db
from ..services import auth_service
from ..validation import ConflictError, ValidationError, json_object


auth_bp = Blueprint("auth", __name__, url_prefix="/api")


@auth_bp.post("/register")
def register_route():
    """
    Register a new user.

    Request body: {"email": "...", "password": "..."}

    Returns:
        201 {success: true, user: {user_id, email, ...}}
    """
    try:
        data = json_object(request.get_json(silent=True))
        email = data.get("email")
        password = data.get("password")

        if not all([email, password]):
            return jsonify({"error": "email and password are required"}), 400

        user = auth_service.create_user(email, password)
        current_app.logger.info("Registered user %s", user.user_id)

        return jsonify({"success": True, "user": user.to_dict()}), 201

    except (ValidationError, ConflictError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to register user")
        return jsonify({"error": "Registration failed"}), 500


@auth_bp.post("/login")
def login_route():
    """
    Authenticate by user_id and password.

    Request body: {"user_id": "00001", "password": "..."}

    Returns:
        200 {success: true, user: {...}} or 401 on any credential mismatch
    """
    try:
        data = json_object(request.get_json(silent=True))
        user_id = data.get("user_id")
        password = data.get("password")

        if not all([user_id, password]):
            return jsonify({"error": "user_id and password are required"}), 400

        user = auth_service.authenticate(str(user_id), password)

        if not user:
            return jsonify({"error": "Invalid user ID or password"}), 401

        return jsonify({"success": True, "user": user.to_dict()})

    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to login user")
        return jsonify({"error": "Login failed"}), 500
