# Overview: Service-layer operations for auth; encapsulates business logic and database work.

"""
Authentication Service

WHY: Every master-data write records the acting user_id, so users need a
stable, human-readable login id.

- user_id is generated (5 digits, zero-padded) at registration
- email is unique across all users
- Passwords are hashed with bcrypt (salted, cost factor from BCRYPT_ROUNDS)
- Login is by user_id + password. Unknown user_id and wrong password both
  return None so callers cannot tell them apart.
- There is no server-side session; the client keeps the returned user.
"""

import bcrypt
from flask import current_app

from ..extensions import db
from ..models import User
from ..validation import ConflictError, ValidationError, require_text, validate_email
from .code_service import USER_ID_WIDTH, insert_with_generated_code, next_code


MIN_PASSWORD_LENGTH = 8
EMAIL_MAX_LENGTH = 255


class PasswordValidationError(ValidationError):
    """Raised when password doesn't meet strength requirements."""
    pass


def validate_password_strength(password: str) -> None:
    """
    Validate password meets strength requirements.

    Requirements:
    - Minimum 8 characters
    - Not only whitespace
    """
    if not isinstance(password, str) or not password.strip():
        raise PasswordValidationError("Password is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt.

    Password is validated for strength before hashing.
    """
    validate_password_strength(password)
    salt = bcrypt.gensalt(rounds=current_app.config.get("BCRYPT_ROUNDS", 12))
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    Returns True if password matches hash, False otherwise.
    bcrypt.checkpw() compares in constant time.
    """
    if not isinstance(password, str) or not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # Malformed hash in the table
        return False


def generate_next_user_id() -> str:
    """Next free user_id, e.g. "00003" after "00001" and "00002"."""
    return next_code(User.user_id, USER_ID_WIDTH)


def find_user_by_id(user_id: str) -> User | None:
    if not user_id:
        return None
    return db.session.query(User).filter_by(user_id=str(user_id).strip()).first()


def find_user_by_email(email: str) -> User | None:
    if not email:
        return None
    return db.session.query(User).filter_by(email=email.strip()).first()


def list_users() -> list[User]:
    return db.session.query(User).order_by(User.user_id.asc()).all()


def create_user(email: str, password: str) -> User:
    """
    Register a new user with a generated user_id.

    Raises:
        ValidationError: If email is malformed or password too weak
        ConflictError: If email is already registered
    """
    email = validate_email(require_text(email, "email", EMAIL_MAX_LENGTH))
    password_hash = hash_password(password)

    def _build() -> User:
        if find_user_by_email(email):
            raise ConflictError("Email address is already registered")
        return User(
            user_id=generate_next_user_id(),
            email=email,
            password_hash=password_hash,
        )

    return insert_with_generated_code(
        _build,
        conflict_message="Email address is already registered",
    )


def authenticate(user_id: str, password: str) -> User | None:
    """
    Authenticate user with user_id and password.

    Returns User if credentials valid, None otherwise.
    """
    user = find_user_by_id(user_id)

    if not user:
        return None

    if verify_password(password, user.password_hash):
        return user

    return None
