# backend/sales_manage/config.py
from __future__ import annotations
import os


def _split_origins(value: str) -> set[str]:
    return {origin.strip() for origin in value.split(",") if origin.strip()}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/sales_manage.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///sales_manage.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    PORT = int(os.environ.get("PORT", "4321"))

    # "production" serves the built SPA from STATIC_DIR
    APP_ENV = os.environ.get("APP_ENV", "development")
    STATIC_DIR = os.environ.get(
        "STATIC_DIR",
        os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "build"),
    )

    CORS_ALLOWED_ORIGINS = _split_origins(os.environ.get(
        "CORS_ALLOWED_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
    ))

    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Attempts for check-generate-insert when a generated code collides
    CODE_RETRY_ATTEMPTS = int(os.environ.get("CODE_RETRY_ATTEMPTS", "3"))


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    APP_ENV = "testing"
    BCRYPT_ROUNDS = 4
