"""Application configuration module."""

import os


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///app.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Account policy
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@apnaride.com")
    ADMIN_ROLE = os.getenv("ADMIN_ROLE", "admin")
    DEFAULT_ROLE = os.getenv("DEFAULT_ROLE", "user")
    MIN_PASSWORD_LENGTH = int(os.getenv("MIN_PASSWORD_LENGTH", "6"))
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # Federated login
    FEDERATED_PROVIDER = os.getenv("FEDERATED_PROVIDER", "GOOGLE")
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
