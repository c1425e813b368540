"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from services import AuthPolicy, CredentialService, IdentityLinker, PasswordHasher  # noqa: E402
from storage import SqlAlchemyUserStore  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    ADMIN_EMAIL = "admin@apnaride.com"
    ADMIN_ROLE = "admin"
    DEFAULT_ROLE = "user"
    MIN_PASSWORD_LENGTH = 6
    # Cheap work factor keeps the suite fast.
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    FEDERATED_PROVIDER = "GOOGLE"
    FRONTEND_URL = "http://frontend.test"


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_BaseTestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def app_ctx(app: Flask):
    """Push an application context for service-level tests."""

    with app.app_context():
        yield app


@pytest.fixture()
def store(app_ctx) -> SqlAlchemyUserStore:
    return SqlAlchemyUserStore()


@pytest.fixture()
def hasher(app_ctx) -> PasswordHasher:
    return PasswordHasher(app_ctx.config["PASSWORD_HASH_METHOD"])


@pytest.fixture()
def credentials(app_ctx, store, hasher) -> CredentialService:
    return CredentialService(store, hasher, AuthPolicy.from_config(app_ctx.config))


@pytest.fixture()
def linker(app_ctx, store) -> IdentityLinker:
    return IdentityLinker(store, provider="GOOGLE", policy=AuthPolicy.from_config(app_ctx.config))
