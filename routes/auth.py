"""Authentication blueprint: local accounts and federated login completion."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, redirect, request, session

from services import (
    AuthPolicy,
    CredentialService,
    IdentityLinker,
    PasswordHasher,
    decide_post_auth_redirect,
    redirect_url,
)
from storage import SqlAlchemyUserStore
from utils.request_validation import get_text, parse_json_request

auth_bp = Blueprint("auth", __name__)

# Session keys shared with the upstream OAuth2 integration.
OAUTH2_ATTRIBUTES_KEY = "oauth2_attributes"
OAUTH2_AUTHORITIES_KEY = "oauth2_authorities"
OAUTH2_PRINCIPAL_KEY = "oauth2_principal"


def _credential_service() -> CredentialService:
    config = current_app.config
    return CredentialService(
        SqlAlchemyUserStore(),
        PasswordHasher(config.get("PASSWORD_HASH_METHOD", "scrypt")),
        AuthPolicy.from_config(config),
    )


def _identity_linker() -> IdentityLinker:
    config = current_app.config
    return IdentityLinker(
        SqlAlchemyUserStore(),
        provider=config.get("FEDERATED_PROVIDER", "GOOGLE"),
        policy=AuthPolicy.from_config(config),
    )


def _account_fields() -> tuple[str | None, str | None, str | None, str | None]:
    payload = parse_json_request(request)
    return (
        get_text(payload, "email"),
        get_text(payload, "password"),
        get_text(payload, "name"),
        get_text(payload, "role"),
    )


@auth_bp.route("/signup", methods=["POST"])
def signup() -> tuple:
    """Create a local account with an email, password, name and optional role."""
    email, password, name, role = _account_fields()
    user = _credential_service().sign_up(email, password, name, role)
    return jsonify(user.public_view()), HTTPStatus.OK


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Same contract as ``/signup``."""
    email, password, name, role = _account_fields()
    user = _credential_service().register(email, password, name, role)
    return jsonify(user.public_view()), HTTPStatus.OK


@auth_bp.route("/signin", methods=["POST"])
def signin() -> tuple:
    payload = parse_json_request(request)
    user = _credential_service().sign_in(
        get_text(payload, "email"), get_text(payload, "password")
    )
    return jsonify(user.public_view()), HTTPStatus.OK


@auth_bp.route("/setup-password", methods=["POST"])
def setup_password() -> tuple:
    """Set the first local password of an account created by a federated login."""
    payload = parse_json_request(request)
    _credential_service().setup_password(
        get_text(payload, "email"), get_text(payload, "password")
    )
    return (
        jsonify({"message": "Password set. You can now login normally."}),
        HTTPStatus.OK,
    )


@auth_bp.route("/oauth2/success", methods=["GET"])
def oauth2_success():
    """Finish a federated login and redirect the browser.

    The upstream OAuth2 integration leaves the verified attribute map in the
    session; this links it to a local account, keeps the principal for
    session building, and sends password-less accounts to password setup.
    """
    attributes = session.pop(OAUTH2_ATTRIBUTES_KEY, None) or {}
    authorities = tuple(session.pop(OAUTH2_AUTHORITIES_KEY, None) or ())

    resolution = _identity_linker().resolve_federated_user(attributes, authorities)
    session[OAUTH2_PRINCIPAL_KEY] = {
        "attributes": dict(resolution.principal.attributes),
        "authorities": list(resolution.principal.authorities),
        "name": resolution.principal.name,
    }

    decision = decide_post_auth_redirect(SqlAlchemyUserStore(), resolution.principal.name)
    frontend_url = current_app.config.get("FRONTEND_URL", "http://localhost:3000")
    return redirect(redirect_url(decision, frontend_url), code=HTTPStatus.FOUND)
