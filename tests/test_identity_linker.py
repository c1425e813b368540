"""Tests for linking federated identities to local accounts."""

from __future__ import annotations

import pytest

from models.user import User
from services import FederatedAttributes, ForbiddenError, IdentityError, IdentityLinker
from storage import DuplicateEmailError


def test_first_login_creates_then_links(linker, store):
    attributes = {"email": "a@b.com", "name": "A"}

    first = linker.resolve_federated_user(attributes)
    assert first.is_new_account is True
    assert store.find_by_email("a@b.com").provider == "GOOGLE"

    second = linker.resolve_federated_user(attributes)
    assert second.is_new_account is False
    assert second.user.id == first.user.id
    assert store.find_by_email("a@b.com").provider == "GOOGLE"
    assert User.query.count() == 1


def test_new_federated_account_has_no_password(linker):
    resolution = linker.resolve_federated_user({"email": "fresh@example.com", "name": "Fresh"})

    user = resolution.user
    assert user.password_digest is None
    assert user.has_password is False
    assert user.role == "user"
    assert user.name == "Fresh"


def test_given_name_is_used_when_name_missing(linker):
    resolution = linker.resolve_federated_user({"email": "given@example.com", "given_name": "Giv"})

    assert resolution.user.name == "Giv"


@pytest.mark.parametrize("attributes", [{}, {"name": "No Email"}, {"email": ""}, {"email": None}, None])
def test_missing_email_is_an_identity_error(linker, attributes):
    with pytest.raises(IdentityError):
        linker.resolve_federated_user(attributes)

    assert User.query.count() == 0


def test_existing_local_account_keeps_credentials(linker, credentials, store):
    created = credentials.sign_up("local@example.com", "secret1", "Chosen Name", "rider")
    created.phone = "555-0100"
    created.emergency_phone = "555-0199"
    store.save(created)
    digest = created.password_digest

    resolution = linker.resolve_federated_user({"email": "local@example.com", "name": "Google Name"})

    user = resolution.user
    assert resolution.is_new_account is False
    assert user.name == "Google Name"
    assert user.provider == "GOOGLE"
    assert user.password_digest == digest
    assert user.role == "rider"
    assert user.phone == "555-0100"
    assert user.emergency_phone == "555-0199"
    # The account still works for local signin.
    assert credentials.sign_in("local@example.com", "secret1").id == user.id


def test_name_is_overwritten_even_when_absent(linker):
    linker.resolve_federated_user({"email": "n@example.com", "name": "First"})

    resolution = linker.resolve_federated_user({"email": "n@example.com"})

    assert resolution.user.name is None


def test_principal_carries_original_attributes(linker):
    attributes = {"email": "p@example.com", "name": "P", "picture": "https://img", "sub": "123"}

    resolution = linker.resolve_federated_user(attributes, authorities=("OAUTH2_USER",))

    principal = resolution.principal
    assert dict(principal.attributes) == attributes
    assert principal.authorities == ("OAUTH2_USER",)
    assert principal.name == "p@example.com"


def test_typed_attribute_decoding():
    decoded = FederatedAttributes.from_mapping({"email": "  x@example.com ", "name": "", "given_name": "X"})

    assert decoded.email == "x@example.com"
    assert decoded.name is None
    assert decoded.display_name == "X"


def test_concurrent_first_login_falls_back_to_link(store, monkeypatch):
    """An insert beaten by a parallel login updates the winner's record."""

    existing = User(email="race@example.com", name="Old", provider="LOCAL", role="customer")
    store.save(existing)
    lookups = iter([None, existing])
    real_save = store.save
    calls = []

    def _save(user):
        calls.append(user)
        if len(calls) == 1:
            raise DuplicateEmailError("taken")
        return real_save(user)

    monkeypatch.setattr(store, "find_by_email", lambda email: next(lookups))
    monkeypatch.setattr(store, "save", _save)

    resolution = IdentityLinker(store).resolve_federated_user({"email": "race@example.com", "name": "New"})

    assert resolution.is_new_account is False
    assert resolution.user.id == existing.id
    assert resolution.user.name == "New"
    assert resolution.user.provider == "GOOGLE"


@pytest.mark.parametrize("email", ["admin@apnaride.com", "ADMIN@apnaride.com", " Admin@ApnaRide.com "])
def test_first_login_as_reserved_admin_is_forbidden(linker, email):
    with pytest.raises(ForbiddenError):
        linker.resolve_federated_user({"email": email, "name": "Mallory"})

    assert User.query.count() == 0


def test_seeded_admin_still_refreshes_on_federated_login(linker, store):
    store.save(User(email="admin@apnaride.com", name="Administrator", role="admin", password_digest="x"))

    resolution = linker.resolve_federated_user({"email": "admin@apnaride.com", "name": "Admin G"})

    assert resolution.is_new_account is False
    assert resolution.user.role == "admin"
    assert resolution.user.name == "Admin G"
    assert resolution.user.provider == "GOOGLE"
