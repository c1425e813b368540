"""Seed the reserved administrator account.

Public signup paths refuse the admin identity, so this script is the only
way the admin record is created.
"""

import os
import sys

from flask import Flask

from app import create_app
from models.user import PROVIDER_LOCAL, User
from services.hashing import PasswordHasher
from storage import SqlAlchemyUserStore


def seed_admin(app: Flask, password: str) -> str:
    """Create or refresh the admin account and return the action taken."""

    with app.app_context():
        store = SqlAlchemyUserStore()
        hasher = PasswordHasher(app.config.get("PASSWORD_HASH_METHOD", "scrypt"))
        admin_email = app.config["ADMIN_EMAIL"]

        admin = store.find_by_email(admin_email)
        if admin is None:
            admin = User(email=admin_email, name="Administrator", provider=PROVIDER_LOCAL)
            action = "created"
        else:
            action = "updated"
        admin.role = app.config["ADMIN_ROLE"]
        admin.password_digest = hasher.hash(password)
        store.save(admin)
        return action


def main() -> None:
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        sys.exit("ADMIN_PASSWORD must be set.")
    app = create_app()
    action = seed_admin(app, password)
    print(f"Admin user {action}: {app.config['ADMIN_EMAIL']}")


if __name__ == "__main__":
    main()
