"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_json_request(
    req: Request,
    *,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    return data


def get_text(payload: dict, key: str) -> str | None:
    """Return ``payload[key]`` as a string, or None when absent or null.

    Scalars are stringified; nested objects are rejected with a 400 error.
    """

    value: Any = payload.get(key)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise BadRequest(f"Field '{key}' must be a string.")
    return str(value)
