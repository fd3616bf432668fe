"""ContactValidationPolicy — normalize and validate contact form input."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from app.domain.errors import InvalidInput

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DEFAULT_SUBJECT = "Contact Form Submission"

REQUIRED_FIELDS = ("name", "email", "message")

MAX_LENGTHS: dict[str, int] = {
    "name": 200,
    "email": 320,
    "subject": 300,
    "message": 5000,
}


@dataclass(frozen=True)
class ContactInput:
    name: str
    email: str
    subject: str
    message: str


def _clean(payload: dict[str, Any], field: str) -> str:
    value = payload.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInput(field, f"Field '{field}' must be a string")
    return value.strip()


def validate_contact(payload: Any) -> ContactInput:
    """Return trimmed, normalized contact fields.

    Raises:
        InvalidInput: naming the first missing, oversized or malformed field.
    """
    if not isinstance(payload, dict):
        raise InvalidInput("body", "Request body must be a JSON object")

    cleaned = {f: _clean(payload, f) for f in (*REQUIRED_FIELDS, "subject")}

    missing = [f for f in REQUIRED_FIELDS if not cleaned[f]]
    if missing:
        raise InvalidInput(
            missing[0],
            f"Missing required fields: {', '.join(missing)}. "
            "name, email, and message are required.",
        )

    for field, limit in MAX_LENGTHS.items():
        if len(cleaned[field]) > limit:
            raise InvalidInput(field, f"Field '{field}' exceeds {limit} characters")

    if not EMAIL_PATTERN.match(cleaned["email"]):
        raise InvalidInput("email", "Invalid email address format.")

    return ContactInput(
        name=cleaned["name"],
        email=cleaned["email"].lower(),
        subject=cleaned["subject"] or DEFAULT_SUBJECT,
        message=cleaned["message"],
    )
