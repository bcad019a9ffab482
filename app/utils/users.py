from __future__ import annotations

import email_validator
from email_validator import EmailNotValidError, validate_email

NAME_MAX_LENGTH = 60
EMAIL_MAX_LENGTH = 120

ERR_FIELDS_REQUIRED = 'fields "name" and "email" are required'
ERR_EMAIL_FORMAT = 'field "email" has an invalid format'
ERR_TOO_LONG = "name or email exceeds the maximum length"

# Syntax only: reserved names such as .test, .local and .invalid are well-formed.
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


def clean_field(value) -> str:
    """String-convert and trim a submitted value; missing becomes ''."""
    if value is None:
        return ""
    return str(value).strip()


def normalize_email(value) -> str:
    return clean_field(value).lower()


def is_valid_email(email: str) -> bool:
    try:
        validate_email(
            email,
            check_deliverability=False,
            globally_deliverable=False,
            allow_smtputf8=False,
        )
    except EmailNotValidError:
        return False
    return True


def validate_user(
    name: str,
    email: str,
    *,
    name_max: int = NAME_MAX_LENGTH,
    email_max: int = EMAIL_MAX_LENGTH,
) -> str | None:
    """Return the message of the first rule the pair breaks, or None.

    Rules run in order: both present, email syntax, lengths.
    """
    if not name or not email:
        return ERR_FIELDS_REQUIRED
    if not is_valid_email(email):
        return ERR_EMAIL_FORMAT
    if len(name) > name_max or len(email) > email_max:
        return ERR_TOO_LONG
    return None


def is_duplicate_email(records: list, normalized_email: str, exclude_index: int | None = None) -> bool:
    for i, rec in enumerate(records):
        if i == exclude_index:
            continue
        email = rec.get("email") if isinstance(rec, dict) else None
        if isinstance(email, str) and email.lower() == normalized_email:
            return True
    return False


def parse_index(value) -> int | None:
    """Accept a JSON integer or a decimal integer string; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip()
        digits = s[1:] if s[:1] in ("+", "-") else s
        if digits.isascii() and digits.isdigit():
            return int(s)
    return None
