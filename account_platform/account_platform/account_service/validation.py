"""
Field validation for registration and login payloads.

Every check returns a list of ``FieldError`` instead of raising, so a caller
sees all failing fields at once. Each field stops at its first failing
presence/type rule.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import email_validator
from email_validator import EmailNotValidError, validate_email

# Only syntax is checked: reserved names such as .local or localhost are
# accepted, as is a dotless domain.
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


def clean_text(value: Any) -> Any:
    """Trim surrounding whitespace; blank strings become None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def clean_password(value: Any) -> Any:
    # Passwords are never trimmed, but numeric JSON values are accepted
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def is_email(value: str) -> bool:
    try:
        validate_email(
            value,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
        )
    except EmailNotValidError:
        return False
    return True


def required(field: str, value: Any) -> Optional[FieldError]:
    if is_blank(value):
        return FieldError(field, f"The {field} field is required.")
    return None


def string(field: str, value: Any) -> Optional[FieldError]:
    if not isinstance(value, str):
        return FieldError(field, f"The {field} field must be a string.")
    return None


def email(field: str, value: Any) -> Optional[FieldError]:
    if not isinstance(value, str) or not is_email(value):
        return FieldError(field, f"The {field} field must be a valid email address.")
    return None


def confirmed(field: str, value: Any, confirmation: Any) -> Optional[FieldError]:
    if value != confirmation:
        return FieldError(field, f"The {field} field confirmation does not match.")
    return None


def _first(*checks) -> Optional[FieldError]:
    for check in checks:
        error = check()
        if error is not None:
            return error
    return None


def validate_registration(name: Any, email_address: Any, password: Any,
                          password_confirmation: Any) -> List[FieldError]:
    """
    Check a registration payload.

    The uniqueness of the email is not checked here; that needs the
    credential store and is done by the service.
    """
    errors = [
        _first(
            lambda: required("name", name),
            lambda: string("name", name),
        ),
        _first(
            lambda: required("email", email_address),
            lambda: string("email", email_address),
            lambda: email("email", email_address),
        ),
        _first(
            lambda: required("password", password),
            lambda: string("password", password),
            lambda: confirmed("password", password, password_confirmation),
        ),
    ]
    return [error for error in errors if error is not None]


def validate_login(email_address: Any, password: Any) -> List[FieldError]:
    errors = [
        _first(
            lambda: required("email", email_address),
            lambda: email("email", email_address),
        ),
        _first(
            lambda: required("password", password),
            lambda: string("password", password),
        ),
    ]
    return [error for error in errors if error is not None]


def group_errors(errors: List[FieldError]) -> Dict[str, List[str]]:
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        grouped.setdefault(error.field, []).append(error.message)
    return grouped
