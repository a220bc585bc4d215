"""
Error taxonomy for the account service.

The HTTP layer maps these onto status codes in ``main.py``:
ValidationError -> 422, Unauthenticated -> 401. InvalidCredentials is
reported in a 200 body with ``status: false``.
"""
from typing import Any, Dict, List, Optional


class AuthServiceError(Exception):
    """Base class for errors raised by the auth service core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AuthServiceError):
    """One or more request fields failed validation."""

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        super().__init__(summarize(errors))


class EmailAlreadyTaken(ValidationError):
    def __init__(self, field: str = "email"):
        super().__init__({field: [f"The {field} has already been taken."]})


class InvalidCredentials(AuthServiceError):
    INVALID_EMAIL = "invalid_email"
    PASSWORD_MISMATCH = "password_mismatch"

    MESSAGES = {
        INVALID_EMAIL: "Invalid Email value",
        PASSWORD_MISMATCH: "Password didn't match",
    }

    def __init__(self, reason: str, user: Optional[Any] = None):
        if reason not in self.MESSAGES:
            raise ValueError(f"Unknown credential failure reason '{reason}'")
        self.reason = reason
        # the matched user on a password mismatch, None for an unknown email
        self.user = user
        super().__init__(self.MESSAGES[reason])


class Unauthenticated(AuthServiceError):
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Unauthenticated.")


def summarize(errors: Dict[str, List[str]]) -> str:
    """First message, plus a count of the remaining ones."""
    messages = [message for field_messages in errors.values() for message in field_messages]
    if not messages:
        return "The given data was invalid."
    remaining = len(messages) - 1
    if remaining == 0:
        return messages[0]
    return f"{messages[0]} (and {remaining} more error{'s' if remaining != 1 else ''})"
