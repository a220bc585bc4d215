"""
Auth service core: registration, login, profile and logout.

The service only talks to its three collaborators through the contracts
below. It holds no state between calls; the authenticated identity of a
request is passed in explicitly as an ``AuthContext``.
"""
from dataclasses import dataclass
import logging
from typing import Any, Optional, Protocol

from .errors import EmailAlreadyTaken, InvalidCredentials, Unauthenticated, ValidationError
from .validation import (
    FieldError,
    clean_password,
    clean_text,
    group_errors,
    validate_login,
    validate_registration,
)

logger = logging.getLogger(__name__)

REGISTRATION_FIELDS = ("name", "email", "password")


@dataclass(frozen=True)
class AuthContext:
    """The user and token a bearer credential resolved to."""
    user: Any
    token_id: str


@dataclass(frozen=True)
class IssuedToken:
    """A freshly issued bearer token and the user it was issued to."""
    user: Any
    token: str


class CredentialStore(Protocol):
    def find_by_email(self, email: str) -> Optional[Any]: ...
    def create(self, name: str, email: str, password_hash: str) -> Any: ...


class Hasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed_password: str) -> bool: ...


class Issuer(Protocol):
    def issue(self, user: Any) -> str: ...
    def revoke(self, token_id: str) -> None: ...


class AuthService:
    def __init__(self, *, store: CredentialStore, hasher: Hasher, issuer: Issuer):
        self.store = store
        self.hasher = hasher
        self.issuer = issuer

    def register(self, name: Any, email: Any, password: Any, password_confirmation: Any) -> Any:
        """
        Create a user account. No token is issued.

        Raises:
            ValidationError: a field is missing or malformed
            EmailAlreadyTaken: the email belongs to an existing user
        """
        name = clean_text(name)
        email = clean_text(email)
        password = clean_password(password)
        password_confirmation = clean_password(password_confirmation)

        errors = validate_registration(name, email, password, password_confirmation)
        email_ok = all(error.field != "email" for error in errors)
        if email_ok and self.store.find_by_email(email) is not None:
            if not errors:
                raise EmailAlreadyTaken()
            errors.append(FieldError("email", "The email has already been taken."))
            errors.sort(key=lambda error: REGISTRATION_FIELDS.index(error.field))
        if errors:
            raise ValidationError(group_errors(errors))

        user = self.store.create(name, email, self.hasher.hash(password))
        logger.debug("[Register] New user: user_id=%s", user.id)
        return user

    def login(self, email: Any, password: Any) -> IssuedToken:
        """
        Check a credential and issue a new bearer token for it.

        Raises:
            ValidationError: a field is missing or malformed
            InvalidCredentials: unknown email, or a password that does not
                match; ``reason`` tells the two apart and ``user`` is set
                for a mismatch
        """
        email = clean_text(email)
        password = clean_password(password)

        errors = validate_login(email, password)
        if errors:
            raise ValidationError(group_errors(errors))

        user = self.store.find_by_email(email)
        if user is None:
            raise InvalidCredentials(InvalidCredentials.INVALID_EMAIL)

        if not self.hasher.verify(password, user.password):
            raise InvalidCredentials(InvalidCredentials.PASSWORD_MISMATCH, user=user)

        token = self.issuer.issue(user)
        logger.debug("[Login] Token issued: user_id=%s", user.id)
        return IssuedToken(user=user, token=token)

    def profile(self, context: Optional[AuthContext]) -> Any:
        if context is None or context.user is None:
            raise Unauthenticated()
        return context.user

    def logout(self, context: Optional[AuthContext]) -> None:
        """Revoke the token of the current request; the user's other tokens stay valid."""
        if context is None or not context.token_id:
            raise Unauthenticated()
        self.issuer.revoke(context.token_id)
        logger.debug("[Logout] Token revoked: user_id=%s", getattr(context.user, "id", None))
