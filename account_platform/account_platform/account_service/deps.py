from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .auth import PasswordHasher, TokenIssuer
from .db import get_db
from .errors import Unauthenticated
from .service import AuthContext, AuthService
from .store import UserStore


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(store=UserStore(db), hasher=PasswordHasher(), issuer=TokenIssuer(db))


def get_auth_context(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> AuthContext:
    """
    Resolve the ``Authorization: Bearer <token>`` header into an AuthContext.

    Raises:
        Unauthenticated: the header is missing, malformed, or names a token
            that is invalid or revoked
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise Unauthenticated()
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise Unauthenticated()
    return TokenIssuer(db).authenticate(token)
