from passlib.context import CryptContext
from datetime import datetime, timezone
from typing import List, Optional
import logging
import secrets
import jwt
from sqlalchemy.orm import Session

from .config import settings
from .errors import Unauthenticated
from .models import AccessToken, User, utcnow
from .service import AuthContext

logger = logging.getLogger(__name__)


class PasswordHasher:
    """One-way password hashing backed by a passlib CryptContext."""

    def __init__(self, schemes: Optional[List[str]] = None):
        self.context = CryptContext(schemes=schemes or settings.PASSWORD_SCHEMES, deprecated="auto")

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        return self.context.verify(password, hashed_password)


class TokenIssuer:
    """
    Issues, resolves and revokes bearer tokens.

    Each token is a signed JWT whose ``jti`` names a row in ``access_tokens``.
    The row, not the signature, decides whether the token still authenticates:
    revoking flips ``revoked`` and every later ``authenticate`` call reads it.
    """

    def __init__(
        self,
        db: Session,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        token_name: Optional[str] = None,
    ):
        self.db = db
        self.secret_key = secret_key or settings.SECRET_KEY
        self.algorithm = algorithm or settings.ALGORITHM
        self.token_name = token_name or settings.TOKEN_NAME

    def issue(self, user: User) -> str:
        record = AccessToken(
            id=secrets.token_hex(40),
            user_id=user.id,
            name=self.token_name,
            revoked=False,
        )
        self.db.add(record)
        self.db.commit()

        payload = {"jti": record.id, "sub": str(user.id), "iat": datetime.now(timezone.utc)}
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def authenticate(self, token: str) -> AuthContext:
        """
        Resolve a bearer token into the user and token it belongs to.

        Raises:
            Unauthenticated: bad signature, unknown or revoked token, or a
                token whose subject does not own it
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.PyJWTError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            raise Unauthenticated() from exc

        record = self.db.query(AccessToken).filter(AccessToken.id == payload.get("jti")).first()
        if not record or record.revoked or str(record.user_id) != payload.get("sub"):
            raise Unauthenticated()

        return AuthContext(user=record.user, token_id=record.id)

    def revoke(self, token_id: str) -> None:
        # one UPDATE statement, committed before returning
        self.db.query(AccessToken).filter(AccessToken.id == token_id).update(
            {AccessToken.revoked: True, AccessToken.updated_at: utcnow()},
            synchronize_session=False,
        )
        self.db.commit()
