"""
SQLAlchemy-backed credential store.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import EmailAlreadyTaken
from .models import User

logger = logging.getLogger(__name__)


class UserStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create(self, name: str, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Raises:
            EmailAlreadyTaken: the unique index on ``users.email`` rejected
                the insert, e.g. a concurrent registration won the race
        """
        user = User(name=name, email=email, password=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("Duplicate registration rejected by the database: email=%s", email)
            raise EmailAlreadyTaken() from exc
        self.db.refresh(user)
        return user
