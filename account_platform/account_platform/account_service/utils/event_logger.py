"""
Event logger utility for authentication events.
"""
from typing import Optional
from fastapi import Request
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..models import AuthEvent, utcnow

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "register",
    "login_success",
    "login_failure",
    "logout"
}


def client_ip(request: Request) -> Optional[str]:
    """Peer address, falling back to the first X-Forwarded-For hop."""
    if request.client and request.client.host:
        return request.client.host

    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        # X-Forwarded-For can contain multiple IPs, take the first one
        return forwarded_for.split(",")[0].strip()
    return None


def log_auth_event(
    event_type: str,
    email: str,
    request: Request,
    db: Session,
    user_id: Optional[int] = None,
    metadata: Optional[dict] = None
) -> None:
    """
    Record an authentication event in the database and the application log.

    Args:
        event_type: One of: register, login_success, login_failure, logout
        email: Email the event concerns (as submitted, for failed logins)
        request: FastAPI Request object
        db: Database session
        user_id: Id of the user, when one is known
        metadata: Optional dictionary of additional context

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    ip_address = client_ip(request)
    user_agent = request.headers.get("user-agent")

    try:
        auth_event = AuthEvent(
            user_id=user_id,
            email=email,
            event_type=event_type,
            ip_address=ip_address,
            user_agent=user_agent,
            timestamp=utcnow(),
            event_metadata=metadata or {}
        )

        db.add(auth_event)
        db.commit()

        logger.info(
            "AUTH %s user_id=%s email=%s ip=%s",
            event_type, user_id, email, ip_address
        )

    except SQLAlchemyError as e:
        # A failed audit write must not fail the request it describes
        logger.warning(
            "Failed to log auth event - user_id=%s, event_type=%s, error=%s",
            user_id, event_type, e
        )
        db.rollback()
