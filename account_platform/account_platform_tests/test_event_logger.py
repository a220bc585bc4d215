"""
Unit tests for event logger utility.
"""
import logging

import pytest
from unittest.mock import Mock, MagicMock
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from account_platform.account_platform.account_service.utils.event_logger import log_auth_event
from account_platform.account_platform.account_service.models import AuthEvent, User


@pytest.fixture
def test_user(db_session):
    """Create a test user."""
    user = User(
        name="Test User",
        email="test@example.com",
        password="hashed_password",
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def mock_request():
    """Create a mock FastAPI Request object."""
    request = Mock()
    request.client = Mock()
    request.client.host = "192.168.1.1"
    request.headers = {"user-agent": "Mozilla/5.0 Test Browser"}
    return request


def test_log_auth_event_creates_record(db_session, test_user, mock_request):
    """Test that log_auth_event creates a record in the database."""
    log_auth_event("login_success", test_user.email, mock_request, db_session, user_id=test_user.id)

    events = db_session.query(AuthEvent).filter(
        AuthEvent.user_id == test_user.id
    ).all()

    assert len(events) == 1
    assert events[0].event_type == "login_success"
    assert events[0].email == "test@example.com"
    assert events[0].timestamp is not None


def test_log_auth_event_without_user(db_session, mock_request):
    """Failed logins for unknown emails are recorded with no user id."""
    log_auth_event("login_failure", "ghost@example.com", mock_request, db_session,
                   metadata={"reason": "invalid_email"})

    event = db_session.query(AuthEvent).one()
    assert event.user_id is None
    assert event.email == "ghost@example.com"
    assert event.to_dict()["metadata"] == {"reason": "invalid_email"}


def test_log_auth_event_extracts_ip_and_user_agent(db_session, test_user, mock_request):
    log_auth_event("logout", test_user.email, mock_request, db_session, user_id=test_user.id)

    event = db_session.query(AuthEvent).first()
    assert event.ip_address == "192.168.1.1"
    assert event.user_agent == "Mozilla/5.0 Test Browser"


def test_log_auth_event_invalid_type(db_session, test_user, mock_request):
    """Test that ValueError is raised for invalid event type."""
    with pytest.raises(ValueError) as exc_info:
        log_auth_event("2fa_success", test_user.email, mock_request, db_session)

    assert "Invalid event_type" in str(exc_info.value)
    assert "2fa_success" in str(exc_info.value)


def test_log_auth_event_handles_missing_ip(db_session, test_user):
    """Test that NULL is stored when IP address cannot be extracted."""
    request = Mock()
    request.client = None
    request.headers = {"user-agent": "Test Browser"}

    log_auth_event("register", test_user.email, request, db_session, user_id=test_user.id)

    event = db_session.query(AuthEvent).first()
    assert event.ip_address is None
    assert event.user_agent == "Test Browser"


def test_log_auth_event_x_forwarded_for_fallback(db_session, test_user):
    """Test that X-Forwarded-For header is used as fallback for IP."""
    request = Mock()
    request.client = None
    request.headers = {
        "x-forwarded-for": "10.0.0.1, 192.168.1.1",
        "user-agent": "Test Browser"
    }

    log_auth_event("register", test_user.email, request, db_session, user_id=test_user.id)

    event = db_session.query(AuthEvent).first()
    assert event.ip_address == "10.0.0.1"  # Should take first IP


def test_log_auth_event_handles_db_error(test_user, mock_request, caplog):
    """Test that database errors are logged and rolled back without raising."""
    mock_db = MagicMock(spec=Session)
    mock_db.commit = MagicMock(side_effect=SQLAlchemyError("Database error"))

    with caplog.at_level(logging.WARNING):
        log_auth_event("login_success", test_user.email, mock_request, mock_db, user_id=test_user.id)

    mock_db.rollback.assert_called_once()
    assert "Failed to log auth event" in caplog.text
    assert "login_success" in caplog.text


def test_log_auth_event_writes_log_line(db_session, test_user, mock_request, caplog):
    with caplog.at_level(logging.INFO):
        log_auth_event("register", test_user.email, mock_request, db_session, user_id=test_user.id)

    assert f"AUTH register user_id={test_user.id} email=test@example.com ip=192.168.1.1" in caplog.text


def test_log_auth_event_all_event_types(db_session, test_user, mock_request):
    """Test that all valid event types can be logged."""
    event_types = ["register", "login_success", "login_failure", "logout"]

    for event_type in event_types:
        log_auth_event(event_type, test_user.email, mock_request, db_session, user_id=test_user.id)

    events = db_session.query(AuthEvent).all()
    assert len(events) == 4
    assert {event.event_type for event in events} == set(event_types)
