"""
Account API router - registration, login, profile and logout.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_auth_context, get_auth_service
from ..errors import InvalidCredentials
from ..schemas import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
    ValidationErrorResponse,
)
from ..service import AuthContext, AuthService
from ..utils.event_logger import log_auth_event
from ..validation import clean_text

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)

COMMON_RESPONSES = {
    500: {"description": "Internal server error", "model": MessageResponse},
}
UNAUTHENTICATED_RESPONSES = {
    401: {"description": "Unauthorized", "model": MessageResponse},
    **COMMON_RESPONSES,
}
VALIDATION_RESPONSES = {
    422: {"description": "Unprocessable Entity", "model": ValidationErrorResponse},
    **COMMON_RESPONSES,
}


@router.post(
    "/register",
    response_model=RegisterResponse,
    tags=["Register"],
    summary="Register a new User",
    responses=VALIDATION_RESPONSES,
)
def register(
    request: Request,
    payload: Optional[RegisterRequest] = None,
    service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db),
):
    """This endpoint allows you to register a new user."""
    # an empty body still runs the field rules
    if payload is None:
        payload = RegisterRequest()
    user = service.register(
        payload.name,
        payload.email,
        payload.password,
        payload.password_confirmation,
    )
    log_auth_event("register", user.email, request, db, user_id=user.id)
    return RegisterResponse()


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    tags=["Login"],
    summary="Login a User",
    responses=VALIDATION_RESPONSES,
)
def login(
    request: Request,
    payload: Optional[LoginRequest] = None,
    service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db),
):
    """
    Exchange an email and password for a bearer token.

    Declined credentials are not an HTTP error: the response is a 200 with
    ``status: false`` and a message telling an unknown email apart from a
    wrong password.
    """
    if payload is None:
        payload = LoginRequest()
    email = clean_text(payload.email)
    try:
        issued = service.login(email, payload.password)
    except InvalidCredentials as exc:
        log_auth_event(
            "login_failure", email, request, db,
            user_id=exc.user.id if exc.user is not None else None,
            metadata={"reason": exc.reason},
        )
        return LoginResponse(status=False, message=exc.message)

    log_auth_event("login_success", issued.user.email, request, db, user_id=issued.user.id)
    return LoginResponse(status=True, message="Login successful", token=issued.token)


@router.get(
    "/profile",
    response_model=ProfileResponse,
    tags=["Profile"],
    summary="Get User Profile",
    responses=UNAUTHENTICATED_RESPONSES,
)
def profile(
    context: AuthContext = Depends(get_auth_context),
    service: AuthService = Depends(get_auth_service),
):
    """This endpoint allows you to retrieve the profile of the authenticated user."""
    user = service.profile(context)
    return ProfileResponse(data=UserResponse.model_validate(user), id=user.id)


@router.get(
    "/logout",
    response_model=LogoutResponse,
    tags=["Logout"],
    summary="Logout the current User",
    responses=UNAUTHENTICATED_RESPONSES,
)
def logout(
    request: Request,
    context: AuthContext = Depends(get_auth_context),
    service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db),
):
    """Revoke the bearer token used for this request."""
    service.logout(context)
    log_auth_event(
        "logout", context.user.email, request, db,
        user_id=context.user.id,
        metadata={"token_id": context.token_id},
    )
    return LogoutResponse()
