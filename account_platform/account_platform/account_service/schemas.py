from pydantic import BaseModel, ConfigDict, field_serializer

from datetime import datetime
from typing import Any, Dict, List, Optional


# Request bodies accept any JSON value per field; validation.py decides
# what is acceptable so every failing field is reported together.
class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    email: Any = None
    password: Any = None
    password_confirmation: Any = None


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: Any = None
    password: Any = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return value.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class RegisterResponse(BaseModel):
    status: bool = True
    message: str = "User registered successfully"
    data: List[Any] = []


class LoginResponse(BaseModel):
    status: bool
    message: str
    # absent from the body when login is declined
    token: Optional[str] = None
    data: List[Any] = []


class ProfileResponse(BaseModel):
    status: bool = True
    message: str = "Profile information"
    data: UserResponse
    id: int


class LogoutResponse(BaseModel):
    status: bool = True
    message: str = "User Logged out successfully"


class MessageResponse(BaseModel):
    message: str


class ValidationErrorResponse(BaseModel):
    message: str
    errors: Dict[str, List[str]]
