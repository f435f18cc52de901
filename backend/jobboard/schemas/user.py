"""User and authentication schemas."""

import re
from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, Field, field_validator

from jobboard.models import Role
from jobboard.schemas.common import CamelModel, RequestModel

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")


def _validate_email(value: str) -> str:
    """Validate email format."""
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Valid email is required")
    return value.lower()


Email = Annotated[str, AfterValidator(_validate_email)]


class UserCreate(RequestModel):
    """Schema for admin user creation."""

    name: str = Field(min_length=1)
    email: Email
    password: str = Field(min_length=6)
    role: Role = Role.USER
    company_id: Optional[int] = Field(default=None, ge=1)


class UserRegister(RequestModel):
    """
    Schema for self-registration.

    Admin accounts cannot self-register, and a registered COMPANY account is
    not linked to any company; only an admin links it through ``/api/users``.
    A ``companyId`` in the body is ignored.
    """

    name: str = Field(min_length=1)
    email: Email
    password: str = Field(min_length=6)
    role: Role = Role.USER

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: Role) -> Role:
        if v is Role.ADMIN:
            raise ValueError("Role must be USER or COMPANY")
        return v


class UserUpdate(RequestModel):
    """Schema for partial user updates."""

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[Email] = None
    password: Optional[str] = Field(default=None, min_length=6)
    role: Optional[Role] = None
    company_id: Optional[int] = Field(default=None, ge=1)


class LoginRequest(RequestModel):
    email: str
    password: str = Field(min_length=1)


class UserResponse(CamelModel):
    """Schema for user response (without password)."""

    id: int
    name: str
    email: str
    role: Role
    company_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class UserSummary(CamelModel):
    id: int
    name: str
    email: str
