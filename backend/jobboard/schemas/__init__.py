"""Pydantic schemas for request/response validation."""

from jobboard.schemas.common import CamelModel, PaginationInfo, RequestModel
from jobboard.schemas.user import (
    LoginRequest,
    UserCreate,
    UserRegister,
    UserResponse,
    UserSummary,
    UserUpdate,
)
from jobboard.schemas.company import (
    CompanyCreate,
    CompanyResponse,
    CompanySummary,
    CompanyUpdate,
)
from jobboard.schemas.job import JobCreate, JobResponse, JobUpdate
from jobboard.schemas.application import ApplicationResponse, ApplicationStatusUpdate

__all__ = [
    "ApplicationResponse",
    "ApplicationStatusUpdate",
    "CamelModel",
    "CompanyCreate",
    "CompanyResponse",
    "CompanySummary",
    "CompanyUpdate",
    "JobCreate",
    "JobResponse",
    "JobUpdate",
    "LoginRequest",
    "PaginationInfo",
    "RequestModel",
    "UserCreate",
    "UserRegister",
    "UserResponse",
    "UserSummary",
    "UserUpdate",
]
