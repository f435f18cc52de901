"""Job schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from jobboard.schemas.common import CamelModel, RequestModel
from jobboard.schemas.company import CompanySummary


class JobCreate(RequestModel):
    title: str = Field(min_length=3)
    description: str = Field(min_length=20)
    location: str = Field(min_length=2)
    company_id: int = Field(ge=1)


class JobUpdate(RequestModel):
    """Partial update; omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, min_length=3)
    description: Optional[str] = Field(default=None, min_length=20)
    location: Optional[str] = Field(default=None, min_length=2)
    company_id: Optional[int] = Field(default=None, ge=1)


class JobResponse(CamelModel):
    id: int
    title: str
    description: str
    location: str
    company_id: int
    created_at: datetime
    company: Optional[CompanySummary] = None
    application_count: Optional[int] = None
