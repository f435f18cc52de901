"""Company schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field, HttpUrl, field_serializer

from jobboard.schemas.common import CamelModel, RequestModel


class CompanyCreate(RequestModel):
    name: str = Field(min_length=2)
    description: Optional[str] = Field(default=None, min_length=10)
    logo_url: Optional[HttpUrl] = None

    @field_serializer("logo_url")
    def serialize_logo_url(self, value: Optional[HttpUrl]) -> Optional[str]:
        return str(value) if value is not None else None


class CompanyUpdate(CompanyCreate):
    """Partial update; omitted fields are left unchanged."""

    name: Optional[str] = Field(default=None, min_length=2)


class CompanySummary(CamelModel):
    """Compact company view embedded in jobs."""

    id: int
    name: str
    logo_url: Optional[str] = None


class CompanyResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    created_at: datetime
    job_count: Optional[int] = None
