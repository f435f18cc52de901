"""Application schemas."""

from datetime import datetime
from typing import Optional

from jobboard.models import ApplicationStatus
from jobboard.schemas.common import CamelModel, RequestModel
from jobboard.schemas.job import JobResponse
from jobboard.schemas.user import UserSummary


class ApplicationStatusUpdate(RequestModel):
    status: ApplicationStatus


class ApplicationResponse(CamelModel):
    id: int
    user_id: int
    job_id: int
    cv_url: str
    status: ApplicationStatus
    applied_at: datetime
    user: Optional[UserSummary] = None
    job: Optional[JobResponse] = None
