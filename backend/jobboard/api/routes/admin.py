"""
Admin API endpoints.

Platform analytics for the admin dashboard.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.api.deps import require_roles
from jobboard.db.session import get_db
from jobboard.models import Role
from jobboard.repositories import AnalyticsRepository

router = APIRouter(dependencies=[Depends(require_roles(Role.ADMIN))])


@router.get("/analytics")
def analytics(
    time_range: Literal["7d", "30d", "90d", "1y"] = Query(default="30d", alias="range"),
    db: Session = Depends(get_db),
):
    """Totals and new records within ``range`` for users, companies, jobs and applications."""
    return AnalyticsRepository(db).overview(time_range)
