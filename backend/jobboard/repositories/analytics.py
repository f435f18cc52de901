from __future__ import annotations

from datetime import timedelta
from typing import Any

from sqlalchemy import func

from jobboard.db.base import utc_now
from jobboard.models import Application, ApplicationStatus, Company, Job, User
from jobboard.repositories.base import Repository

RANGES = {
    "7d": 7,
    "30d": 30,
    "90d": 90,
    "1y": 365,
}


class AnalyticsRepository(Repository):
    """Platform-wide counters for the admin dashboard."""

    def overview(self, range_key: str = "30d") -> dict[str, Any]:
        since = utc_now() - timedelta(days=RANGES[range_key])

        users_total = self.db.query(func.count(User.id)).scalar()
        users_new = self.db.query(func.count(User.id)).filter(User.created_at >= since).scalar()

        companies_total = self.db.query(func.count(Company.id)).scalar()
        companies_new = (
            self.db.query(func.count(Company.id)).filter(Company.created_at >= since).scalar()
        )

        jobs_total = self.db.query(func.count(Job.id)).scalar()
        jobs_new = self.db.query(func.count(Job.id)).filter(Job.created_at >= since).scalar()

        by_status = dict(
            self.db.query(Application.status, func.count(Application.id))
            .group_by(Application.status)
            .all()
        )
        applications_new = (
            self.db.query(func.count(Application.id))
            .filter(Application.applied_at >= since)
            .scalar()
        )

        return {
            "range": range_key,
            "users": {"total": users_total, "new": users_new},
            "companies": {"total": companies_total, "new": companies_new},
            "jobs": {"total": jobs_total, "new": jobs_new},
            "applications": {
                "total": sum(by_status.values()),
                "new": applications_new,
                **{status.value.lower(): by_status.get(status, 0) for status in ApplicationStatus},
            },
        }
