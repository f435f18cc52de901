from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import joinedload

from jobboard.core.exceptions import Conflict, NotFound
from jobboard.models import Application, ApplicationStatus, Job, User
from jobboard.repositories.base import DEFAULT_LIMIT, DEFAULT_PAGE, Pagination, Repository, paginate

ALREADY_APPLIED = "You have already applied for this job"


class ApplicationRepository(Repository):
    """Persistence operations for job applications."""

    def _query(self):
        return self.db.query(Application).options(
            joinedload(Application.user),
            joinedload(Application.job).joinedload(Job.company),
        )

    def get(self, application_id: int) -> Application:
        application = self._query().filter(Application.id == application_id).first()
        if application is None:
            raise NotFound("Application", application_id)
        return application

    def find(self, user_id: int, job_id: int) -> Optional[Application]:
        return (
            self.db.query(Application)
            .filter(Application.user_id == user_id, Application.job_id == job_id)
            .first()
        )

    def list(
        self,
        user_id: Optional[int] = None,
        job_id: Optional[int] = None,
        status: Optional[ApplicationStatus] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> tuple[list[Application], Pagination]:
        query = self._query()
        if user_id is not None:
            query = query.filter(Application.user_id == user_id)
        if job_id is not None:
            query = query.filter(Application.job_id == job_id)
        if status is not None:
            query = query.filter(Application.status == status)

        query = query.order_by(Application.applied_at.desc(), Application.id.desc())
        return paginate(query, page, limit)

    def check_can_apply(self, user_id: int, job_id: int) -> None:
        """Raise NotFound for an unknown user or job, Conflict if already applied."""
        if self.db.get(User, user_id) is None:
            raise NotFound("User", user_id)
        if self.db.get(Job, job_id) is None:
            raise NotFound("Job", job_id)
        if self.find(user_id, job_id) is not None:
            raise Conflict(ALREADY_APPLIED, error="Already applied")

    def create(self, user_id: int, job_id: int, cv_url: str) -> Application:
        self.check_can_apply(user_id, job_id)

        application = Application(
            user_id=user_id,
            job_id=job_id,
            cv_url=cv_url,
            status=ApplicationStatus.PENDING,
        )
        self.db.add(application)
        self._commit(ALREADY_APPLIED, conflict_error="Already applied")
        return self.get(application.id)

    def update_status(self, application_id: int, status: ApplicationStatus) -> Application:
        application = self.get(application_id)
        application.status = status
        self.db.commit()
        return application

    def delete(self, application_id: int) -> Application:
        application = self.get(application_id)
        self.db.delete(application)
        self.db.commit()
        return application
