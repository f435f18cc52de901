from __future__ import annotations

from typing import Optional

from sqlalchemy import String, func
from sqlalchemy.orm import joinedload

from jobboard.core.exceptions import Conflict, NotFound
from jobboard.models import Application, Company, Job
from jobboard.repositories.base import DEFAULT_LIMIT, DEFAULT_PAGE, Pagination, Repository, paginate


def _contains(column, text: str):
    """Case-insensitive substring match."""
    return func.lower(column, type_=String).contains(text.lower(), autoescape=True)


class JobRepository(Repository):
    """Persistence operations for jobs."""

    def get(self, job_id: int) -> Job:
        job = (
            self.db.query(Job)
            .options(joinedload(Job.company))
            .filter(Job.id == job_id)
            .first()
        )
        if job is None:
            raise NotFound("Job", job_id)
        return job

    def list(
        self,
        title: Optional[str] = None,
        location: Optional[str] = None,
        company_id: Optional[int] = None,
        scope_to_company: bool = False,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> tuple[list[Job], Pagination]:
        """
        Page through jobs, newest first.

        ``title`` and ``location`` match case-insensitively anywhere in the
        field. With ``scope_to_company`` only jobs of ``company_id`` are
        returned (none when ``company_id`` is None).
        """
        query = self.db.query(Job).options(joinedload(Job.company))

        if title:
            query = query.filter(_contains(Job.title, title))
        if location:
            query = query.filter(_contains(Job.location, location))
        if scope_to_company or company_id is not None:
            query = query.filter(Job.company_id == company_id)

        query = query.order_by(Job.created_at.desc(), Job.id.desc())
        return paginate(query, page, limit)

    def for_company(self, company_id: int) -> list[Job]:
        return (
            self.db.query(Job)
            .filter(Job.company_id == company_id)
            .order_by(Job.created_at.desc(), Job.id.desc())
            .all()
        )

    def count_applications(self, job_id: int) -> int:
        return self.db.query(Application).filter(Application.job_id == job_id).count()

    def application_counts(self, job_ids: list[int]) -> dict[int, int]:
        if not job_ids:
            return {}
        rows = (
            self.db.query(Application.job_id, func.count(Application.id))
            .filter(Application.job_id.in_(job_ids))
            .group_by(Application.job_id)
            .all()
        )
        counts = dict(rows)
        return {job_id: counts.get(job_id, 0) for job_id in job_ids}

    def create(self, title: str, description: str, location: str, company_id: int) -> Job:
        self._require_company(company_id)

        job = Job(
            title=title,
            description=description,
            location=location,
            company_id=company_id,
        )
        self.db.add(job)
        self.db.commit()
        return self.get(job.id)

    def update(self, job_id: int, **changes) -> Job:
        """Apply ``changes`` (title, description, location, company_id) to a job."""
        job = self.get(job_id)

        company_id = changes.get("company_id")
        if company_id is not None and company_id != job.company_id:
            self._require_company(company_id)

        for field in ("title", "description", "location", "company_id"):
            value = changes.get(field)
            if value is not None:
                setattr(job, field, value)

        self.db.commit()
        self.db.expire(job, ["company"])
        return self.get(job_id)

    def delete(self, job_id: int) -> None:
        job = self.get(job_id)

        if self.count_applications(job_id) > 0:
            raise Conflict(
                "Job has applications. Delete applications first.",
                error="Cannot delete job",
            )

        self.db.delete(job)
        self.db.commit()

    def _require_company(self, company_id: int) -> Company:
        company = self.db.get(Company, company_id)
        if company is None:
            raise NotFound("Company", company_id)
        return company
