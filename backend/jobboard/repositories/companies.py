from __future__ import annotations

from typing import Optional

from sqlalchemy import func

from jobboard.core.exceptions import Conflict, NotFound
from jobboard.models import Company, Job, User
from jobboard.repositories.base import Repository

NAME_TAKEN = "A company with this name already exists"


class CompanyRepository(Repository):
    """Persistence operations for companies."""

    def get(self, company_id: int) -> Company:
        company = self.db.get(Company, company_id)
        if company is None:
            raise NotFound("Company", company_id)
        return company

    def get_by_name(self, name: str) -> Optional[Company]:
        return self.db.query(Company).filter(Company.name == name).first()

    def list(self) -> list[tuple[Company, int]]:
        """All companies, newest first, each with its job count."""
        job_counts = (
            self.db.query(Job.company_id, func.count(Job.id).label("job_count"))
            .group_by(Job.company_id)
            .subquery()
        )
        rows = (
            self.db.query(Company, func.coalesce(job_counts.c.job_count, 0))
            .outerjoin(job_counts, job_counts.c.company_id == Company.id)
            .order_by(Company.created_at.desc(), Company.id.desc())
            .all()
        )
        return [(company, count) for company, count in rows]

    def count_jobs(self, company_id: int) -> int:
        return self.db.query(Job).filter(Job.company_id == company_id).count()

    def create(
        self,
        name: str,
        description: Optional[str] = None,
        logo_url: Optional[str] = None,
    ) -> Company:
        if self.get_by_name(name) is not None:
            raise Conflict(NAME_TAKEN, error="Company already exists")

        company = Company(name=name, description=description, logo_url=logo_url)
        self.db.add(company)
        self._commit(NAME_TAKEN, conflict_error="Company already exists")
        self.db.refresh(company)
        return company

    def update(self, company_id: int, **changes) -> Company:
        """
        Apply ``changes`` (name, description, logo_url) to a company.

        Only keys present in ``changes`` are written, so ``None`` clears an
        optional field.
        """
        company = self.get(company_id)

        name = changes.pop("name", None)
        if name and name != company.name:
            conflict = (
                self.db.query(Company)
                .filter(Company.name == name, Company.id != company_id)
                .first()
            )
            if conflict is not None:
                raise Conflict(NAME_TAKEN, error="Company name conflict")
            company.name = name

        for field in ("description", "logo_url"):
            if field in changes:
                setattr(company, field, changes[field])

        self._commit(NAME_TAKEN, conflict_error="Company name conflict")
        self.db.refresh(company)
        return company

    def delete(self, company_id: int) -> None:
        company = self.get(company_id)

        if self.count_jobs(company_id) > 0:
            raise Conflict(
                "Company has associated jobs. Delete jobs first.",
                error="Cannot delete company",
            )

        # Detach company accounts instead of failing on the foreign key
        self.db.query(User).filter(User.company_id == company_id).update(
            {User.company_id: None}, synchronize_session=False
        )
        self.db.delete(company)
        self.db.commit()
