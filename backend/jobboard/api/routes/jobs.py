"""
Job API endpoints.

Listing and detail views are public; mutations require a COMPANY or
ADMIN identity, and COMPANY identities may only touch their own jobs.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobboard.api.deps import require_roles
from jobboard.core.permissions import can_manage_company_resources, ensure
from jobboard.core.security import Identity
from jobboard.db.session import get_db
from jobboard.models import Job, Role
from jobboard.repositories import JobRepository, Pagination
from jobboard.schemas import JobCreate, JobResponse, JobUpdate, PaginationInfo

logger = logging.getLogger(__name__)

router = APIRouter()

company_or_admin = require_roles(Role.COMPANY, Role.ADMIN)


def _job_page(repo: JobRepository, jobs: list[Job], pagination: Pagination) -> dict:
    counts = repo.application_counts([job.id for job in jobs])
    return {
        "jobs": [
            JobResponse.model_validate(job).model_copy(
                update={"application_count": counts[job.id]}
            )
            for job in jobs
        ],
        "pagination": PaginationInfo.model_validate(pagination),
    }


@router.get("")
def list_jobs(
    title: Optional[str] = None,
    location: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """
    Public job search.

    Optional filters:
    - title / location: case-insensitive substring match
    - page / limit: Pagination
    """
    repo = JobRepository(db)
    jobs, pagination = repo.list(title=title, location=location, page=page, limit=limit)
    return _job_page(repo, jobs, pagination)


@router.get("/company/my-jobs")
def list_my_jobs(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    identity: Identity = Depends(company_or_admin),
    db: Session = Depends(get_db),
):
    """Jobs of the caller's company; all jobs for admins."""
    repo = JobRepository(db)
    jobs, pagination = repo.list(
        company_id=identity.company_id,
        scope_to_company=identity.role is Role.COMPANY,
        page=page,
        limit=limit,
    )
    return _job_page(repo, jobs, pagination)


@router.get("/{job_id}")
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Get job by ID (public)."""
    repo = JobRepository(db)
    job = repo.get(job_id)
    return {
        "job": JobResponse.model_validate(job).model_copy(
            update={"application_count": repo.count_applications(job.id)}
        )
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_job(
    data: JobCreate,
    identity: Identity = Depends(company_or_admin),
    db: Session = Depends(get_db),
):
    ensure(
        can_manage_company_resources(identity, data.company_id),
        "You can only create jobs for your own company",
    )

    job = JobRepository(db).create(**data.model_dump())
    logger.info("Job %s created for company %s by user %s", job.id, job.company_id, identity.id)

    return {"message": "Job created successfully", "job": JobResponse.model_validate(job)}


@router.put("/{job_id}")
def update_job(
    job_id: int,
    data: JobUpdate,
    identity: Identity = Depends(company_or_admin),
    db: Session = Depends(get_db),
):
    repo = JobRepository(db)
    existing = repo.get(job_id)

    ensure(
        can_manage_company_resources(identity, existing.company_id),
        "You can only update jobs from your own company",
    )
    if data.company_id is not None and data.company_id != existing.company_id:
        ensure(
            can_manage_company_resources(identity, data.company_id),
            "You can only assign jobs to your own company",
        )

    job = repo.update(job_id, **data.model_dump(exclude_unset=True))

    return {"message": "Job updated successfully", "job": JobResponse.model_validate(job)}


@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    identity: Identity = Depends(company_or_admin),
    db: Session = Depends(get_db),
):
    repo = JobRepository(db)
    existing = repo.get(job_id)

    ensure(
        can_manage_company_resources(identity, existing.company_id),
        "You can only delete jobs from your own company",
    )

    repo.delete(job_id)
    logger.info("Job %s deleted by user %s", job_id, identity.id)

    return {"message": "Job deleted successfully"}
