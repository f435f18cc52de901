"""
Company API endpoints (ADMIN only).
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobboard.api.deps import require_roles
from jobboard.core.security import Identity
from jobboard.db.session import get_db
from jobboard.models import Role
from jobboard.repositories import CompanyRepository, JobRepository
from jobboard.schemas import CompanyCreate, CompanyResponse, CompanyUpdate, JobResponse

logger = logging.getLogger(__name__)

admin_only = require_roles(Role.ADMIN)

router = APIRouter(dependencies=[Depends(admin_only)])


@router.get("")
def list_companies(db: Session = Depends(get_db)):
    """List all companies with their job counts."""
    rows = CompanyRepository(db).list()
    return {
        "companies": [
            CompanyResponse.model_validate(company).model_copy(update={"job_count": count})
            for company, count in rows
        ]
    }


@router.get("/{company_id}")
def get_company(company_id: int, db: Session = Depends(get_db)):
    """Get a company with its jobs, newest first."""
    company = CompanyRepository(db).get(company_id)

    jobs_repo = JobRepository(db)
    jobs = jobs_repo.for_company(company.id)
    counts = jobs_repo.application_counts([job.id for job in jobs])

    return {
        "company": CompanyResponse.model_validate(company).model_copy(
            update={"job_count": len(jobs)}
        ),
        "jobs": [
            JobResponse.model_validate(job).model_copy(
                update={"application_count": counts[job.id]}
            )
            for job in jobs
        ],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_company(
    data: CompanyCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(admin_only),
):
    company = CompanyRepository(db).create(**data.model_dump())
    logger.info("Company %s created by user %s", company.id, identity.id)

    return {
        "message": "Company created successfully",
        "company": CompanyResponse.model_validate(company),
    }


@router.put("/{company_id}")
def update_company(
    company_id: int,
    data: CompanyUpdate,
    db: Session = Depends(get_db),
):
    company = CompanyRepository(db).update(company_id, **data.model_dump(exclude_unset=True))

    return {
        "message": "Company updated successfully",
        "company": CompanyResponse.model_validate(company),
    }


@router.delete("/{company_id}")
def delete_company(
    company_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(admin_only),
):
    CompanyRepository(db).delete(company_id)
    logger.info("Company %s deleted by user %s", company_id, identity.id)

    return {"message": "Company deleted successfully"}
