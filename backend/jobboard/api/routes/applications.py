"""
Application API endpoints.

Users apply to jobs by uploading a PDF CV; companies and admins review
the applications of their jobs.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session

from jobboard.api.deps import get_current_identity, get_cv_storage, require_roles
from jobboard.core.permissions import (
    can_delete_application,
    can_update_application_status,
    can_view_job_applications,
    ensure,
)
from jobboard.core.security import Identity
from jobboard.db.session import get_db
from jobboard.models import Application, ApplicationStatus, Role
from jobboard.repositories import ApplicationRepository, JobRepository, Pagination
from jobboard.schemas import ApplicationResponse, ApplicationStatusUpdate, PaginationInfo
from jobboard.services.uploads import CVStorage

logger = logging.getLogger(__name__)

router = APIRouter()

user_only = require_roles(Role.USER)
admin_only = require_roles(Role.ADMIN)
company_or_admin = require_roles(Role.COMPANY, Role.ADMIN)


def _application_page(applications: list[Application], pagination: Pagination) -> dict:
    return {
        "applications": [ApplicationResponse.model_validate(a) for a in applications],
        "pagination": PaginationInfo.model_validate(pagination),
    }


@router.get("", dependencies=[Depends(admin_only)])
def list_applications(
    status_filter: Optional[ApplicationStatus] = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """All applications on the platform (ADMIN)."""
    applications, pagination = ApplicationRepository(db).list(
        status=status_filter, page=page, limit=limit
    )
    return _application_page(applications, pagination)


@router.get("/my-applications")
def list_my_applications(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    identity: Identity = Depends(user_only),
    db: Session = Depends(get_db),
):
    applications, pagination = ApplicationRepository(db).list(
        user_id=identity.id, page=page, limit=limit
    )
    return _application_page(applications, pagination)


@router.get("/job/{job_id}")
def list_job_applications(
    job_id: int,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    identity: Identity = Depends(company_or_admin),
    db: Session = Depends(get_db),
):
    job = JobRepository(db).get(job_id)
    ensure(
        can_view_job_applications(identity, job),
        "You can only view applications for your own company's jobs",
    )

    applications, pagination = ApplicationRepository(db).list(
        job_id=job.id, page=page, limit=limit
    )
    return _application_page(applications, pagination)


@router.post("/jobs/{job_id}/apply", status_code=status.HTTP_201_CREATED)
def apply_for_job(
    job_id: int,
    cv: Optional[UploadFile] = File(default=None),
    identity: Identity = Depends(user_only),
    storage: CVStorage = Depends(get_cv_storage),
    db: Session = Depends(get_db),
):
    """
    Apply for a job with a PDF CV (multipart field ``cv``).

    The file is validated before anything is written; it is stored only
    once the job exists and the user has not applied yet.
    """
    content = storage.read(cv)

    repo = ApplicationRepository(db)
    repo.check_can_apply(identity.id, job_id)

    cv_url = storage.store(content, cv.filename)
    try:
        application = repo.create(identity.id, job_id, cv_url=cv_url)
    except Exception:
        storage.remove(cv_url)
        raise

    logger.info("User %s applied to job %s (application %s)", identity.id, job_id, application.id)

    return {
        "message": "Application submitted successfully",
        "application": ApplicationResponse.model_validate(application),
    }


@router.put("/{application_id}")
def update_application_status(
    application_id: int,
    data: ApplicationStatusUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    repo = ApplicationRepository(db)
    application = repo.get(application_id)

    ensure(
        can_update_application_status(identity, application, data.status),
        "You do not have permission to update this application",
    )

    application = repo.update_status(application_id, data.status)
    logger.info(
        "Application %s set to %s by user %s", application_id, data.status.value, identity.id
    )

    return {
        "message": "Application updated successfully",
        "application": ApplicationResponse.model_validate(application),
    }


@router.delete("/{application_id}")
def delete_application(
    application_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    repo = ApplicationRepository(db)
    application = repo.get(application_id)

    ensure(
        can_delete_application(identity, application),
        "You do not have permission to delete this application",
    )

    repo.delete(application_id)
    logger.info("Application %s deleted by user %s", application_id, identity.id)

    return {"message": "Application deleted successfully"}
