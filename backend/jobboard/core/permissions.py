"""
Ownership rules applied after the role gate has passed.

Each rule is a named predicate that handles every Role explicitly, so a
new role cannot be added without deciding what it may do here.
"""

from typing import Optional, assert_never

from jobboard.core.exceptions import Forbidden
from jobboard.core.security import Identity
from jobboard.models import Application, ApplicationStatus, Job, Role


def owns_company(identity: Identity, company_id: Optional[int]) -> bool:
    """True when a COMPANY identity is scoped to ``company_id``."""
    return (
        identity.role is Role.COMPANY
        and identity.company_id is not None
        and identity.company_id == company_id
    )


def can_manage_company_resources(identity: Identity, company_id: Optional[int]) -> bool:
    """Create, update or delete jobs belonging to ``company_id``."""
    match identity.role:
        case Role.ADMIN:
            return True
        case Role.COMPANY:
            return owns_company(identity, company_id)
        case Role.USER:
            return False
        case _:
            assert_never(identity.role)


def can_view_job_applications(identity: Identity, job: Job) -> bool:
    """List the applications of ``job``: admins, and the company owning it."""
    match identity.role:
        case Role.ADMIN:
            return True
        case Role.COMPANY:
            return owns_company(identity, job.company_id)
        case Role.USER:
            return False
        case _:
            assert_never(identity.role)


def can_delete_application(identity: Identity, application: Application) -> bool:
    """Admins delete anything, companies their jobs' applications, users their own."""
    match identity.role:
        case Role.ADMIN:
            return True
        case Role.COMPANY:
            return owns_company(identity, application.job.company_id)
        case Role.USER:
            return application.user_id == identity.id
        case _:
            assert_never(identity.role)


def can_update_application_status(
    identity: Identity,
    application: Application,
    new_status: ApplicationStatus,
) -> bool:
    """Reviewers move applications through any status; applicants may only withdraw."""
    match identity.role:
        case Role.ADMIN:
            return True
        case Role.COMPANY:
            return owns_company(identity, application.job.company_id)
        case Role.USER:
            return (
                application.user_id == identity.id
                and new_status is ApplicationStatus.WITHDRAWN
            )
        case _:
            assert_never(identity.role)


def ensure(allowed: bool, message: str) -> None:
    """Raise Forbidden unless ``allowed``."""
    if not allowed:
        raise Forbidden(message)
