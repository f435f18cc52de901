"""
Request dependencies for authentication and authorization.

Authentication turns the bearer header into an Identity; the role gate
then checks the identity's role against the roles a route permits.
Per-resource ownership checks live in ``jobboard.core.permissions`` and
run inside the handlers.
"""

import logging
from typing import Callable

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from jobboard.core.config import Settings
from jobboard.core.exceptions import Forbidden, InvalidToken, Unauthorized
from jobboard.core.security import Identity, TokenService
from jobboard.db.session import get_db
from jobboard.models import Role, User
from jobboard.services.uploads import CVStorage

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_cv_storage(request: Request) -> CVStorage:
    return request.app.state.cv_storage


def get_current_identity(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db),
) -> Identity:
    """
    Dependency to authenticate the caller from the Authorization header.

    The token names the user; role and company are read from the stored
    user, so changes to the account take effect on the next request.

    Raises MissingToken / InvalidToken (401) when no valid token is present
    or its user no longer exists.
    """
    try:
        token = tokens.extract_from_header(request.headers.get("Authorization"))
        claims = tokens.verify(token)
        user = db.get(User, claims.id)
        if user is None:
            raise InvalidToken("User no longer exists")
    except Unauthorized as exc:
        logger.warning(
            "Rejected %s %s: %s", request.method, request.url.path, exc.message
        )
        raise

    return Identity(id=user.id, role=user.role, company_id=user.company_id)


def require_roles(*roles: Role) -> Callable[..., Identity]:
    """
    Build a dependency admitting only identities whose role is in ``roles``.

    Usage::

        @router.post("/", dependencies=[Depends(require_roles(Role.ADMIN))])
    """
    allowed = frozenset(roles)

    def role_gate(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in allowed:
            raise Forbidden("Insufficient permissions")
        return identity

    return role_gate
