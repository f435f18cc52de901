"""
User management API endpoints (ADMIN only).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobboard.api.deps import require_roles
from jobboard.core.security import Identity
from jobboard.db.session import get_db
from jobboard.models import Role
from jobboard.repositories import UserRepository
from jobboard.schemas import PaginationInfo, UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)

admin_only = require_roles(Role.ADMIN)

router = APIRouter(dependencies=[Depends(admin_only)])


@router.get("")
def list_users(
    role: Optional[Role] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=100),
    db: Session = Depends(get_db),
):
    users, pagination = UserRepository(db).list(role=role, page=page, limit=limit)
    return {
        "users": [UserResponse.model_validate(user) for user in users],
        "pagination": PaginationInfo.model_validate(pagination),
    }


@router.get("/stats/overview")
def user_stats(db: Session = Depends(get_db)):
    """User counts per role and registrations in the last 30 days."""
    return UserRepository(db).stats()


@router.get("/{user_id}")
def get_user(user_id: int, db: Session = Depends(get_db)):
    return {"user": UserResponse.model_validate(UserRepository(db).get(user_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    identity: Identity = Depends(admin_only),
    db: Session = Depends(get_db),
):
    user = UserRepository(db).create(**data.model_dump())
    logger.info("User %s (%s) created by admin %s", user.id, user.role.value, identity.id)

    return {"message": "User created successfully", "user": UserResponse.model_validate(user)}


@router.put("/{user_id}")
def update_user(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
):
    user = UserRepository(db).update(user_id, **data.model_dump(exclude_unset=True))
    return {"message": "User updated successfully", "user": UserResponse.model_validate(user)}


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    identity: Identity = Depends(admin_only),
    db: Session = Depends(get_db),
):
    UserRepository(db).delete(user_id)
    logger.info("User %s deleted by admin %s", user_id, identity.id)

    return {"message": "User deleted successfully"}
