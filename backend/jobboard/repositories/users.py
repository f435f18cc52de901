from __future__ import annotations

from datetime import timedelta
from typing import Optional

from sqlalchemy import func

from jobboard.core.exceptions import Conflict, NotFound
from jobboard.core.security import get_password_hash
from jobboard.db.base import utc_now
from jobboard.models import Company, Role, User
from jobboard.repositories.base import Pagination, Repository, paginate

EMAIL_TAKEN = "User with this email already exists"
LAST_ADMIN = "Cannot delete the last admin user"


class UserRepository(Repository):
    """Persistence operations for users."""

    def get(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("User", user_id)
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def list(
        self,
        role: Optional[Role] = None,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[User], Pagination]:
        query = self.db.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        query = query.order_by(User.created_at.desc(), User.id.desc())
        return paginate(query, page, limit)

    def count_admins(self) -> int:
        return self.db.query(User).filter(User.role == Role.ADMIN).count()

    def create(
        self,
        name: str,
        email: str,
        password: str,
        role: Role = Role.USER,
        company_id: Optional[int] = None,
    ) -> User:
        if self.get_by_email(email) is not None:
            raise Conflict(EMAIL_TAKEN, error="User already exists")

        self._check_company(role, company_id)

        user = User(
            name=name,
            email=email.lower(),
            hashed_password=get_password_hash(password),
            role=role,
            company_id=company_id,
        )
        self.db.add(user)
        self._commit(EMAIL_TAKEN, conflict_error="User already exists")
        self.db.refresh(user)
        return user

    def update(
        self,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        role: Optional[Role] = None,
        company_id: Optional[int] = None,
    ) -> User:
        user = self.get(user_id)

        if email and email.lower() != user.email:
            if self.get_by_email(email) is not None:
                raise Conflict(EMAIL_TAKEN, error="User already exists")
            user.email = email.lower()

        if role is not None and role != user.role:
            if user.role is Role.ADMIN and self.count_admins() <= 1:
                raise Conflict("Cannot change the role of the last admin user")
            user.role = role

        if company_id is not None:
            user.company_id = company_id
        if user.role is not Role.COMPANY:
            user.company_id = None
        self._check_company(user.role, user.company_id)

        if name:
            user.name = name
        if password:
            user.hashed_password = get_password_hash(password)

        self._commit(EMAIL_TAKEN, conflict_error="User already exists")
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> None:
        user = self.get(user_id)

        # At least one admin must remain
        if user.role is Role.ADMIN and self.count_admins() <= 1:
            raise Conflict(LAST_ADMIN, error="Cannot delete user")

        self.db.delete(user)
        self.db.commit()

    def stats(self, recent_days: int = 30) -> dict[str, int]:
        counts = dict(
            self.db.query(User.role, func.count(User.id)).group_by(User.role).all()
        )
        since = utc_now() - timedelta(days=recent_days)
        recent = self.db.query(User).filter(User.created_at >= since).count()

        return {
            "total": sum(counts.values()),
            "users": counts.get(Role.USER, 0),
            "companies": counts.get(Role.COMPANY, 0),
            "admins": counts.get(Role.ADMIN, 0),
            "recentRegistrations": recent,
        }

    def _check_company(self, role: Role, company_id: Optional[int]) -> None:
        if company_id is None:
            return
        if role is not Role.COMPANY:
            raise Conflict("Only COMPANY users can be linked to a company")
        if self.db.get(Company, company_id) is None:
            raise NotFound("Company", company_id)
