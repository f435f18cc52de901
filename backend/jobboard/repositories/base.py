"""Shared repository helpers."""

import math
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from jobboard.core.exceptions import Conflict

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass
class Pagination:
    """Page metadata returned alongside a page of results."""

    page: int
    limit: int
    total: int
    pages: int


def paginate(query: Query, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> tuple[list[Any], Pagination]:
    """
    Apply skip/take to ``query`` and count the unpaged result.

    Args:
        query: An ordered SQLAlchemy query
        page: 1-based page number
        limit: Page size

    Returns:
        The items of the requested page and its Pagination metadata
    """
    page = max(page, 1)
    limit = max(limit, 1)

    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()

    return items, Pagination(
        page=page,
        limit=limit,
        total=total,
        pages=math.ceil(total / limit),
    )


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when ``exc`` comes from a UNIQUE or primary key constraint."""
    orig = exc.orig
    # SQLSTATE 23505 on PostgreSQL drivers
    if getattr(orig, "pgcode", None) == "23505" or getattr(orig, "sqlstate", None) == "23505":
        return True
    return "unique constraint" in str(orig).lower()


class Repository:
    """Base class binding a repository to a session."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, conflict_message: str, conflict_error: str = "Conflict") -> None:
        """
        Commit, turning a database uniqueness violation into a Conflict.

        Other integrity errors (foreign keys, NOT NULL) are re-raised as is.
        """
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if is_unique_violation(exc):
                raise Conflict(conflict_message, error=conflict_error) from exc
            raise
