"""
Security utilities for authentication and authorization.

Provides password hashing (bcrypt) and JWT token management.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from jobboard.core.config import Settings
from jobboard.core.exceptions import InvalidToken, MissingToken
from jobboard.models.user import Role

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BEARER_PREFIX = "Bearer "


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: The plain text password to hash

    Returns:
        The hashed password string
    """
    return pwd_context.hash(password)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller decoded from a bearer token."""

    id: int
    role: Role
    company_id: Optional[int] = None


class TokenService:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(hours=24),
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

    def issue(
        self,
        subject: int,
        role: Role,
        company_id: Optional[int] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a JWT access token.

        Args:
            subject: The user id the token identifies
            role: The user's role at issue time
            company_id: Company the user is scoped to (COMPANY role)
            expires_delta: Optional custom expiration time

        Returns:
            The encoded JWT token string
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self.expires_delta)

        to_encode = {
            "sub": str(subject),
            "role": Role(role).value,
            "companyId": company_id,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """
        Decode and validate a JWT access token.

        Raises:
            InvalidToken: signature invalid, malformed, expired, or the
                claims do not describe a known user role.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except InvalidTokenError as exc:
            raise InvalidToken() from exc

        try:
            subject = int(payload["sub"])
            role = Role(payload.get("role"))
        except (TypeError, ValueError) as exc:
            raise InvalidToken() from exc

        company_id = payload.get("companyId")
        if company_id is not None and not isinstance(company_id, int):
            raise InvalidToken()

        return Identity(id=subject, role=role, company_id=company_id)

    @staticmethod
    def extract_from_header(header_value: Optional[str]) -> str:
        """Return the token part of an ``Authorization: Bearer <token>`` header."""
        if not header_value or not header_value.startswith(BEARER_PREFIX):
            raise MissingToken()
        token = header_value[len(BEARER_PREFIX):].strip()
        if not token:
            raise MissingToken()
        return token
