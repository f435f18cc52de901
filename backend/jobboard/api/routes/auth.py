"""
Authentication API endpoints.

Handles user registration and login with JWT token generation.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobboard.api.deps import get_current_identity, get_token_service
from jobboard.core.exceptions import InvalidCredentials
from jobboard.core.security import Identity, TokenService, verify_password
from jobboard.db.session import get_db
from jobboard.models import User
from jobboard.repositories import UserRepository
from jobboard.schemas import LoginRequest, UserRegister, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _issue_for(tokens: TokenService, user: User) -> str:
    return tokens.issue(user.id, user.role, user.company_id)


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Register a new USER or COMPANY account.

    COMPANY accounts start without a company; an admin links them.
    Returns the created user together with an access token.
    """
    user = UserRepository(db).create(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        role=user_data.role,
    )
    logger.info("Registered user %s with role %s", user.id, user.role.value)

    return {
        "message": "User registered successfully",
        "user": UserResponse.model_validate(user),
        "token": _issue_for(tokens, user),
    }


@router.post("/login")
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Login with email and password and get a JWT access token."""
    user = UserRepository(db).get_by_email(credentials.email)

    if user is None or not verify_password(credentials.password, user.hashed_password):
        logger.warning("Failed login for %s", credentials.email)
        raise InvalidCredentials()

    return {
        "message": "Login successful",
        "user": UserResponse.model_validate(user),
        "token": _issue_for(tokens, user),
    }


@router.get("/me")
def get_me(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Get current authenticated user profile.

    Requires valid JWT token in Authorization header.
    """
    user = UserRepository(db).get(identity.id)
    return {"user": UserResponse.model_validate(user)}
