"""Tests for password hashing and the token service."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from jobboard.core.exceptions import InvalidToken, MissingToken
from jobboard.core.security import (
    Identity,
    TokenService,
    get_password_hash,
    verify_password,
)
from jobboard.models import Role

SECRET = "unit-test-secret-key-0123456789abcdef"


@pytest.fixture
def service():
    return TokenService(secret_key=SECRET)


def test_password_hash_roundtrip():
    hashed = get_password_hash("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong-password", hashed)


def test_issue_and_verify(service):
    token = service.issue(42, Role.COMPANY, company_id=7)
    identity = service.verify(token)
    assert identity == Identity(id=42, role=Role.COMPANY, company_id=7)


def test_token_claims(service):
    token = service.issue(5, Role.USER)
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])

    assert payload["sub"] == "5"
    assert payload["role"] == "USER"
    assert payload["companyId"] is None
    # 24 hour lifetime
    assert payload["exp"] - payload["iat"] == 24 * 60 * 60


def test_expired_token_rejected(service):
    token = service.issue(1, Role.USER, expires_delta=timedelta(seconds=-1))
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_wrong_secret_rejected(service):
    token = TokenService(secret_key="another-secret-key-0123456789abcdef").issue(1, Role.ADMIN)
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_tampered_token_rejected(service):
    header, payload, signature = service.issue(1, Role.USER).split(".")
    forged = jwt.encode(
        {"sub": "1", "role": "ADMIN", "exp": 9999999999},
        "forged-secret-key-0123456789abcdef",
    ).split(".")[1]
    with pytest.raises(InvalidToken):
        service.verify(f"{header}.{forged}.{signature}")


def test_garbage_token_rejected(service):
    with pytest.raises(InvalidToken):
        service.verify("not-a-jwt")


@pytest.mark.parametrize(
    "claims",
    [
        {"sub": "1", "role": "SUPERUSER"},
        {"sub": "1"},
        {"sub": "abc", "role": "USER"},
        {"sub": "1", "role": "COMPANY", "companyId": "7"},
        {"role": "USER"},
    ],
)
def test_malformed_claims_rejected(service, claims):
    claims["exp"] = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode(claims, SECRET, algorithm="HS256")
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_extract_from_header():
    assert TokenService.extract_from_header("Bearer abc.def.ghi") == "abc.def.ghi"


@pytest.mark.parametrize("header", [None, "", "Bearer ", "Basic dXNlcjpwYXNz", "abc.def.ghi"])
def test_extract_from_header_missing(header):
    with pytest.raises(MissingToken):
        TokenService.extract_from_header(header)


def test_from_settings(settings):
    service = TokenService.from_settings(settings)
    assert service.secret_key == settings.SECRET_KEY
    assert service.expires_delta == timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
