"""Pytest configuration and fixtures."""

import itertools

import pytest
from fastapi.testclient import TestClient

from jobboard.core.config import Settings
from jobboard.main import create_app
from jobboard.models import Application, ApplicationStatus, Company, Job, Role
from jobboard.repositories import UserRepository

TEST_SECRET = "test-secret-key-0123456789abcdef"

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


@pytest.fixture
def pdf_bytes():
    """Minimal well-formed PDF document."""
    return PDF_BYTES


@pytest.fixture
def settings(tmp_path):
    """Settings for an isolated app: in-memory database, temp upload dir."""
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        SECRET_KEY=TEST_SECRET,
        UPLOAD_DIR=str(tmp_path / "uploads"),
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """TestClient; entering it runs the lifespan, which creates the tables."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    """SQLAlchemy session for pre-populating test data."""
    session = app.state.database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def tokens(app):
    return app.state.token_service


@pytest.fixture
def auth_headers(tokens):
    """Build an Authorization header for a user."""

    def _headers(user) -> dict[str, str]:
        token = tokens.issue(user.id, user.role, user.company_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_company(db):
    counter = itertools.count(1)

    def _make(name=None, description=None, logo_url=None) -> Company:
        company = Company(
            name=name or f"Company {next(counter)}",
            description=description,
            logo_url=logo_url,
        )
        db.add(company)
        db.commit()
        db.refresh(company)
        return company

    return _make


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make(role=Role.USER, company=None, email=None, password="secret123", name=None):
        n = next(counter)
        return UserRepository(db).create(
            name=name or f"{role.value.title()} {n}",
            email=email or f"{role.value.lower()}{n}@example.com",
            password=password,
            role=role,
            company_id=company.id if company is not None else None,
        )

    return _make


@pytest.fixture
def make_job(db):
    counter = itertools.count(1)

    def _make(company, title=None, location="Berlin, Germany", description=None) -> Job:
        job = Job(
            title=title or f"Software Engineer {next(counter)}",
            description=description or "Build and maintain our backend services.",
            location=location,
            company_id=company.id,
        )
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    return _make


@pytest.fixture
def make_application(db):
    def _make(user, job, status=ApplicationStatus.PENDING) -> Application:
        application = Application(
            user_id=user.id,
            job_id=job.id,
            cv_url="/uploads/cv-test.pdf",
            status=status,
        )
        db.add(application)
        db.commit()
        db.refresh(application)
        return application

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(role=Role.ADMIN, email="admin@example.com")


@pytest.fixture
def company(make_company):
    return make_company(name="Acme Corp")


@pytest.fixture
def other_company(make_company):
    return make_company(name="Globex")


@pytest.fixture
def company_user(make_user, company):
    return make_user(role=Role.COMPANY, company=company, email="hr@acme.example.com")


@pytest.fixture
def applicant(make_user):
    return make_user(role=Role.USER, email="applicant@example.com")
