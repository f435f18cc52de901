"""Tests for the persistence layer."""

import pytest
from sqlalchemy.exc import IntegrityError

from jobboard.core.exceptions import Conflict, NotFound
from jobboard.core.security import verify_password
from jobboard.models import Application, ApplicationStatus, Company, Job, Role, User
from jobboard.repositories import (
    AnalyticsRepository,
    ApplicationRepository,
    CompanyRepository,
    JobRepository,
    UserRepository,
)


class TestUserRepository:
    def test_create_hashes_password_and_lowercases_email(self, db):
        user = UserRepository(db).create("Jane", "Jane@Example.COM", "secret123")

        assert user.email == "jane@example.com"
        assert user.role is Role.USER
        assert user.hashed_password != "secret123"
        assert verify_password("secret123", user.hashed_password)

    def test_duplicate_email(self, db, make_user):
        make_user(email="taken@example.com")
        with pytest.raises(Conflict) as exc_info:
            UserRepository(db).create("Other", "TAKEN@example.com", "secret123")
        assert exc_info.value.error == "User already exists"

    def test_company_link_requires_company_role(self, db, company):
        with pytest.raises(Conflict):
            UserRepository(db).create("Jane", "jane@example.com", "secret123", Role.USER, company.id)

    def test_company_link_to_unknown_company(self, db):
        with pytest.raises(NotFound):
            UserRepository(db).create("Jane", "jane@example.com", "secret123", Role.COMPANY, 999)

    def test_get_unknown(self, db):
        with pytest.raises(NotFound) as exc_info:
            UserRepository(db).get(404)
        assert exc_info.value.error == "User not found"

    def test_update_role_clears_company(self, db, company_user):
        user = UserRepository(db).update(company_user.id, role=Role.USER)
        assert user.role is Role.USER
        assert user.company_id is None

    def test_update_password(self, db, applicant):
        user = UserRepository(db).update(applicant.id, password="new-password")
        assert verify_password("new-password", user.hashed_password)

    def test_cannot_delete_last_admin(self, db, admin):
        with pytest.raises(Conflict) as exc_info:
            UserRepository(db).delete(admin.id)
        assert exc_info.value.error == "Cannot delete user"
        assert db.get(User, admin.id) is not None

    def test_delete_admin_when_another_remains(self, db, admin, make_user):
        make_user(role=Role.ADMIN)
        UserRepository(db).delete(admin.id)
        assert UserRepository(db).count_admins() == 1

    def test_cannot_demote_last_admin(self, db, admin):
        with pytest.raises(Conflict):
            UserRepository(db).update(admin.id, role=Role.USER)

    def test_delete_user_removes_applications(self, db, applicant, company, make_job, make_application):
        make_application(applicant, make_job(company))
        UserRepository(db).delete(applicant.id)
        assert db.query(Application).count() == 0

    def test_list_filters_by_role(self, db, admin, applicant, company_user):
        users, pagination = UserRepository(db).list(role=Role.COMPANY)
        assert [u.id for u in users] == [company_user.id]
        assert pagination.total == 1

    def test_stats(self, db, admin, applicant, company_user):
        stats = UserRepository(db).stats()
        assert stats == {
            "total": 3,
            "users": 1,
            "companies": 1,
            "admins": 1,
            "recentRegistrations": 3,
        }


class TestCompanyRepository:
    def test_duplicate_name(self, db, company):
        with pytest.raises(Conflict) as exc_info:
            CompanyRepository(db).create(company.name)
        assert exc_info.value.error == "Company already exists"

    def test_rename_to_existing_name(self, db, company, other_company):
        with pytest.raises(Conflict) as exc_info:
            CompanyRepository(db).update(other_company.id, name=company.name)
        assert exc_info.value.error == "Company name conflict"

    def test_update_only_given_fields(self, db, make_company):
        company = make_company(description="Original description")
        updated = CompanyRepository(db).update(company.id, logo_url="https://example.com/logo.png")
        assert updated.description == "Original description"
        assert updated.logo_url == "https://example.com/logo.png"

    def test_list_with_job_counts(self, db, company, other_company, make_job):
        make_job(company)
        make_job(company)
        counts = {c.id: n for c, n in CompanyRepository(db).list()}
        assert counts == {company.id: 2, other_company.id: 0}

    def test_cannot_delete_with_jobs(self, db, company, make_job):
        job = make_job(company)
        with pytest.raises(Conflict) as exc_info:
            CompanyRepository(db).delete(company.id)
        assert exc_info.value.error == "Cannot delete company"

        db.expire_all()
        assert db.get(Company, company.id).name == "Acme Corp"
        assert db.get(Job, job.id).company_id == company.id
        assert db.query(Job).filter(Job.company_id == company.id).count() == 1

    def test_delete_detaches_users(self, db, company, company_user):
        CompanyRepository(db).delete(company.id)
        db.expire_all()
        assert db.get(Company, company.id) is None
        assert db.get(User, company_user.id).company_id is None


class TestJobRepository:
    def test_pagination(self, db, company, make_job):
        for i in range(12):
            make_job(company, title=f"Job {i}")

        jobs, pagination = JobRepository(db).list(page=2, limit=5)

        assert len(jobs) == 5
        assert pagination.page == 2
        assert pagination.limit == 5
        assert pagination.total == 12
        assert pagination.pages == 3

    def test_last_page_is_partial(self, db, company, make_job):
        for i in range(12):
            make_job(company)
        jobs, pagination = JobRepository(db).list(page=3, limit=5)
        assert len(jobs) == 2
        assert pagination.pages == 3

    def test_newest_first(self, db, company, make_job):
        first = make_job(company)
        second = make_job(company)
        jobs, _ = JobRepository(db).list()
        assert [j.id for j in jobs] == [second.id, first.id]

    def test_filters_are_case_insensitive_substrings(self, db, company, make_job):
        match = make_job(company, title="Senior Python Developer", location="Berlin, Germany")
        make_job(company, title="Python Developer", location="Munich, Germany")
        make_job(company, title="Data Scientist", location="Berlin, Germany")

        jobs, pagination = JobRepository(db).list(title="python", location="BERLIN")
        assert [j.id for j in jobs] == [match.id]
        assert pagination.total == 1

    def test_filter_escapes_wildcards(self, db, company, make_job):
        make_job(company, title="Engineer")
        jobs, _ = JobRepository(db).list(title="%")
        assert jobs == []

    def test_scope_to_company_without_company(self, db, company, make_job):
        make_job(company)
        jobs, pagination = JobRepository(db).list(company_id=None, scope_to_company=True)
        assert jobs == []
        assert pagination.total == 0

    def test_create_for_unknown_company(self, db):
        with pytest.raises(NotFound) as exc_info:
            JobRepository(db).create("Engineer", "A job description long enough.", "Berlin", 999)
        assert exc_info.value.error == "Company not found"

    def test_cannot_delete_with_applications(self, db, company, applicant, make_job, make_application):
        job = make_job(company)
        make_application(applicant, job)
        with pytest.raises(Conflict) as exc_info:
            JobRepository(db).delete(job.id)
        assert exc_info.value.error == "Cannot delete job"

    def test_application_counts(self, db, company, applicant, make_user, make_job, make_application):
        busy = make_job(company)
        quiet = make_job(company)
        make_application(applicant, busy)
        make_application(make_user(), busy)

        counts = JobRepository(db).application_counts([busy.id, quiet.id])
        assert counts == {busy.id: 2, quiet.id: 0}


class TestApplicationRepository:
    def test_create_and_reject_duplicate(self, db, company, applicant, make_job):
        job = make_job(company)
        repo = ApplicationRepository(db)

        application = repo.create(applicant.id, job.id, cv_url="/uploads/cv-1.pdf")
        assert application.status is ApplicationStatus.PENDING
        assert application.job.company.id == company.id

        with pytest.raises(Conflict) as exc_info:
            repo.create(applicant.id, job.id, cv_url="/uploads/cv-2.pdf")
        assert exc_info.value.error == "Already applied"
        assert db.query(Application).count() == 1

    def test_apply_to_unknown_job(self, db, applicant):
        with pytest.raises(NotFound):
            ApplicationRepository(db).check_can_apply(applicant.id, 999)

    def test_apply_as_deleted_user(self, db, company, make_user, make_job):
        job = make_job(company)
        user = make_user()
        UserRepository(db).delete(user.id)

        with pytest.raises(NotFound) as exc_info:
            ApplicationRepository(db).create(user.id, job.id, cv_url="/uploads/cv-1.pdf")
        assert exc_info.value.error == "User not found"
        assert db.query(Application).count() == 0

    def test_foreign_key_failure_is_not_a_conflict(self, db, company, make_job):
        job = make_job(company)
        repo = ApplicationRepository(db)
        db.add(Application(user_id=999, job_id=job.id, cv_url="/uploads/cv-1.pdf"))

        with pytest.raises(IntegrityError):
            repo._commit("You have already applied for this job", conflict_error="Already applied")
        assert db.query(Application).count() == 0

    def test_unique_violation_is_a_conflict(self, db, company, applicant, make_job, make_application):
        job = make_job(company)
        make_application(applicant, job)
        repo = ApplicationRepository(db)
        db.add(Application(user_id=applicant.id, job_id=job.id, cv_url="/uploads/cv-2.pdf"))

        with pytest.raises(Conflict) as exc_info:
            repo._commit("You have already applied for this job", conflict_error="Already applied")
        assert exc_info.value.error == "Already applied"
        assert db.query(Application).count() == 1

    def test_list_by_status(self, db, company, applicant, make_user, make_job, make_application):
        job = make_job(company)
        accepted = make_application(applicant, job, status=ApplicationStatus.ACCEPTED)
        make_application(make_user(), job)

        applications, pagination = ApplicationRepository(db).list(status=ApplicationStatus.ACCEPTED)
        assert [a.id for a in applications] == [accepted.id]
        assert pagination.total == 1

    def test_update_status(self, db, company, applicant, make_job, make_application):
        application = make_application(applicant, make_job(company))
        updated = ApplicationRepository(db).update_status(application.id, ApplicationStatus.REVIEWING)
        assert updated.status is ApplicationStatus.REVIEWING


class TestAnalyticsRepository:
    def test_overview(self, db, admin, company, applicant, make_job, make_application):
        job = make_job(company)
        make_application(applicant, job, status=ApplicationStatus.REJECTED)

        overview = AnalyticsRepository(db).overview("7d")

        assert overview["range"] == "7d"
        assert overview["users"] == {"total": 2, "new": 2}
        assert overview["companies"] == {"total": 1, "new": 1}
        assert overview["jobs"] == {"total": 1, "new": 1}
        assert overview["applications"]["total"] == 1
        assert overview["applications"]["rejected"] == 1
        assert overview["applications"]["pending"] == 0
