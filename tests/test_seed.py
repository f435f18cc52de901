"""Tests for the demo data seeder."""

from jobboard.core.config import Settings
from jobboard.core.security import verify_password
from jobboard.db.session import Database
from jobboard.models import Company, Job, Role, User
from seed_db import seed_database


def test_seed_is_idempotent(tmp_path, capsys):
    settings = Settings(_env_file=None, DATABASE_URL=f"sqlite:///{tmp_path / 'seed.db'}")

    seed_database(settings)
    seed_database(settings)
    assert "already seeded" in capsys.readouterr().out

    database = Database(settings.DATABASE_URL)
    db = database.session()
    try:
        assert db.query(Company).count() == 3
        assert db.query(Job).count() == 6

        manager = db.query(User).filter(User.email == "company@jobboard.com").one()
        assert manager.role is Role.COMPANY
        assert manager.company.name == "TechCorp Solutions"

        admin = db.query(User).filter(User.role == Role.ADMIN).one()
        assert verify_password("admin123", admin.hashed_password)
    finally:
        db.close()
        database.dispose()
