"""
JobBoard Database Seeder

Creates demo accounts, companies and jobs:
- Admin (admin@jobboard.com / admin123)
- Company manager linked to TechCorp Solutions (company@jobboard.com / company123)
- Regular user (user@jobboard.com / user123)
"""

from typing import Optional

from jobboard.core.config import Settings
from jobboard.core.security import get_password_hash
from jobboard.db.session import Database
from jobboard.models import Company, Job, Role, User

COMPANIES = [
    {
        "name": "TechCorp Solutions",
        "description": "Leading technology solutions provider specializing in software development and digital transformation.",
        "logo_url": "https://via.placeholder.com/150x150/3B82F6/FFFFFF?text=TC",
    },
    {
        "name": "InnovateSoft",
        "description": "Innovative software company focused on creating cutting-edge applications and platforms.",
        "logo_url": "https://via.placeholder.com/150x150/10B981/FFFFFF?text=IS",
    },
    {
        "name": "DataFlow Systems",
        "description": "Data analytics and business intelligence solutions for modern enterprises.",
        "logo_url": "https://via.placeholder.com/150x150/F59E0B/FFFFFF?text=DF",
    },
]

# (title, location, index into COMPANIES)
JOBS = [
    ("Senior Full-Stack Developer", "Berlin, Germany", 0),
    ("Frontend Developer (React)", "Munich, Germany", 0),
    ("Backend Engineer (Python)", "Hamburg, Germany", 1),
    ("DevOps Engineer", "Frankfurt, Germany", 1),
    ("Data Scientist", "Stuttgart, Germany", 2),
    ("Product Manager", "Cologne, Germany", 2),
]


def seed_database(settings: Optional[Settings] = None):
    """Seed the database with demo data."""
    database = Database((settings or Settings()).DATABASE_URL)

    # Create all tables
    database.create_all()

    db = database.session()

    try:
        # Check if already seeded
        existing_admin = db.query(User).filter(User.email == "admin@jobboard.com").first()
        if existing_admin:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        companies = [Company(**data) for data in COMPANIES]
        db.add_all(companies)
        db.flush()  # Get IDs

        db.add_all(
            [
                User(
                    name="Admin User",
                    email="admin@jobboard.com",
                    hashed_password=get_password_hash("admin123"),
                    role=Role.ADMIN,
                ),
                User(
                    name="Company Manager",
                    email="company@jobboard.com",
                    hashed_password=get_password_hash("company123"),
                    role=Role.COMPANY,
                    company_id=companies[0].id,
                ),
                User(
                    name="John Doe",
                    email="user@jobboard.com",
                    hashed_password=get_password_hash("user123"),
                    role=Role.USER,
                ),
            ]
        )

        for title, location, company_index in JOBS:
            db.add(
                Job(
                    title=title,
                    description=f"{title} at {companies[company_index].name}. "
                    "Join our team and help us build great products.",
                    location=location,
                    company_id=companies[company_index].id,
                )
            )

        db.commit()
        print(f"Seeded {len(companies)} companies, 3 users and {len(JOBS)} jobs.")

    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    seed_database()
