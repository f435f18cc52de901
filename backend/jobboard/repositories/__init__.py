from jobboard.repositories.base import Pagination, paginate
from jobboard.repositories.users import UserRepository
from jobboard.repositories.companies import CompanyRepository
from jobboard.repositories.jobs import JobRepository
from jobboard.repositories.applications import ApplicationRepository
from jobboard.repositories.analytics import AnalyticsRepository

__all__ = [
    "Pagination",
    "paginate",
    "UserRepository",
    "CompanyRepository",
    "JobRepository",
    "ApplicationRepository",
    "AnalyticsRepository",
]
