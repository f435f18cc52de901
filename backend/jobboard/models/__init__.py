from jobboard.models.user import User, Role
from jobboard.models.company import Company
from jobboard.models.job import Job
from jobboard.models.application import Application, ApplicationStatus

__all__ = ["User", "Role", "Company", "Job", "Application", "ApplicationStatus"]
