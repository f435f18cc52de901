"""
API Router Aggregator.

Combines all routers into a single router mounted under ``/api``.
"""

from fastapi import APIRouter

from jobboard.api.routes import admin, applications, auth, companies, jobs, users

api_router = APIRouter()

# Include all routers with their prefixes and tags
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    companies.router,
    prefix="/companies",
    tags=["Companies"],
)

api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["Jobs"],
)

api_router.include_router(
    applications.router,
    prefix="/applications",
    tags=["Applications"],
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
)

api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["Admin"],
)
