"""API v1 routes."""

from fastapi import APIRouter

from candidate_review.api.v1 import applications, internal, jobs

api_router = APIRouter()

# Include all route modules
api_router.include_router(applications.router, prefix="/applications", tags=["Application Review"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["Job Review Queue"])
api_router.include_router(internal.router, prefix="/internal", tags=["Internal"])
