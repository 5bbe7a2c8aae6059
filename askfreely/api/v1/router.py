"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from askfreely.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from askfreely.api.v1.endpoints import email_queue, health, questions

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(questions.router, prefix="/questions", tags=["questions"])
api_router.include_router(
    email_queue.router, prefix="/email-queue", tags=["email-queue"]
)
