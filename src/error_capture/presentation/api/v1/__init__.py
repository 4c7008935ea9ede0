"""API v1 router configuration."""

from fastapi import APIRouter

from .endpoints import errors, health, logs, metrics, reports

v1_router = APIRouter(
    prefix="/api/v1",
    responses={
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
    },
)

v1_router.include_router(errors.router, prefix="/errors", tags=["errors"])
v1_router.include_router(logs.router, prefix="/logs", tags=["logs"])
v1_router.include_router(reports.router, prefix="/reports", tags=["reports"])
v1_router.include_router(health.router, prefix="/health", tags=["health"])
v1_router.include_router(metrics.router, prefix="/metrics", tags=["metrics"])

__all__ = [
    "v1_router",
]
