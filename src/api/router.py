"""Main API router: mounts versioned sub-routers under /api/v1."""

from fastapi import APIRouter

from src.api.status import router as status_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(status_router)
