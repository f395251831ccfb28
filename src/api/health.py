"""Health check endpoint: 200 with a report while the database answers, 503 otherwise."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncEngine

from src.database import get_engine
from src.schemas.health import HealthResponse
from src.services.health import build_health_report

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Database unreachable"}},
)
async def health(db: AsyncEngine = Depends(get_engine)) -> HealthResponse | Response:  # noqa: B008
    """Return application and database health.

    Executes ``SELECT 1`` on the shared pool and reports its latency.  When the
    probe fails the report is discarded and an empty ``503`` is returned, so
    load balancers take the instance out of rotation.
    """
    report = await build_health_report(db)
    if report.status == "unhealthy":
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return report
