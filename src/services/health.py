"""Health reporting service.

Provides two public async functions:
- ``check_database``: runs the probe query and measures its latency.
- ``build_health_report``: assembles the full ``/health`` payload.
"""

import logging
import time
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncEngine

from src.config import SERVICE_NAME, VERSION
from src.database import ping
from src.schemas.health import DatabaseHealth, HealthResponse, StatusResponse

logger = logging.getLogger(__name__)

STATUS_MESSAGE = "Bixor Rust Service is running"


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


async def check_database(db: AsyncEngine, start: float | None = None) -> DatabaseHealth:
    """Probe *db* once and report its status and round-trip latency.

    A failed probe is logged and reported as ``unhealthy``; it never raises.
    The latency is measured in both cases.
    """
    if start is None:
        start = time.perf_counter()
    try:
        await ping(db)
    except Exception as exc:  # noqa: BLE001
        logger.error("Database health check failed: %s", exc)
        return DatabaseHealth(status="unhealthy", response_time_ms=_elapsed_ms(start))
    return DatabaseHealth(status="healthy", response_time_ms=_elapsed_ms(start))


async def build_health_report(db: AsyncEngine) -> HealthResponse:
    """Return the ``/health`` payload for the current request.

    ``details.uptime`` is read from the same request-local timer as the probe
    latency, not from process start.
    """
    start = time.perf_counter()
    database = await check_database(db, start)
    details = {
        "version": VERSION,
        "uptime": f"{_elapsed_ms(start)}ms",
    }
    return HealthResponse(
        status=database.status,
        service=SERVICE_NAME,
        timestamp=datetime.now(UTC),
        database=database,
        details=details,
    )


def build_status() -> StatusResponse:
    return StatusResponse(
        message=STATUS_MESSAGE,
        timestamp=datetime.now(UTC),
        service=SERVICE_NAME,
        version=VERSION,
    )
