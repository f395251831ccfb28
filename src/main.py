import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException

from src.api.health import router as health_router
from src.api.router import api_router
from src.config import VERSION, settings
from src.database import engine, ping
from src.middleware.access_log import AccessLogMiddleware
from src.middleware.error_handler import http_exception_handler, unhandled_exception_handler
from src.middleware.request_id import RequestIdMiddleware

logger = logging.getLogger(__name__)

HOST = "0.0.0.0"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_OPENAPI_TAGS = [
    {"name": "Health", "description": "Liveness and database reachability"},
    {"name": "Status", "description": "Static service metadata"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    # Startup: a failed probe aborts startup; there is no retry
    try:
        await ping(engine)
    except Exception:
        logger.exception("Database connection failed during startup")
        raise
    logger.info("Database connection established")
    yield
    # Shutdown: dispose all connections
    await engine.dispose()


app = FastAPI(
    title="Bixor Service",
    description="Health check and status microservice",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=_OPENAPI_TAGS,
)

# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unhandled_exception_handler)

# ---------------------------------------------------------------------------
# Middleware (Starlette LIFO: last add_middleware call runs outermost)
# ---------------------------------------------------------------------------

# Permissive CORS: every origin, method and header.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Reads REQUEST_ID_CTX, so it must sit inside RequestIdMiddleware.
app.add_middleware(AccessLogMiddleware)
app.add_middleware(RequestIdMiddleware)

app.include_router(health_router)
app.include_router(api_router)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)


def run() -> None:
    """Process entry point: configure logging and serve until killed."""
    configure_logging()
    logger.info("Service starting on %s:%d", HOST, settings.port)
    uvicorn.run(app, host=HOST, port=settings.port, log_level=settings.log_level.lower())
