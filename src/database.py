import ssl as _ssl
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.config import settings

_ASYNCPG_SCHEME = "postgresql+asyncpg"
_PLAIN_SCHEMES = ("postgres", "postgresql")


def _asyncpg_url(url: str) -> tuple[str, dict]:
    """Convert a database URL for asyncpg compatibility.

    Plain ``postgres://`` / ``postgresql://`` URLs are rewritten to use the
    ``postgresql+asyncpg`` driver.  asyncpg does not accept ``sslmode`` as a
    query parameter; it expects ``ssl`` to be passed via ``connect_args``, so
    ``sslmode`` is stripped from the URL and translated.
    """
    parts = urlsplit(url)
    connect_args: dict = {}

    if parts.scheme in _PLAIN_SCHEMES:
        parts = parts._replace(scheme=_ASYNCPG_SCHEME)

    qs = parse_qs(parts.query)
    if "sslmode" in qs:
        mode = qs.pop("sslmode")[0]
        if mode in ("require", "verify-ca", "verify-full"):
            connect_args["ssl"] = _ssl.create_default_context()
        parts = parts._replace(query=urlencode(qs, doseq=True))

    return urlunsplit(parts), connect_args


def build_engine(database_url: str) -> AsyncEngine:
    """Create the pooled engine.  No connection is opened until first use."""
    url, connect_args = _asyncpg_url(database_url)
    return create_async_engine(
        url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        connect_args=connect_args,
    )


engine = build_engine(settings.database_url)


def get_engine() -> AsyncEngine:
    return engine


async def ping(db: AsyncEngine) -> None:
    """Run ``SELECT 1`` on a pooled connection.  Any failure propagates."""
    async with db.connect() as conn:
        await conn.execute(text("SELECT 1"))
