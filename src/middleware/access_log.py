"""Structured JSON access logging middleware.

One record per request, with a JSON message holding ``service``, ``method``,
``path``, ``status``, ``duration_ms`` and ``request_id``.  Responses with a
5xx status (including ``/health`` answering 503) are logged at ``WARNING`` so
an outage is visible without raising the global log level; everything else
is ``INFO``.

``request_id`` comes from :data:`~src.middleware.request_id.REQUEST_ID_CTX`,
so :class:`~src.middleware.request_id.RequestIdMiddleware` must wrap this one.
"""

import json
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.config import SERVICE_NAME
from src.middleware.request_id import REQUEST_ID_CTX

logger = logging.getLogger(__name__)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            json.dumps(
                {
                    "service": SERVICE_NAME,
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": duration_ms,
                    "request_id": REQUEST_ID_CTX.get(),
                }
            ),
        )
        return response
