"""Request ID middleware.

Every response carries an ``X-Request-Id`` header.  An ID supplied by the
caller (typically a load balancer or health-check agent) is reused when it is
a valid UUID4; otherwise a fresh UUID4 is generated.  The ID is also stored in
a ``ContextVar`` so the access log can read it without the request object.

Register this middleware *last* so it runs outermost.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-Id"

# Defaults to "" so consumers never receive ``None``.
REQUEST_ID_CTX: ContextVar[str] = ContextVar("request_id", default="")


def _incoming_or_new(value: str | None) -> str:
    if value:
        try:
            incoming = uuid.UUID(value)
        except ValueError:
            pass
        else:
            if incoming.version == 4:
                return str(incoming)
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Propagate or assign a request ID and echo it on the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _incoming_or_new(request.headers.get(REQUEST_ID_HEADER))
        token = REQUEST_ID_CTX.set(request_id)
        try:
            response: Response = await call_next(request)
        finally:
            REQUEST_ID_CTX.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
