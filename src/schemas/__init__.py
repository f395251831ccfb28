from .common import ErrorCode, ErrorResponse
from .health import DatabaseHealth, HealthResponse, StatusResponse

__all__ = [
    # common
    "ErrorCode",
    "ErrorResponse",
    # health
    "DatabaseHealth",
    "HealthResponse",
    "StatusResponse",
]
