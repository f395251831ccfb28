from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

HealthState = Literal["healthy", "unhealthy"]


class DatabaseHealth(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "response_time_ms": 2,
            }
        }
    )

    status: HealthState
    response_time_ms: int = Field(ge=0)


class HealthResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "service": "bixor-rust-service",
                "timestamp": "2026-01-01T12:00:00Z",
                "database": {"status": "healthy", "response_time_ms": 2},
                "details": {"version": "1.0.0", "uptime": "2ms"},
            }
        }
    )

    status: HealthState  # always equal to database.status
    service: str
    timestamp: datetime
    database: DatabaseHealth
    details: dict[str, str]


class StatusResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Bixor Rust Service is running",
                "timestamp": "2026-01-01T12:00:00Z",
                "service": "bixor-rust-service",
                "version": "1.0.0",
            }
        }
    )

    message: str
    timestamp: datetime
    service: str
    version: str
