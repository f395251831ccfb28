from pydantic import BaseModel, ConfigDict


class ErrorCode(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "NOT_FOUND",
                "message": "Not Found",
            }
        }
    )

    code: str
    message: str


class ErrorResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": {
                    "code": "NOT_FOUND",
                    "message": "Not Found",
                }
            }
        }
    )

    error: ErrorCode
