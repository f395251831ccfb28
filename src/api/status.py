from fastapi import APIRouter

from src.schemas.health import StatusResponse
from src.services.health import build_status

router = APIRouter(tags=["Status"])


@router.get("/status", response_model=StatusResponse)
async def get_status() -> StatusResponse:
    """Static service metadata.  Never touches the database."""
    return build_status()
