"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from podcast_api.core.config import Settings, get_app_settings
from podcast_api.core.database import check_db_connected, get_db
from podcast_api.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    app_settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Service status, database reachability, and the header clients send tokens in."""
    return HealthResponse(
        status="ok",
        environment=app_settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        auth_header=app_settings.AUTH_HEADER_NAME,
    )
