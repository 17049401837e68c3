"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker

from podcast_api.api.v1 import router as v1_router
from podcast_api.auth.identity import IdentityMiddleware
from podcast_api.core.config import Settings, settings as default_settings
from podcast_api.core.database import SessionLocal
from podcast_api.core.security import HashingError

logger = logging.getLogger(__name__)


async def hashing_error_handler(request: Request, exc: HashingError) -> JSONResponse:
    logger.error(
        "Credential hashing failed",
        extra={"path": request.url.path, "error": exc.message},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(
    session_factory: sessionmaker | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the API app.

    session_factory defaults to the PostgreSQL SessionLocal; both the request
    sessions (get_db) and identity lookups use it. settings default to the
    environment; routes read them back through get_app_settings.
    """
    settings = settings or default_settings
    app = FastAPI(
        title="Podcast API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.session_factory = session_factory or SessionLocal
    app.state.settings = settings

    app.add_middleware(IdentityMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(HashingError, hashing_error_handler)

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Podcast API"}

    return app


app = create_app()
