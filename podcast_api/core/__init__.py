"""Core app configuration, database, and credential/token primitives."""

from podcast_api.core.config import get_settings, settings
from podcast_api.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
