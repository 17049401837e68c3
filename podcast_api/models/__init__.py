"""SQLAlchemy ORM models."""

from podcast_api.models.base import Base
from podcast_api.models.podcast import Episode, Podcast
from podcast_api.models.review import Review
from podcast_api.models.subscription import Subscription
from podcast_api.models.user import User, UserRole

__all__ = [
    "Base",
    "Episode",
    "Podcast",
    "Review",
    "Subscription",
    "User",
    "UserRole",
]
