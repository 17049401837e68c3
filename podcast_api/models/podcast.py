"""ORM models for podcasts and their episodes."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from podcast_api.models.base import Base, TimestampedMixin


class Podcast(TimestampedMixin, Base):
    """A podcast show. Deleting it removes its episodes, reviews and subscriptions."""

    __tablename__ = "podcasts"

    title = Column(String(255), nullable=False, unique=True, index=True)
    category = Column(String(255), nullable=False)
    rating = Column(Float, nullable=False, default=0)

    episodes = relationship(
        "Episode",
        back_populates="podcast",
        cascade="all, delete-orphan",
        order_by="Episode.id",
    )
    reviews = relationship(
        "Review", back_populates="podcast", cascade="all, delete-orphan"
    )
    subscriptions = relationship(
        "Subscription", back_populates="podcast", cascade="all, delete-orphan"
    )


class Episode(TimestampedMixin, Base):
    """Single episode belonging to one podcast."""

    __tablename__ = "episodes"

    title = Column(String(255), nullable=False)
    category = Column(String(255), nullable=False)
    podcast_id = Column(
        Integer,
        ForeignKey("podcasts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    podcast = relationship("Podcast", back_populates="episodes")
