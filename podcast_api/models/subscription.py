"""ORM model for a listener's subscription to a podcast."""

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from podcast_api.models.base import Base, TimestampedMixin


class Subscription(TimestampedMixin, Base):
    """One row per (listener, podcast) pair."""

    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("listener_id", "podcast_id", name="uq_subscriptions_listener_podcast"),
    )

    podcast_id = Column(
        Integer,
        ForeignKey("podcasts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    listener_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    podcast = relationship("Podcast", back_populates="subscriptions")
    listener = relationship("User", back_populates="subscriptions")
