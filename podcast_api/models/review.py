"""ORM model for listener reviews of podcasts."""

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from podcast_api.models.base import Base, TimestampedMixin


class Review(TimestampedMixin, Base):
    __tablename__ = "reviews"

    content = Column(Text, nullable=False)
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

    podcast = relationship("Podcast", back_populates="reviews")
    listener = relationship("User", back_populates="reviews")
