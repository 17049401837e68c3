"""ORM model for platform users (credentials and role)."""

import enum

from sqlalchemy import Column, Enum, String
from sqlalchemy.orm import relationship

from podcast_api.core.security import hash_password, verify_password
from podcast_api.models.base import Base, TimestampedMixin


class UserRole(str, enum.Enum):
    """Roles a user account can hold."""

    LISTENER = "Listener"
    HOST = "Host"


class User(TimestampedMixin, Base):
    """
    User account for token authentication and role-based access control.

    The password is only ever stored as a bcrypt hash; use set_password and
    check_password instead of touching password_hash directly.
    """

    __tablename__ = "users"

    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            length=32,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=UserRole.LISTENER,
    )

    reviews = relationship(
        "Review", back_populates="listener", cascade="all, delete-orphan"
    )
    subscriptions = relationship(
        "Subscription", back_populates="listener", cascade="all, delete-orphan"
    )

    def set_password(self, plain_password: str, rounds: int | None = None) -> None:
        self.password_hash = hash_password(plain_password, rounds=rounds)

    def check_password(self, plain_password: str) -> bool:
        return verify_password(plain_password, self.password_hash)
