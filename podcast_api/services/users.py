"""User accounts: registration, login, profile lookup and profile edits."""

import logging
from typing import NamedTuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from podcast_api.core.config import Settings, settings as default_settings
from podcast_api.core.tokens import issue_token
from podcast_api.models.user import User
from podcast_api.schemas.common import INTERNAL_ERROR_MESSAGE
from podcast_api.schemas.users import (
    CreateUserInput,
    CreateUserOutput,
    EditProfileInput,
    EditProfileOutput,
    LoginInput,
    LoginOutput,
    SeeProfileOutput,
    UserOut,
)

logger = logging.getLogger(__name__)

EMAIL_EXISTS = "Email already exists!"
USER_NOT_FOUND = "User doesn't exist!"
WRONG_PASSWORD = "Wrong password!"


class UserLookupResult(NamedTuple):
    found: bool
    user: User | None = None


def _email_taken(db: Session, email: str, exclude_user_id: int | None = None) -> bool:
    query = db.query(User.id).filter(User.email == email)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first() is not None


def lookup_user(db: Session, user_id: int) -> UserLookupResult:
    """Fetch a user by id. Database errors are logged and reported as not found."""
    try:
        user = db.get(User, user_id)
    except SQLAlchemyError:
        logger.exception("User lookup failed", extra={"user_id": user_id})
        return UserLookupResult(found=False)
    if user is None:
        return UserLookupResult(found=False)
    return UserLookupResult(found=True, user=user)


def create_user(
    db: Session, body: CreateUserInput, settings: Settings | None = None
) -> CreateUserOutput:
    """Register a new account; the password is hashed before the row is written."""
    settings = settings or default_settings
    try:
        if _email_taken(db, body.email):
            return CreateUserOutput(ok=False, error=EMAIL_EXISTS)
        user = User(email=body.email, role=body.role)
        user.set_password(body.password, rounds=settings.BCRYPT_ROUNDS)
        db.add(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create user")
        return CreateUserOutput(ok=False, error=INTERNAL_ERROR_MESSAGE)
    logger.info("User created", extra={"user_id": user.id, "role": user.role.value})
    return CreateUserOutput(ok=True)


def login(db: Session, body: LoginInput, settings: Settings | None = None) -> LoginOutput:
    """
    Check credentials and issue an identity token.

    Unlike authorization failures, login tells the caller whether the account
    is missing or the password is wrong. The token is signed with settings
    (the module defaults when None).
    """
    try:
        user = db.query(User).filter(User.email == body.email).first()
    except SQLAlchemyError:
        logger.exception("Login lookup failed")
        return LoginOutput(ok=False, error=INTERNAL_ERROR_MESSAGE)
    if user is None:
        return LoginOutput(ok=False, error=USER_NOT_FOUND)
    if not user.check_password(body.password):
        return LoginOutput(ok=False, error=WRONG_PASSWORD)
    return LoginOutput(ok=True, token=issue_token(user.id, settings))


def see_profile(db: Session, user_id: int) -> SeeProfileOutput:
    result = lookup_user(db, user_id)
    if not result.found:
        return SeeProfileOutput(ok=False, error=USER_NOT_FOUND)
    return SeeProfileOutput(ok=True, user=UserOut.model_validate(result.user))


def edit_profile(
    db: Session,
    user_id: int,
    body: EditProfileInput,
    settings: Settings | None = None,
) -> EditProfileOutput:
    """
    Update email and/or password of user_id.

    The stored hash changes only when a non-empty password is supplied.
    """
    settings = settings or default_settings
    try:
        user = db.get(User, user_id)
        if user is None:
            return EditProfileOutput(ok=False, error=USER_NOT_FOUND)
        if body.email and body.email != user.email:
            if _email_taken(db, body.email, exclude_user_id=user.id):
                return EditProfileOutput(ok=False, error=EMAIL_EXISTS)
            user.email = body.email
        if body.password:
            user.set_password(body.password, rounds=settings.BCRYPT_ROUNDS)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to edit profile", extra={"user_id": user_id})
        return EditProfileOutput(ok=False, error=INTERNAL_ERROR_MESSAGE)
    return EditProfileOutput(ok=True)
