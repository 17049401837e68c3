"""User registration, login and profile endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from podcast_api.auth.authorization import authorize
from podcast_api.core.config import Settings, get_app_settings
from podcast_api.core.database import get_db
from podcast_api.models.user import User
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
from podcast_api.services import users as users_service

router = APIRouter()


@router.post("", response_model=CreateUserOutput)
def create_user(
    body: CreateUserInput,
    db: Annotated[Session, Depends(get_db)],
    app_settings: Annotated[Settings, Depends(get_app_settings)],
    _caller: Annotated[User | None, Depends(authorize("create_user"))],
) -> CreateUserOutput:
    """Register a Listener or Host account."""
    return users_service.create_user(db, body, app_settings)


@router.post("/login", response_model=LoginOutput)
def login(
    body: LoginInput,
    db: Annotated[Session, Depends(get_db)],
    app_settings: Annotated[Settings, Depends(get_app_settings)],
    _caller: Annotated[User | None, Depends(authorize("login"))],
) -> LoginOutput:
    """
    Authenticate with email and password; returns an identity token.
    Send the token on later requests in the X-JWT header.
    """
    return users_service.login(db, body, app_settings)


@router.get("/me", response_model=UserOut)
def me(
    caller: Annotated[User, Depends(authorize("me"))],
) -> UserOut:
    """Profile of the calling user."""
    return UserOut.model_validate(caller)


@router.patch("/me", response_model=EditProfileOutput)
def edit_profile(
    body: EditProfileInput,
    db: Annotated[Session, Depends(get_db)],
    app_settings: Annotated[Settings, Depends(get_app_settings)],
    caller: Annotated[User, Depends(authorize("edit_profile"))],
) -> EditProfileOutput:
    """Change the caller's email and/or password."""
    return users_service.edit_profile(db, caller.id, body, app_settings)


@router.get("/{user_id}", response_model=SeeProfileOutput)
def see_profile(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    _caller: Annotated[User | None, Depends(authorize("see_profile"))],
) -> SeeProfileOutput:
    return users_service.see_profile(db, user_id)
