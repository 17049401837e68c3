"""The calling listener's podcast subscriptions."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from podcast_api.auth.authorization import authorize
from podcast_api.core.database import get_db
from podcast_api.models.user import User
from podcast_api.schemas.podcasts import GetSubscriptionsOutput
from podcast_api.services.podcasts import get_subscriptions as list_subscriptions

router = APIRouter()


@router.get("", response_model=GetSubscriptionsOutput)
def get_subscriptions(
    db: Annotated[Session, Depends(get_db)],
    listener: Annotated[User, Depends(authorize("get_subscriptions"))],
) -> GetSubscriptionsOutput:
    return list_subscriptions(db, listener)
