"""Podcast, episode, review and subscription endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from podcast_api.auth.authorization import authorize
from podcast_api.core.database import get_db
from podcast_api.models.user import User
from podcast_api.schemas.common import CoreOutput
from podcast_api.schemas.podcasts import (
    CreateEpisodeInput,
    CreateEpisodeOutput,
    CreatePodcastInput,
    CreatePodcastOutput,
    EpisodesOutput,
    GetAllPodcastsOutput,
    GetEpisodeOutput,
    PodcastOutput,
    ReviewPodcastInput,
    SearchPodcastsOutput,
    UpdateEpisodePayload,
    UpdatePodcastPayload,
)
from podcast_api.services import podcasts as podcasts_service

router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]


@router.get("", response_model=GetAllPodcastsOutput)
def get_all_podcasts(
    db: DbSession,
    _caller: Annotated[User | None, Depends(authorize("get_all_podcasts"))],
) -> GetAllPodcastsOutput:
    return podcasts_service.get_all_podcasts(db)


@router.post("", response_model=CreatePodcastOutput)
def create_podcast(
    body: CreatePodcastInput,
    db: DbSession,
    _host: Annotated[User, Depends(authorize("create_podcast"))],
) -> CreatePodcastOutput:
    return podcasts_service.create_podcast(db, body)


@router.get("/search", response_model=SearchPodcastsOutput)
def search_podcasts(
    db: DbSession,
    _caller: Annotated[User | None, Depends(authorize("search_podcasts"))],
    query: Annotated[str, Query(min_length=1, max_length=255)],
) -> SearchPodcastsOutput:
    """Podcasts whose title contains query."""
    return podcasts_service.search_podcasts(db, query)


@router.get("/{podcast_id}", response_model=PodcastOutput)
def get_podcast(
    podcast_id: int,
    db: DbSession,
    _caller: Annotated[User | None, Depends(authorize("get_podcast"))],
) -> PodcastOutput:
    return podcasts_service.get_podcast(db, podcast_id)


@router.patch("/{podcast_id}", response_model=CoreOutput)
def update_podcast(
    podcast_id: int,
    payload: UpdatePodcastPayload,
    db: DbSession,
    _host: Annotated[User, Depends(authorize("update_podcast"))],
) -> CoreOutput:
    return podcasts_service.update_podcast(db, podcast_id, payload)


@router.delete("/{podcast_id}", response_model=CoreOutput)
def delete_podcast(
    podcast_id: int,
    db: DbSession,
    _host: Annotated[User, Depends(authorize("delete_podcast"))],
) -> CoreOutput:
    return podcasts_service.delete_podcast(db, podcast_id)


@router.get("/{podcast_id}/episodes", response_model=EpisodesOutput)
def get_episodes(
    podcast_id: int,
    db: DbSession,
    _caller: Annotated[User | None, Depends(authorize("get_episodes"))],
) -> EpisodesOutput:
    return podcasts_service.get_episodes(db, podcast_id)


@router.post("/{podcast_id}/episodes", response_model=CreateEpisodeOutput)
def create_episode(
    podcast_id: int,
    body: CreateEpisodeInput,
    db: DbSession,
    _host: Annotated[User, Depends(authorize("create_episode"))],
) -> CreateEpisodeOutput:
    return podcasts_service.create_episode(db, podcast_id, body)


@router.get("/{podcast_id}/episodes/{episode_id}", response_model=GetEpisodeOutput)
def get_episode(
    podcast_id: int,
    episode_id: int,
    db: DbSession,
    _caller: Annotated[User | None, Depends(authorize("get_episode"))],
) -> GetEpisodeOutput:
    return podcasts_service.get_episode(db, podcast_id, episode_id)


@router.patch("/{podcast_id}/episodes/{episode_id}", response_model=CoreOutput)
def update_episode(
    podcast_id: int,
    episode_id: int,
    payload: UpdateEpisodePayload,
    db: DbSession,
    _host: Annotated[User, Depends(authorize("update_episode"))],
) -> CoreOutput:
    return podcasts_service.update_episode(db, podcast_id, episode_id, payload)


@router.delete("/{podcast_id}/episodes/{episode_id}", response_model=CoreOutput)
def delete_episode(
    podcast_id: int,
    episode_id: int,
    db: DbSession,
    _host: Annotated[User, Depends(authorize("delete_episode"))],
) -> CoreOutput:
    return podcasts_service.delete_episode(db, podcast_id, episode_id)


@router.post("/{podcast_id}/reviews", response_model=CoreOutput)
def review_podcast(
    podcast_id: int,
    body: ReviewPodcastInput,
    db: DbSession,
    listener: Annotated[User, Depends(authorize("review_podcast"))],
) -> CoreOutput:
    return podcasts_service.review_podcast(db, listener, podcast_id, body)


@router.post("/{podcast_id}/subscriptions", response_model=CoreOutput)
def subscribe_podcast(
    podcast_id: int,
    db: DbSession,
    listener: Annotated[User, Depends(authorize("subscribe_podcast"))],
) -> CoreOutput:
    return podcasts_service.subscribe_podcast(db, listener, podcast_id)
