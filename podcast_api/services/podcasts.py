"""Podcast catalog: podcasts, episodes, reviews, subscriptions and title search."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from podcast_api.models import Episode, Podcast, Review, Subscription, User
from podcast_api.schemas.common import INTERNAL_ERROR_MESSAGE, CoreOutput
from podcast_api.schemas.podcasts import (
    CreateEpisodeInput,
    CreateEpisodeOutput,
    CreatePodcastInput,
    CreatePodcastOutput,
    EpisodeOut,
    EpisodesOutput,
    GetAllPodcastsOutput,
    GetEpisodeOutput,
    GetSubscriptionsOutput,
    PodcastDetailOut,
    PodcastOut,
    PodcastOutput,
    ReviewPodcastInput,
    SearchPodcastsOutput,
    SubscriptionOut,
    UpdateEpisodePayload,
    UpdatePodcastPayload,
)

logger = logging.getLogger(__name__)

RATING_MIN = 1
RATING_MAX = 5

RATING_OUT_OF_RANGE = f"Rating must be between {RATING_MIN} and {RATING_MAX}."
PODCASTS_NOT_FOUND = "Podcasts not found"
ALREADY_SUBSCRIBED = "Already subscribed to this podcast"


def podcast_not_found(podcast_id: int) -> str:
    return f"Podcast with id {podcast_id} not found"


def episode_not_found(podcast_id: int, episode_id: int) -> str:
    return f"Episode with id {episode_id} not found in podcast with id {podcast_id}"


def title_taken(title: str) -> str:
    return f"Podcast with title {title!r} already exists"


def _internal_error(db: Session, action: str, **context: object) -> CoreOutput:
    db.rollback()
    logger.exception("Failed to %s", action, extra=context)
    return CoreOutput(ok=False, error=INTERNAL_ERROR_MESSAGE)


def _find_podcast(db: Session, podcast_id: int) -> Podcast | None:
    return (
        db.query(Podcast)
        .options(selectinload(Podcast.episodes))
        .filter(Podcast.id == podcast_id)
        .first()
    )


def _find_episode(db: Session, podcast_id: int, episode_id: int) -> Episode | None:
    return (
        db.query(Episode)
        .filter(Episode.id == episode_id, Episode.podcast_id == podcast_id)
        .first()
    )


def _title_taken(db: Session, title: str, exclude_podcast_id: int | None = None) -> bool:
    query = db.query(Podcast.id).filter(Podcast.title == title)
    if exclude_podcast_id is not None:
        query = query.filter(Podcast.id != exclude_podcast_id)
    return query.first() is not None


def get_all_podcasts(db: Session) -> GetAllPodcastsOutput:
    try:
        podcasts = db.query(Podcast).order_by(Podcast.id).all()
    except SQLAlchemyError:
        out = _internal_error(db, "list podcasts")
        return GetAllPodcastsOutput(ok=out.ok, error=out.error)
    return GetAllPodcastsOutput(
        ok=True, podcasts=[PodcastOut.model_validate(p) for p in podcasts]
    )


def create_podcast(db: Session, body: CreatePodcastInput) -> CreatePodcastOutput:
    try:
        if _title_taken(db, body.title):
            return CreatePodcastOutput(ok=False, error=title_taken(body.title))
        podcast = Podcast(title=body.title, category=body.category, rating=0)
        db.add(podcast)
        db.commit()
    except SQLAlchemyError:
        out = _internal_error(db, "create podcast")
        return CreatePodcastOutput(ok=out.ok, error=out.error)
    logger.info("Podcast created", extra={"podcast_id": podcast.id})
    return CreatePodcastOutput(ok=True, id=podcast.id)


def get_podcast(db: Session, podcast_id: int) -> PodcastOutput:
    try:
        podcast = _find_podcast(db, podcast_id)
    except SQLAlchemyError:
        out = _internal_error(db, "get podcast", podcast_id=podcast_id)
        return PodcastOutput(ok=out.ok, error=out.error)
    if podcast is None:
        return PodcastOutput(ok=False, error=podcast_not_found(podcast_id))
    return PodcastOutput(ok=True, podcast=PodcastDetailOut.model_validate(podcast))


def update_podcast(
    db: Session, podcast_id: int, payload: UpdatePodcastPayload
) -> CoreOutput:
    """Apply the non-null fields of payload; rating must stay within 1..5."""
    if payload.rating is not None and not RATING_MIN <= payload.rating <= RATING_MAX:
        return CoreOutput(ok=False, error=RATING_OUT_OF_RANGE)
    try:
        podcast = db.get(Podcast, podcast_id)
        if podcast is None:
            return CoreOutput(ok=False, error=podcast_not_found(podcast_id))
        if payload.title is not None and payload.title != podcast.title:
            if _title_taken(db, payload.title, exclude_podcast_id=podcast_id):
                return CoreOutput(ok=False, error=title_taken(payload.title))
            podcast.title = payload.title
        if payload.category is not None:
            podcast.category = payload.category
        if payload.rating is not None:
            podcast.rating = payload.rating
        db.commit()
    except SQLAlchemyError:
        return _internal_error(db, "update podcast", podcast_id=podcast_id)
    return CoreOutput(ok=True)


def delete_podcast(db: Session, podcast_id: int) -> CoreOutput:
    try:
        podcast = db.get(Podcast, podcast_id)
        if podcast is None:
            return CoreOutput(ok=False, error=podcast_not_found(podcast_id))
        db.delete(podcast)
        db.commit()
    except SQLAlchemyError:
        return _internal_error(db, "delete podcast", podcast_id=podcast_id)
    logger.info("Podcast deleted", extra={"podcast_id": podcast_id})
    return CoreOutput(ok=True)


def get_episodes(db: Session, podcast_id: int) -> EpisodesOutput:
    try:
        podcast = _find_podcast(db, podcast_id)
    except SQLAlchemyError:
        out = _internal_error(db, "list episodes", podcast_id=podcast_id)
        return EpisodesOutput(ok=out.ok, error=out.error)
    if podcast is None:
        return EpisodesOutput(ok=False, error=podcast_not_found(podcast_id))
    return EpisodesOutput(
        ok=True, episodes=[EpisodeOut.model_validate(e) for e in podcast.episodes]
    )


def get_episode(db: Session, podcast_id: int, episode_id: int) -> GetEpisodeOutput:
    try:
        podcast = db.get(Podcast, podcast_id)
        episode = _find_episode(db, podcast_id, episode_id) if podcast else None
    except SQLAlchemyError:
        out = _internal_error(db, "get episode", podcast_id=podcast_id, episode_id=episode_id)
        return GetEpisodeOutput(ok=out.ok, error=out.error)
    if podcast is None:
        return GetEpisodeOutput(ok=False, error=podcast_not_found(podcast_id))
    if episode is None:
        return GetEpisodeOutput(ok=False, error=episode_not_found(podcast_id, episode_id))
    return GetEpisodeOutput(ok=True, episode=EpisodeOut.model_validate(episode))


def create_episode(
    db: Session, podcast_id: int, body: CreateEpisodeInput
) -> CreateEpisodeOutput:
    try:
        podcast = db.get(Podcast, podcast_id)
        if podcast is None:
            return CreateEpisodeOutput(ok=False, error=podcast_not_found(podcast_id))
        episode = Episode(title=body.title, category=body.category, podcast=podcast)
        db.add(episode)
        db.commit()
    except SQLAlchemyError:
        out = _internal_error(db, "create episode", podcast_id=podcast_id)
        return CreateEpisodeOutput(ok=out.ok, error=out.error)
    return CreateEpisodeOutput(ok=True, id=episode.id)


def update_episode(
    db: Session, podcast_id: int, episode_id: int, payload: UpdateEpisodePayload
) -> CoreOutput:
    found = get_episode(db, podcast_id, episode_id)
    if not found.ok:
        return CoreOutput(ok=False, error=found.error)
    try:
        episode = _find_episode(db, podcast_id, episode_id)
        if payload.title is not None:
            episode.title = payload.title
        if payload.category is not None:
            episode.category = payload.category
        db.commit()
    except SQLAlchemyError:
        return _internal_error(
            db, "update episode", podcast_id=podcast_id, episode_id=episode_id
        )
    return CoreOutput(ok=True)


def delete_episode(db: Session, podcast_id: int, episode_id: int) -> CoreOutput:
    found = get_episode(db, podcast_id, episode_id)
    if not found.ok:
        return CoreOutput(ok=False, error=found.error)
    try:
        db.query(Episode).filter(Episode.id == episode_id).delete()
        db.commit()
    except SQLAlchemyError:
        return _internal_error(
            db, "delete episode", podcast_id=podcast_id, episode_id=episode_id
        )
    return CoreOutput(ok=True)


def review_podcast(
    db: Session, listener: User, podcast_id: int, body: ReviewPodcastInput
) -> CoreOutput:
    try:
        podcast = db.get(Podcast, podcast_id)
        if podcast is None:
            return CoreOutput(ok=False, error=podcast_not_found(podcast_id))
        db.add(Review(content=body.content, podcast_id=podcast.id, listener_id=listener.id))
        db.commit()
    except SQLAlchemyError:
        return _internal_error(
            db, "review podcast", podcast_id=podcast_id, user_id=listener.id
        )
    return CoreOutput(ok=True)


def subscribe_podcast(db: Session, listener: User, podcast_id: int) -> CoreOutput:
    try:
        podcast = db.get(Podcast, podcast_id)
        if podcast is None:
            return CoreOutput(ok=False, error=podcast_not_found(podcast_id))
        existing = (
            db.query(Subscription.id)
            .filter(
                Subscription.listener_id == listener.id,
                Subscription.podcast_id == podcast.id,
            )
            .first()
        )
        if existing is not None:
            return CoreOutput(ok=False, error=ALREADY_SUBSCRIBED)
        db.add(Subscription(podcast_id=podcast.id, listener_id=listener.id))
        db.commit()
    except SQLAlchemyError:
        return _internal_error(
            db, "subscribe to podcast", podcast_id=podcast_id, user_id=listener.id
        )
    return CoreOutput(ok=True)


def get_subscriptions(db: Session, listener: User) -> GetSubscriptionsOutput:
    try:
        subscriptions = (
            db.query(Subscription)
            .options(selectinload(Subscription.podcast))
            .filter(Subscription.listener_id == listener.id)
            .order_by(Subscription.id)
            .all()
        )
    except SQLAlchemyError:
        out = _internal_error(db, "list subscriptions", user_id=listener.id)
        return GetSubscriptionsOutput(ok=out.ok, error=out.error)
    return GetSubscriptionsOutput(
        ok=True,
        subscriptions=[SubscriptionOut.model_validate(s) for s in subscriptions],
    )


def search_podcasts(db: Session, query: str) -> SearchPodcastsOutput:
    """Podcasts whose title contains query (bound parameter, no raw SQL)."""
    try:
        podcasts = (
            db.query(Podcast)
            .filter(Podcast.title.contains(query, autoescape=True))
            .order_by(Podcast.id)
            .all()
        )
    except SQLAlchemyError:
        out = _internal_error(db, "search podcasts")
        return SearchPodcastsOutput(ok=out.ok, error=out.error)
    if not podcasts:
        return SearchPodcastsOutput(ok=False, error=PODCASTS_NOT_FOUND)
    return SearchPodcastsOutput(
        ok=True, podcasts=[PodcastOut.model_validate(p) for p in podcasts]
    )
