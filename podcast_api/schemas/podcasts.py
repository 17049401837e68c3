"""Request/response schemas for podcasts, episodes, reviews and subscriptions."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from podcast_api.schemas.common import CoreOutput, CreatedOutput


class EpisodeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    category: str
    podcast_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PodcastOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    category: str
    rating: float
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PodcastDetailOut(PodcastOut):
    """Podcast with its episodes."""

    episodes: list[EpisodeOut] = Field(default_factory=list)


class SubscriptionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    podcast: PodcastOut
    created_at: datetime | None = None


class CreatePodcastInput(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=255)


class UpdatePodcastPayload(BaseModel):
    """Partial update; rating, when given, must be between 1 and 5."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = Field(default=None, min_length=1, max_length=255)
    rating: float | None = None


class CreateEpisodeInput(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=255)


class UpdateEpisodePayload(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = Field(default=None, min_length=1, max_length=255)


class ReviewPodcastInput(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class CreatePodcastOutput(CreatedOutput):
    pass


class CreateEpisodeOutput(CreatedOutput):
    pass


class GetAllPodcastsOutput(CoreOutput):
    podcasts: list[PodcastOut] | None = None


class PodcastOutput(CoreOutput):
    podcast: PodcastDetailOut | None = None


class EpisodesOutput(CoreOutput):
    episodes: list[EpisodeOut] | None = None


class GetEpisodeOutput(CoreOutput):
    episode: EpisodeOut | None = None


class SearchPodcastsOutput(CoreOutput):
    podcasts: list[PodcastOut] | None = None


class GetSubscriptionsOutput(CoreOutput):
    subscriptions: list[SubscriptionOut] | None = None
