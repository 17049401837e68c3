"""Pydantic request/response schemas."""

from podcast_api.schemas.common import CoreOutput, CreatedOutput
from podcast_api.schemas.health import HealthResponse
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

__all__ = [
    "CoreOutput",
    "CreateEpisodeInput",
    "CreateEpisodeOutput",
    "CreatePodcastInput",
    "CreatePodcastOutput",
    "CreateUserInput",
    "CreateUserOutput",
    "CreatedOutput",
    "EditProfileInput",
    "EditProfileOutput",
    "EpisodeOut",
    "EpisodesOutput",
    "GetAllPodcastsOutput",
    "GetEpisodeOutput",
    "GetSubscriptionsOutput",
    "HealthResponse",
    "LoginInput",
    "LoginOutput",
    "PodcastDetailOut",
    "PodcastOut",
    "PodcastOutput",
    "ReviewPodcastInput",
    "SearchPodcastsOutput",
    "SeeProfileOutput",
    "SubscriptionOut",
    "UpdateEpisodePayload",
    "UpdatePodcastPayload",
    "UserOut",
]
