"""Identity token issuance and verification (signed JWT carrying a user id)."""

import enum
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from podcast_api.core.config import Settings, settings as default_settings

USER_ID_CLAIM = "user_id"


class TokenFailureReason(str, enum.Enum):
    """Why a token was rejected. Callers treat every reason as anonymous."""

    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"


@dataclass(frozen=True)
class TokenClaims:
    """Verified payload of an identity token."""

    user_id: int


@dataclass(frozen=True)
class TokenVerificationFailure:
    """Verification result for a token that cannot be trusted."""

    reason: TokenFailureReason
    detail: str = ""


def issue_token(user_id: int, settings: Settings | None = None) -> str:
    """
    Create a signed token embedding user_id.

    An exp claim is added only when JWT_EXPIRE_MINUTES is configured.
    """
    settings = settings or default_settings
    payload: dict[str, Any] = {USER_ID_CLAIM: user_id}
    if settings.JWT_EXPIRE_MINUTES is not None:
        payload["exp"] = datetime.now(UTC) + timedelta(
            minutes=settings.JWT_EXPIRE_MINUTES
        )
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def verify_token(
    token: str, settings: Settings | None = None
) -> TokenClaims | TokenVerificationFailure:
    """Check signature and structure; never raises for a bad token."""
    settings = settings or default_settings
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.InvalidSignatureError as e:
        return TokenVerificationFailure(TokenFailureReason.BAD_SIGNATURE, str(e))
    except jwt.ExpiredSignatureError as e:
        return TokenVerificationFailure(TokenFailureReason.EXPIRED, str(e))
    except jwt.PyJWTError as e:
        return TokenVerificationFailure(TokenFailureReason.MALFORMED, str(e))

    user_id = payload.get(USER_ID_CLAIM)
    # bool is an int subclass; a token claiming user_id=true is not a user id.
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        return TokenVerificationFailure(
            TokenFailureReason.MALFORMED, f"missing or non-integer {USER_ID_CLAIM} claim"
        )
    return TokenClaims(user_id=user_id)
