"""Per-request identity resolution from the token header."""

import logging
from collections.abc import Awaitable, Callable
from functools import partial

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from podcast_api.core.config import Settings, settings as default_settings
from podcast_api.core.tokens import TokenVerificationFailure, verify_token
from podcast_api.models.user import User
from podcast_api.services.users import UserLookupResult, lookup_user

logger = logging.getLogger(__name__)

UserLookup = Callable[[int], UserLookupResult]


def resolve_identity(
    token: str | None,
    lookup: UserLookup,
    settings: Settings | None = None,
) -> User | None:
    """
    Turn a raw header value into the calling user, or None for an anonymous caller.

    Never raises for a missing, invalid, or orphaned token. lookup is called at
    most once, and only for a token with a valid signature.
    """
    if not token:
        return None

    verified = verify_token(token, settings)
    if isinstance(verified, TokenVerificationFailure):
        logger.debug(
            "Ignoring unverifiable token",
            extra={"reason": verified.reason.value, "detail": verified.detail},
        )
        return None

    result = lookup(verified.user_id)
    if not result.found:
        logger.debug(
            "Token references unknown user", extra={"user_id": verified.user_id}
        )
        return None
    return result.user


def get_identity(request: Request) -> User | None:
    """Identity attached by IdentityMiddleware for this request."""
    return getattr(request.state, "identity", None)


class IdentityMiddleware(BaseHTTPMiddleware):
    """
    Attach request.state.identity on every request, then always continue.

    The user lookup runs in the threadpool with its own short-lived session
    from app.state.session_factory. Any error while loading the user is
    logged and the request continues anonymously.
    """

    def __init__(self, app, settings: Settings | None = None) -> None:
        super().__init__(app)
        self.settings = settings or default_settings

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request.state.identity = None
        token = request.headers.get(self.settings.AUTH_HEADER_NAME)
        if token:
            request.state.identity = await run_in_threadpool(
                self._resolve, request.app.state.session_factory, token
            )
        return await call_next(request)

    def _resolve(self, session_factory, token: str) -> User | None:
        db = session_factory()
        try:
            return resolve_identity(token, partial(lookup_user, db), self.settings)
        except Exception:
            # An unreadable user row leaves the caller anonymous; routes still run.
            logger.exception("Identity lookup failed; continuing as anonymous")
            return None
        finally:
            db.close()
