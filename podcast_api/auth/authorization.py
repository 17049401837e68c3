"""Allow/deny decision for an operation, and the FastAPI dependency that enforces it."""

import enum
import logging
from collections.abc import Callable

from fastapi import HTTPException, Request, status

from podcast_api.auth.identity import get_identity
from podcast_api.auth.operations import role_registry
from podcast_api.auth.roles import RequirementKind, RoleRegistry, RoleRequirement
from podcast_api.models.user import User

logger = logging.getLogger(__name__)

FORBIDDEN_DETAIL = "Forbidden resource"


class Decision(str, enum.Enum):
    ALLOW = "allow"
    DENY = "deny"


def decide(requirement: RoleRequirement, identity: User | None) -> Decision:
    """Evaluate the requirement against the caller; first matching rule wins."""
    if requirement.kind is RequirementKind.UNRESTRICTED:
        return Decision.ALLOW
    if identity is None:
        return Decision.DENY
    if requirement.kind is RequirementKind.AUTHENTICATED:
        return Decision.ALLOW
    if identity.role in requirement.roles:
        return Decision.ALLOW
    return Decision.DENY


def authorize(
    operation: str, registry: RoleRegistry | None = None
) -> Callable[[Request], User | None]:
    """
    Dependency factory: gate a route on operation's declared roles.

    The dependency returns the caller (None for anonymous callers of public
    operations) so handlers receive identity as an explicit argument. A denial
    is a 403 that does not say whether the caller was anonymous or lacked a role.
    """
    registry = registry or role_registry

    def dependency(request: Request) -> User | None:
        identity = get_identity(request)
        requirement = registry.requirement_for(operation)
        if decide(requirement, identity) is Decision.DENY:
            logger.info(
                "Authorization denied",
                extra={
                    "operation": operation,
                    "user_id": identity.id if identity is not None else None,
                },
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=FORBIDDEN_DETAIL,
            )
        return identity

    dependency.__name__ = f"authorize_{operation}"
    return dependency
