"""Authentication and role-based authorization for API operations."""

from podcast_api.auth.authorization import Decision, authorize, decide
from podcast_api.auth.identity import IdentityMiddleware, get_identity, resolve_identity
from podcast_api.auth.operations import role_registry
from podcast_api.auth.roles import (
    ANY_AUTHENTICATED,
    UNRESTRICTED,
    RoleDeclarationError,
    RoleRegistry,
    RoleRequirement,
)

__all__ = [
    "ANY_AUTHENTICATED",
    "Decision",
    "IdentityMiddleware",
    "RoleDeclarationError",
    "RoleRegistry",
    "RoleRequirement",
    "UNRESTRICTED",
    "authorize",
    "decide",
    "get_identity",
    "resolve_identity",
    "role_registry",
]
