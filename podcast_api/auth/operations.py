"""Role declarations for every protected API operation.

Operations missing from this table (create_user, login, see_profile, the podcast
and episode reads, search) are public.
"""

from podcast_api.auth.roles import RoleRegistry

OPERATION_ROLES: dict[str, list[str]] = {
    # users
    "me": ["Any"],
    "edit_profile": ["Any"],
    # podcasts
    "create_podcast": ["Host"],
    "update_podcast": ["Host"],
    "delete_podcast": ["Host"],
    # episodes
    "create_episode": ["Host"],
    "update_episode": ["Host"],
    "delete_episode": ["Host"],
    # listener activity
    "review_podcast": ["Listener"],
    "subscribe_podcast": ["Listener"],
    "get_subscriptions": ["Listener"],
}


def build_registry(declarations: dict[str, list[str]]) -> RoleRegistry:
    """Declare every operation and freeze the resulting registry."""
    registry = RoleRegistry()
    for operation, roles in declarations.items():
        registry.declare(operation, roles)
    registry.freeze()
    return registry


role_registry = build_registry(OPERATION_ROLES)
