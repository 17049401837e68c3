"""Role requirements and the registry that attaches them to operations."""

import enum
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from podcast_api.models.user import UserRole

logger = logging.getLogger(__name__)

# Declared in place of role names to admit any signed-in user.
ANY_ROLE = "Any"


class RoleDeclarationError(Exception):
    """Raised when an operation's role declaration is invalid or arrives too late."""


class RequirementKind(str, enum.Enum):
    UNRESTRICTED = "unrestricted"
    AUTHENTICATED = "authenticated"
    ROLES = "roles"


@dataclass(frozen=True)
class RoleRequirement:
    """Who may invoke an operation."""

    kind: RequirementKind
    roles: frozenset[UserRole] = frozenset()

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "RoleRequirement":
        """
        Build a requirement from role names such as ["Host"] or ["Any"].

        "Any" anywhere in the list admits every authenticated user. Unknown names
        and empty lists are rejected so typos fail at startup, not per request.
        """
        names = list(names)
        if not names:
            raise RoleDeclarationError("Role declaration must name at least one role")
        if ANY_ROLE in names:
            return ANY_AUTHENTICATED
        roles: set[UserRole] = set()
        for name in names:
            try:
                roles.add(UserRole(name))
            except ValueError:
                raise RoleDeclarationError(f"Unknown role {name!r}") from None
        return cls(RequirementKind.ROLES, frozenset(roles))


UNRESTRICTED = RoleRequirement(RequirementKind.UNRESTRICTED)
ANY_AUTHENTICATED = RoleRequirement(RequirementKind.AUTHENTICATED)


class RoleRegistry:
    """
    Explicit operation name -> RoleRequirement table.

    Built once at startup and then frozen; after freeze() the table is a
    read-only mapping that concurrent requests can share without locking.
    Operations that were never declared are unrestricted.
    """

    def __init__(self) -> None:
        self._requirements: dict[str, RoleRequirement] = {}
        self._frozen: Mapping[str, RoleRequirement] | None = None

    def declare(self, operation: str, roles: Iterable[str]) -> RoleRequirement:
        if self._frozen is not None:
            raise RoleDeclarationError(
                f"Cannot declare roles for {operation!r}: registry is frozen"
            )
        if operation in self._requirements:
            raise RoleDeclarationError(f"Roles for {operation!r} already declared")
        requirement = RoleRequirement.from_names(roles)
        self._requirements[operation] = requirement
        return requirement

    def freeze(self) -> None:
        self._frozen = MappingProxyType(dict(self._requirements))
        logger.info("Role registry frozen with %d declared operations", len(self._frozen))

    @property
    def frozen(self) -> bool:
        return self._frozen is not None

    def requirement_for(self, operation: str) -> RoleRequirement:
        table = self._frozen if self._frozen is not None else self._requirements
        return table.get(operation, UNRESTRICTED)

    def declared_operations(self) -> list[str]:
        return sorted(self._requirements)
