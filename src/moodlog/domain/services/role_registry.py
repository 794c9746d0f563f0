"""Role registry - immutable role configuration loaded once at startup."""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from moodlog.domain.entities import Role
from moodlog.domain.exceptions import ConfigError
from moodlog.domain.value_objects import Permission

logger = logging.getLogger(__name__)


class RoleConfig(BaseModel):
    """Raw configuration for one role."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    permissions: list[Permission] = Field(default_factory=list)
    extends: list[str] = Field(default_factory=list)
    default: bool = False


class RoleRegistry:
    """Role name -> Role, validated on construction.

    Exactly one role must be the default and every ``extends`` entry must
    name a registered role.
    """

    def __init__(self, roles: Mapping[str, Role]) -> None:
        if not roles:
            raise ConfigError("Role registry is empty")
        for name, role in roles.items():
            if name != role.name:
                raise ConfigError(f"Role registered as {name!r} is named {role.name!r}")
            unknown = [parent for parent in role.extends if parent not in roles]
            if unknown:
                raise ConfigError(f"Role {name!r} extends unknown role(s): {', '.join(unknown)}")

        defaults = [role for role in roles.values() if role.is_default]
        if len(defaults) != 1:
            found = ", ".join(r.name for r in defaults) or "none"
            raise ConfigError(f"Exactly one default role is required (found: {found})")

        self._roles: Mapping[str, Role] = MappingProxyType(dict(roles))
        self.default_role: Role = defaults[0]

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "RoleRegistry":
        """Build registry from a static mapping name -> {permissions, extends, default}."""
        roles: dict[str, Role] = {}
        for name, entry in raw.items():
            try:
                parsed = RoleConfig.model_validate(entry)
            except PydanticValidationError as e:
                raise ConfigError(f"Invalid configuration for role {name!r}: {e}") from e
            roles[name] = Role(
                name=name,
                permissions=frozenset(parsed.permissions),
                extends=tuple(parsed.extends),
                is_default=parsed.default,
            )
        registry = cls(roles)
        logger.info(
            "Loaded %d role(s), default role %r", len(roles), registry.default_role.name
        )
        return registry

    def get(self, name: str) -> Role:
        """Get role by name."""
        role = self._roles.get(name)
        if role is None:
            raise ConfigError(f"Unknown role: {name!r}")
        return role

    def get_default_role(self) -> Role:
        """Role assigned to new users."""
        return self.default_role

    def __contains__(self, name: object) -> bool:
        return name in self._roles

    def __iter__(self) -> Iterator[str]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)
