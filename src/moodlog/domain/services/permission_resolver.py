"""Permission resolver - transitive closure over role inheritance."""

from moodlog.domain.entities import Role
from moodlog.domain.exceptions import ConfigError
from moodlog.domain.services.role_registry import RoleRegistry
from moodlog.domain.value_objects import Permission


class PermissionResolver:
    """Resolves the permissions a role holds directly or through ``extends``.

    Closures for every role are computed when the resolver is built, so a
    cyclic registry fails at startup with ``ConfigError`` and ``resolve`` is
    a read-only lookup afterwards.
    """

    def __init__(self, registry: RoleRegistry) -> None:
        self._registry = registry
        closures: dict[str, frozenset[Permission]] = {}
        for name in registry:
            self._closure(name, (), closures)
        self._closures = closures

    @property
    def registry(self) -> RoleRegistry:
        return self._registry

    def resolve(self, role: Role | str) -> frozenset[Permission]:
        """Full permission set of ``role``."""
        name = role.name if isinstance(role, Role) else role
        closure = self._closures.get(name)
        if closure is None:
            raise ConfigError(f"Unknown role: {name!r}")
        return closure

    def has_permission(self, role: Role | str, permission: Permission) -> bool:
        """True if ``permission`` is in the closure of ``role``."""
        return permission in self.resolve(role)

    def _closure(
        self,
        name: str,
        path: tuple[str, ...],
        done: dict[str, frozenset[Permission]],
    ) -> frozenset[Permission]:
        if name in done:
            return done[name]
        if name in path:
            cycle = " -> ".join(path[path.index(name):] + (name,))
            raise ConfigError(f"Role inheritance cycle: {cycle}")

        role = self._registry.get(name)
        permissions = set(role.permissions)
        for parent in role.extends:
            permissions |= self._closure(parent, path + (name,), done)

        done[name] = frozenset(permissions)
        return done[name]
