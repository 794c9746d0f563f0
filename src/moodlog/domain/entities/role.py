"""Role entity for RBAC."""

from dataclasses import dataclass, field

from moodlog.domain.value_objects import Permission


@dataclass(frozen=True)
class Role:
    """Role - named bundle of permissions, possibly inheriting other roles."""

    name: str
    permissions: frozenset[Permission] = field(default_factory=frozenset)
    extends: tuple[str, ...] = ()
    is_default: bool = False
