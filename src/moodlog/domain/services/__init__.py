"""Domain services - permission resolution and collection consistency."""

from moodlog.domain.services.collection_guard import CollectionGuard
from moodlog.domain.services.owner_policy import OwnerPolicy
from moodlog.domain.services.owner_record import ConsistencyLimits, OwnerRecord
from moodlog.domain.services.permission_resolver import PermissionResolver
from moodlog.domain.services.referential_validator import ReferentialValidator
from moodlog.domain.services.role_registry import RoleRegistry

__all__ = [
    "CollectionGuard",
    "ConsistencyLimits",
    "OwnerPolicy",
    "OwnerRecord",
    "PermissionResolver",
    "ReferentialValidator",
    "RoleRegistry",
]
