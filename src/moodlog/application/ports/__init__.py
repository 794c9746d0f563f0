"""Application ports - interfaces for external adapters."""

from moodlog.application.ports.password_hasher import PasswordHasher
from moodlog.application.ports.permission_checker import PermissionChecker
from moodlog.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PasswordHasher",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
