"""Authorization helper shared by use cases."""

from uuid import UUID

from moodlog.application.ports import PermissionChecker
from moodlog.domain.exceptions import PermissionDenied
from moodlog.domain.value_objects import Permission


async def authorize(
    permission_checker: PermissionChecker,
    actor_id: UUID,
    owner_id: UUID,
    own: Permission,
    any_: Permission,
    action: str,
) -> None:
    """Require ``own`` when the actor is the owner, ``any_`` otherwise."""
    required = own if actor_id == owner_id else any_
    if not await permission_checker.check(actor_id, required):
        raise PermissionDenied(f"User does not have {action} access")
