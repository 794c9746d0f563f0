"""Create user use case."""

from moodlog.application.dto.user_dto import UserCreateInput, UserOutput
from moodlog.application.ports import PasswordHasher
from moodlog.domain.exceptions import Conflict, DuplicateKey, ValidationError
from moodlog.domain.services import OwnerPolicy
from moodlog.domain.services.field_rules import check_user_name
from moodlog.domain.value_objects import Violation, ViolationCode


class CreateUserUseCase:
    """Register a user with the default role and an empty journal."""

    def __init__(
        self,
        unit_of_work_factory: type,
        policy: OwnerPolicy,
        password_hasher: PasswordHasher,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._policy = policy
        self._password_hasher = password_hasher

    async def execute(self, input_data: UserCreateInput) -> UserOutput:
        """Create user. Name must not be taken."""
        violation = check_user_name(input_data.name)
        if violation:
            raise ValidationError([violation])

        async with self._uow_factory() as uow:
            if await uow.owners.get_by_name(input_data.name):
                raise _name_taken()

            record = self._policy.bind(self._policy.new_user(input_data.name))
            record.set_password(input_data.password, self._password_hasher.hash)
            try:
                user = await uow.owners.persist(record.user)
            except Conflict as e:
                # A concurrent registration took the name between check and insert.
                raise _name_taken() from e

        return UserOutput.from_entity(user)


def _name_taken() -> DuplicateKey:
    return DuplicateKey([Violation("name", ViolationCode.DUPLICATE_KEY, "Name already exists")])
