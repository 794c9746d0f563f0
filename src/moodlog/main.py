"""Application entry point and composition root."""

import logging
import sys
from dataclasses import dataclass

from psycopg_pool import AsyncConnectionPool

from moodlog import __version__
from moodlog.application.use_cases.day.add_day import AddDayUseCase
from moodlog.application.use_cases.day.delete_day import DeleteDayUseCase
from moodlog.application.use_cases.day.list_days import ListDaysUseCase
from moodlog.application.use_cases.day.list_days_by_date import ListDaysByDateUseCase
from moodlog.application.use_cases.day.update_day import UpdateDayUseCase
from moodlog.application.use_cases.emotion.add_emotion import AddEmotionUseCase
from moodlog.application.use_cases.emotion.delete_emotion import DeleteEmotionUseCase
from moodlog.application.use_cases.emotion.get_emotion import GetEmotionUseCase
from moodlog.application.use_cases.emotion.list_emotions import ListEmotionsUseCase
from moodlog.application.use_cases.emotion.update_emotion import UpdateEmotionUseCase
from moodlog.application.use_cases.owner_mutation import OwnerMutationRunner
from moodlog.application.use_cases.user.create_user import CreateUserUseCase
from moodlog.application.use_cases.user.delete_user import DeleteUserUseCase
from moodlog.application.use_cases.user.get_user import GetUserUseCase
from moodlog.application.use_cases.user.list_users import ListUsersUseCase
from moodlog.config import Settings, get_settings, load_roles
from moodlog.domain.exceptions import ConfigError
from moodlog.domain.services import (
    ConsistencyLimits,
    OwnerPolicy,
    PermissionResolver,
    RoleRegistry,
)
from moodlog.infrastructure.permission.permission_checker import RolePermissionChecker
from moodlog.infrastructure.persistence.postgres.connection import create_pool
from moodlog.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from moodlog.infrastructure.security.argon2_hasher import Argon2PasswordHasher

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once, from settings."""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_policy(settings: Settings) -> OwnerPolicy:
    """Load roles and limits. Raises ConfigError on malformed role configuration."""
    registry = RoleRegistry.from_mapping(load_roles(settings))
    resolver = PermissionResolver(registry)
    limits = ConsistencyLimits(
        max_emotions=settings.max_emotions,
        description_max_length=settings.description_max_length,
        date_floor=settings.date_floor,
        collect_all=settings.collect_all_violations,
    )
    return OwnerPolicy(resolver, limits)


@dataclass
class MoodlogServices:
    """Use cases handed to the transport layer."""

    pool: AsyncConnectionPool
    policy: OwnerPolicy
    create_user: CreateUserUseCase
    get_user: GetUserUseCase
    list_users: ListUsersUseCase
    delete_user: DeleteUserUseCase
    list_emotions: ListEmotionsUseCase
    get_emotion: GetEmotionUseCase
    add_emotion: AddEmotionUseCase
    update_emotion: UpdateEmotionUseCase
    delete_emotion: DeleteEmotionUseCase
    list_days: ListDaysUseCase
    list_days_by_date: ListDaysByDateUseCase
    add_day: AddDayUseCase
    update_day: UpdateDayUseCase
    delete_day: DeleteDayUseCase


def create_moodlog_services(settings: Settings | None = None) -> MoodlogServices:
    """Composition root - wire storage, policy and use cases.

    The pool is returned unopened; the caller opens and closes it.
    """
    settings = settings or get_settings()
    policy = build_policy(settings)
    pool = create_pool(settings)
    uow_factory = create_uow_factory(pool)

    permission_checker = RolePermissionChecker(uow_factory, policy)
    runner = OwnerMutationRunner(
        unit_of_work_factory=uow_factory,
        policy=policy,
        max_attempts=settings.persist_max_attempts,
    )

    return MoodlogServices(
        pool=pool,
        policy=policy,
        create_user=CreateUserUseCase(
            unit_of_work_factory=uow_factory,
            policy=policy,
            password_hasher=Argon2PasswordHasher(),
        ),
        get_user=GetUserUseCase(uow_factory, permission_checker),
        list_users=ListUsersUseCase(uow_factory, permission_checker),
        delete_user=DeleteUserUseCase(runner, permission_checker),
        list_emotions=ListEmotionsUseCase(uow_factory, policy, permission_checker),
        get_emotion=GetEmotionUseCase(uow_factory, policy, permission_checker),
        add_emotion=AddEmotionUseCase(runner, permission_checker),
        update_emotion=UpdateEmotionUseCase(runner, permission_checker),
        delete_emotion=DeleteEmotionUseCase(runner, permission_checker),
        list_days=ListDaysUseCase(uow_factory, policy, permission_checker),
        list_days_by_date=ListDaysByDateUseCase(uow_factory, policy, permission_checker),
        add_day=AddDayUseCase(runner, permission_checker),
        update_day=UpdateDayUseCase(runner, permission_checker),
        delete_day=DeleteDayUseCase(runner, permission_checker),
    )


def main() -> None:
    """CLI entry point - validate configuration at startup."""
    settings = get_settings()
    configure_logging(settings)
    print(f"moodlog v{__version__}")
    try:
        policy = build_policy(settings)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)
    logger.info(
        "Configuration OK: %d role(s), default %r",
        len(policy.resolver.registry),
        policy.resolver.registry.default_role.name,
    )
