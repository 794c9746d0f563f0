"""PostgreSQL async connection pool for the owner store."""

from psycopg_pool import AsyncConnectionPool

from moodlog.config import Settings


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Unopened pool sized from settings.

    The composition root's caller owns the lifecycle: ``await pool.open()``
    before the first unit of work, ``await pool.close()`` on shutdown.
    """
    return AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        name="moodlog",
        open=False,
    )
