from __future__ import annotations

from psycopg_pool import AsyncConnectionPool

from spectrum_accounts.settings import Settings


def _add_connect_timeout(dsn: str, seconds: int = 3) -> str:
    if "connect_timeout=" in dsn:
        return dsn
    sep = "&" if "?" in dsn else "?"
    return f"{dsn}{sep}connect_timeout={seconds}"


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """
    Build the pool WITHOUT opening it; the app lifespan opens and closes it.
    No deprecation warning because we pass open=False.
    """
    return AsyncConnectionPool(
        _add_connect_timeout(settings.database_url),
        min_size=1,
        max_size=10,
        timeout=5,
        open=False,
    )


async def close_pool(pool: AsyncConnectionPool | None) -> None:
    if pool is not None:
        await pool.close()
