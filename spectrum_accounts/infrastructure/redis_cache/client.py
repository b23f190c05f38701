from __future__ import annotations

from redis.asyncio import Redis

from spectrum_accounts.settings import Settings


def create_redis(settings: Settings) -> Redis:
    """
    Build the Redis client used as the verification cache handle.

    Owned by the app lifespan: created on startup, closed with close_redis()
    on shutdown. decode_responses=True -> we get/put str, not bytes.
    Every command is bounded by cache_timeout_seconds.
    """
    return Redis.from_url(
        settings.redis_url,
        password=settings.redis_password or None,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=settings.cache_timeout_seconds,
        socket_connect_timeout=settings.cache_timeout_seconds,
    )


async def close_redis(client: Redis | None) -> None:
    if client is not None:
        await client.aclose()
