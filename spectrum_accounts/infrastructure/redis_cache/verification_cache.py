from __future__ import annotations

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from spectrum_accounts.domain.errors import StorageFailure
from spectrum_accounts.domain.ports.verification_cache import VerificationCachePort

logger = logging.getLogger(__name__)


class RedisVerificationCache(VerificationCachePort):
    """
    One key per subject: "<prefix><subject id>" -> 4-digit code, with a Redis TTL.

    SET overwrites, so a new code replaces any outstanding one. Expiry is left
    entirely to Redis; a GET after the TTL simply returns nothing.
    """

    def __init__(self, redis: Redis, *, key_prefix: str = "") -> None:
        self._redis = redis
        self._prefix = key_prefix

    def _key(self, subject_id: int) -> str:
        return f"{self._prefix}{subject_id}"

    async def put(self, subject_id: int, code: str, ttl_seconds: int) -> None:
        try:
            await self._redis.set(self._key(subject_id), code, ex=ttl_seconds)
        except RedisError as e:
            logger.error(
                "verification cache write failed",
                extra={"user_id": subject_id, "error": str(e)},
            )
            raise StorageFailure(f"could not store verification code: {e}") from e

    async def get(self, subject_id: int) -> str | None:
        try:
            return await self._redis.get(self._key(subject_id))
        except RedisError as e:
            raise StorageFailure(f"could not read verification code: {e}") from e

    async def delete(self, subject_id: int) -> None:
        try:
            await self._redis.delete(self._key(subject_id))
        except RedisError as e:
            raise StorageFailure(f"could not delete verification code: {e}") from e
