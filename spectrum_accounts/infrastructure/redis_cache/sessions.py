from __future__ import annotations

import secrets
from typing import Optional

from redis.asyncio import Redis

from spectrum_accounts.domain.entities import ADMIN_ROLE, USER_ROLE, Subject
from spectrum_accounts.domain.ports.token_verifier import TokenVerifierPort


class RedisSessions(TokenVerifierPort):
    """Opaque bearer tokens: "<prefix><token>" -> hash {user_id, role} with TTL."""

    def __init__(
        self, redis: Redis, *, key_prefix: str = "sess:", ttl_seconds: int = 86400
    ) -> None:
        self._redis = redis
        self._prefix = key_prefix
        self._ttl = ttl_seconds

    def _key(self, token: str) -> str:
        return f"{self._prefix}{token}"

    async def create(self, subject: Subject) -> str:
        token = secrets.token_urlsafe(32)
        key = self._key(token)
        pipe = self._redis.pipeline(transaction=True)
        pipe.hset(key, mapping={"user_id": str(subject.user_id), "role": subject.role})
        pipe.expire(key, self._ttl)
        await pipe.execute()
        return token

    async def verify(self, token: str) -> Optional[Subject]:
        stored = await self._redis.hgetall(self._key(token))
        if not stored or "user_id" not in stored:
            return None
        role = ADMIN_ROLE if stored.get("role") == ADMIN_ROLE else USER_ROLE
        return Subject(user_id=int(stored["user_id"]), role=role)
