from typing import Protocol


class VerificationCachePort(Protocol):
    async def put(self, subject_id: int, code: str, ttl_seconds: int) -> None:
        """Store/replace the code for subject_id, expiring after ttl_seconds.

        Raises StorageFailure if the backend is unreachable.
        """

    async def get(self, subject_id: int) -> str | None:
        """Return the stored code, or None if absent or expired."""

    async def delete(self, subject_id: int) -> None:
        """Remove the code so it cannot be redeemed again."""
