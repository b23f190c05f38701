from __future__ import annotations

from typing import Protocol

from spectrum_accounts.domain.entities import Subject


class TokenVerifierPort(Protocol):
    async def verify(self, token: str) -> Subject | None:
        """Resolve a bearer token to its subject, or None if unknown/expired."""
