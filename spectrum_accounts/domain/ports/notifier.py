from __future__ import annotations

from typing import Protocol


class NotifierPort(Protocol):
    async def send(self, *, to: str, code: str) -> None:
        """Deliver the code to `to`. Raises NotificationFailure."""


class MailTransportPort(Protocol):
    async def send(self, *, to: str, subject: str, text: str, html: str) -> None:
        """Hand one text+HTML message to the mail relay."""

    async def aclose(self) -> None:
        """Release anything the transport owns."""
