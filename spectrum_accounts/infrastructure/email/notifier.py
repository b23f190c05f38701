from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from spectrum_accounts.domain.errors import NotificationFailure
from spectrum_accounts.domain.ports.notifier import MailTransportPort, NotifierPort

logger = logging.getLogger(__name__)

CODE_LINE = "Your verification code is: "


def render(template: str, code: str) -> tuple[str, str]:
    """Return (text, html) bodies for `code`."""
    line = CODE_LINE + code
    return line, template + line


class TemplateNotifier(NotifierPort):
    """
    Renders the verification template around a code and hands it to a
    mail transport, waiting for the outcome.

    Any failure (template unreadable, relay auth/connect/send error, timeout)
    surfaces as NotificationFailure; the concrete cause only goes to the log.
    """

    def __init__(
        self,
        transport: MailTransportPort,
        *,
        template_path: Path,
        subject: str = "Verification Code",
        timeout: float = 20.0,
    ) -> None:
        self._transport = transport
        self._template_path = Path(template_path)
        self._subject = subject
        self._timeout = timeout

    async def _load_template(self) -> str:
        return await asyncio.to_thread(self._template_path.read_text, "utf-8")

    async def send(self, *, to: str, code: str) -> None:
        try:
            template = await self._load_template()
        except OSError as e:
            logger.error(
                "verification template unreadable",
                extra={"path": str(self._template_path), "error": str(e)},
            )
            raise NotificationFailure("notification failed") from e

        text, html = render(template, code)
        try:
            await asyncio.wait_for(
                self._transport.send(
                    to=to, subject=self._subject, text=text, html=html
                ),
                timeout=self._timeout,
            )
        except Exception as e:  # noqa: BLE001
            logger.error("verification mail not sent", extra={"error": repr(e)})
            raise NotificationFailure("notification failed") from e

    async def aclose(self) -> None:
        await self._transport.aclose()
