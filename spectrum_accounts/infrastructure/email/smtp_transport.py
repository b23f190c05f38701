from __future__ import annotations

import asyncio
import smtplib
import ssl
from email.message import EmailMessage

from spectrum_accounts.domain.ports.notifier import MailTransportPort


class SmtpMailTransport(MailTransportPort):
    """
    Sends through an authenticated SMTP relay.

    Each send opens its own connection (SSL on 465, STARTTLS otherwise) in a
    worker thread so the event loop is never blocked by the relay.
    """

    def __init__(
        self,
        host: str,
        port: int,
        *,
        username: str,
        password: str,
        sender: str | None = None,
        timeout: float = 20.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = sender or username
        self._timeout = timeout

    def _build_message(self, to: str, subject: str, text: str, html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self._sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(text)
        msg.add_alternative(html, subtype="html")
        return msg

    def _send_blocking(self, msg: EmailMessage) -> None:
        context = ssl.create_default_context()
        if self._port == 465:
            server = smtplib.SMTP_SSL(
                self._host, self._port, timeout=self._timeout, context=context
            )
        else:
            server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
        with server:
            if self._port != 465:
                server.starttls(context=context)
            if self._username:
                server.login(self._username, self._password)
            server.send_message(msg)

    async def send(self, *, to: str, subject: str, text: str, html: str) -> None:
        msg = self._build_message(to, subject, text, html)
        await asyncio.to_thread(self._send_blocking, msg)

    async def aclose(self) -> None:
        # nothing pooled
        return None
