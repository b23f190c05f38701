from __future__ import annotations

from typing import Optional

import httpx

from spectrum_accounts.domain.ports.notifier import MailTransportPort


class HttpMailTransport(MailTransportPort):
    """Posts messages to an HTTP mail relay (e.g. the smtp-mock container)."""

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
        send_path: str = "/send",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._send_path = send_path if send_path.startswith("/") else f"/{send_path}"
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    async def send(self, *, to: str, subject: str, text: str, html: str) -> None:
        url = f"{self._base_url}{self._send_path}"
        payload = {"to": to, "subject": subject, "body": text, "html": html}

        try:
            resp = await self._client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise RuntimeError(f"mail relay HTTP error: {e}") from e
        if not resp.is_success:
            raise RuntimeError(
                f"mail relay responded {resp.status_code}: {resp.text[:200]}"
            )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
