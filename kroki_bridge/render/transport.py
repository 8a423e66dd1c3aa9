"""Kroki transport client — single GET per render, no retries.

Env vars:
  KROKI_BASE_URL — Kroki server base (default: https://kroki.io)
  KROKI_TIMEOUT  — HTTP timeout seconds, 0 disables the timeout (default: 30)
"""

import logging
import os
from dataclasses import dataclass, field

import httpx

from kroki_bridge.render.errors import TransportFailure
from kroki_bridge.render.models import wire_format

log = logging.getLogger(__name__)

BASE_URL = os.getenv("KROKI_BASE_URL", "https://kroki.io").rstrip("/")
TIMEOUT = float(os.getenv("KROKI_TIMEOUT", "30") or 0)
SNIPPET_LIMIT = 300


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    content: bytes = b""
    headers: httpx.Headers = field(default_factory=httpx.Headers)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", httpx.Headers(self.headers))

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def text_snippet(self) -> str | None:
        """Decoded body when present and short enough to show, else None."""
        text = self.text().strip()
        if not text or len(text) > SNIPPET_LIMIT:
            return None
        return text


class KrokiClient:
    """Thin httpx wrapper around the Kroki GET API.

    Any HTTP status comes back as a RawResponse; only network-level failures
    raise (as TransportFailure without a status code).
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or BASE_URL).rstrip("/")
        timeout = TIMEOUT if timeout is None else timeout
        self.timeout = timeout if timeout > 0 else None
        self._transport = transport

    def url_for(self, diagram_type: str, output_format: str, token: str) -> str:
        return f"{self.base_url}/{diagram_type}/{wire_format(output_format)}/{token}"

    def fetch(self, diagram_type: str, output_format: str, token: str) -> RawResponse:
        url = self.url_for(diagram_type, output_format, token)
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.get(url)
        except httpx.HTTPError as exc:
            log.warning("Kroki request failed type=%s format=%s: %s", diagram_type, output_format, exc)
            raise TransportFailure(
                f"Could not reach Kroki at {self.base_url}: {str(exc) or exc.__class__.__name__}"
            ) from exc
        log.info(
            "Kroki responded type=%s format=%s status=%s bytes=%s",
            diagram_type,
            output_format,
            resp.status_code,
            len(resp.content),
        )
        return RawResponse(status_code=resp.status_code, content=resp.content, headers=resp.headers)
