from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from briefly.errors import FetchError

log = logging.getLogger("briefly.http")


# Many sites reject requests that lack browser-like headers
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Upgrade-Insecure-Requests": "1",
}


@dataclass(frozen=True)
class FetchResult:
    final_url: str
    status_code: int
    content_type: Optional[str]
    html: str


class HttpFetcher:
    """
    Thin wrapper around httpx.AsyncClient. One attempt per URL, no retries.
    Pass `client` to reuse a shared client; otherwise one is created and owned.
    """

    def __init__(
        self,
        timeout_s: float = 20.0,
        follow_redirects: bool = True,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_s),
            follow_redirects=follow_redirects,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def fetch(self, url: str) -> FetchResult:
        """
        GET a URL with browser headers and return the decoded body.
        Raises FetchError with the status code for non-2xx responses and
        FetchError(status=None) for transport failures.
        """
        try:
            resp = await self._client.get(url, headers=DEFAULT_HEADERS)
        except httpx.HTTPError as e:
            raise FetchError(url, None, f"{type(e).__name__}: {e}") from e

        if not resp.is_success:
            log.info("Fetch failed for %s with status %d", url, resp.status_code)
            raise FetchError(url, resp.status_code, resp.reason_phrase)

        log.debug("Fetched %s (%d bytes)", resp.url, len(resp.content))

        return FetchResult(
            final_url=str(resp.url),
            status_code=resp.status_code,
            content_type=resp.headers.get("content-type"),
            html=resp.text,
        )
