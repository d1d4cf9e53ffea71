# dir_scout/crawler/fetcher.py
"""
Network client: a per-entry request handle with retry/backoff and timeouts.

Every :class:`~dir_scout.crawler.models.Link` owns exactly one
:class:`RequestHandle`; handles are never shared between entries.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import ClassVar, Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout, InvalidURL

from dir_scout.config import IndexerConfig
from dir_scout.crawler.errors import FetchError
from dir_scout.logger import get_logger

logger = get_logger("fetcher")


@dataclass(slots=True)
class FetchResult:
    """Outcome of one request: where it ended up and what came back."""

    url: str
    effective_url: str
    status: int
    content_length: Optional[int]
    body: bytes = b""


class RequestHandle:
    """Owns a private :class:`aiohttp.ClientSession` for one entry."""

    _RETRY_STATUS: ClassVar[Sequence[int]] = tuple(range(500, 600)) + (429,)
    _live: ClassVar[int] = 0

    def __init__(self, config: IndexerConfig, *, backoff: float = 1.0) -> None:
        self.config = config
        self.backoff = backoff
        self._session: Optional[ClientSession] = None
        self._closed = False

    @classmethod
    def open_handles(cls) -> int:
        """Number of sessions opened by handles and not yet closed."""
        return cls._live

    @property
    def closed(self) -> bool:
        return self._closed

    async def get(self, url: str) -> FetchResult:
        """Full GET, following redirects; the body is read completely."""
        return await self._request("GET", url, self.config.fetch_timeout, read_body=True)

    async def head(self, url: str) -> Optional[int]:
        """Headers-only probe. Returns ``Content-Length`` or ``None`` if the server omits it."""
        result = await self._request("HEAD", url, self.config.probe_timeout, read_body=False)
        return result.content_length

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        session, self._session = self._session, None
        if session is not None:
            RequestHandle._live -= 1
            if not session.closed:
                await session.close()

    def _ensure_session(self) -> ClientSession:
        if self._closed:
            raise RuntimeError("Request handle already closed")
        if self._session is None:
            self._session = ClientSession(
                # Content-Length must be the file size, not the size of a compressed body
                headers={"User-Agent": self.config.user_agent, "Accept-Encoding": "identity"},
                raise_for_status=False,
            )
            RequestHandle._live += 1
        return self._session

    async def _request(self, method: str, url: str, timeout: float, *, read_body: bool) -> FetchResult:
        session = self._ensure_session()
        attempts = 0
        while True:
            try:
                async with session.request(
                    method, url, timeout=ClientTimeout(total=timeout), allow_redirects=True
                ) as resp:
                    status = resp.status
                    if status in self._RETRY_STATUS:
                        raise ClientError(f"retryable status {status}")
                    if status >= 400:
                        raise FetchError(url, f"HTTP {status}", status)
                    body = await resp.read() if read_body else b""
                    return FetchResult(url, str(resp.url), status, resp.content_length, body)
            except asyncio.TimeoutError as exc:
                # no retry on timeout
                raise FetchError(url, f"{method} timed out after {timeout:.1f} s") from exc
            except InvalidURL as exc:
                raise FetchError(url, f"invalid URL: {exc}") from exc
            except ClientError as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    raise FetchError(url, str(exc) or type(exc).__name__) from exc
                delay = min(self.backoff * 2 ** attempts, 60)
                logger.debug("Retry %d/%d for %s %s after %.2f s", attempts, self.config.retry_times, method, url, delay)
                await asyncio.sleep(delay)


__all__ = ["FetchResult", "RequestHandle"]
