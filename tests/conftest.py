# File: tests/conftest.py
from __future__ import annotations

from typing import Dict, List, Optional, Union

import pytest

from dir_scout.config import IndexerConfig
from dir_scout.crawler.errors import FetchError
from dir_scout.crawler.fetcher import FetchResult
from dir_scout.crawler.models import Link, LinkTable

LISTING_URL = "http://files.example/pub/"


class FakeHandle:
    """In-memory request handle: GET serves *pages*, HEAD answers from *lengths*.

    A length of ``None`` means "no Content-Length header", an exception
    instance is raised as is, and a missing URL behaves like a 404.
    """

    def __init__(self, network: "FakeNetwork", config: IndexerConfig) -> None:
        self.network = network
        self.config = config
        self.head_calls: List[str] = []
        self.closed = False

    async def get(self, url: str) -> FetchResult:
        if url not in self.network.pages:
            raise FetchError(url, "HTTP 404", 404)
        body = self.network.pages[url]
        effective = self.network.redirects.get(url, url)
        return FetchResult(url, effective, 200, len(body), body)

    async def head(self, url: str) -> Optional[int]:
        self.head_calls.append(url)
        self.network.probed.append(url)
        if url not in self.network.lengths:
            raise FetchError(url, "HTTP 404", 404)
        value = self.network.lengths[url]
        if isinstance(value, Exception):
            raise value
        return value

    async def close(self) -> None:
        self.closed = True


class FakeNetwork:
    def __init__(self) -> None:
        self.pages: Dict[str, bytes] = {}
        self.lengths: Dict[str, Union[int, None, Exception]] = {}
        self.redirects: Dict[str, str] = {}
        self.handles: List[FakeHandle] = []
        self.probed: List[str] = []

    def factory(self, config: IndexerConfig) -> FakeHandle:
        handle = FakeHandle(self, config)
        self.handles.append(handle)
        return handle

    def open_handles(self) -> int:
        return sum(1 for h in self.handles if not h.closed)


@pytest.fixture()
def config() -> IndexerConfig:
    """Fast settings for tests: no retries, short timeouts."""
    return IndexerConfig(
        fetch_timeout=2.0,
        probe_timeout=1.0,
        retry_times=0,
        user_agent="TestAgent/1.0",
    )


@pytest.fixture()
def network() -> FakeNetwork:
    return FakeNetwork()


@pytest.fixture()
def listing_table(config, network) -> LinkTable:
    """A table rooted at LISTING_URL as if the root GET had already succeeded."""
    table = LinkTable()
    root = Link(LISTING_URL, config, network.factory)
    root.resolved_url = LISTING_URL
    table.add(root)
    table.effective_url = LISTING_URL
    return table
