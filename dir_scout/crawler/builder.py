# dir_scout/crawler/builder.py
"""
Link table builder: fetch a listing, extract its anchors, probe every entry.

A build either returns a fully classified :class:`LinkTable` or raises a
:class:`BuildError`; in the latter case every request handle created so far
has already been released.
"""
from __future__ import annotations

import time
from collections import Counter
from enum import Enum
from typing import List, Optional

from dir_scout.config import IndexerConfig
from dir_scout.crawler.classifier import classify_pending
from dir_scout.crawler.errors import AllocationError, FetchError, ProbeError, RootFetchError
from dir_scout.crawler.fetcher import RequestHandle
from dir_scout.crawler.link_extractor import extract_links, parse_html
from dir_scout.crawler.models import HandleFactory, Link, LinkTable, LinkType
from dir_scout.logger import get_logger

logger = get_logger("builder")


class BuildState(str, Enum):
    CREATED = "created"
    ROOT_FETCHING = "root_fetching"
    ROOT_FAILED = "root_failed"
    ROOT_FETCHED = "root_fetched"
    EXTRACTING = "extracting"
    CLASSIFYING = "classifying"
    READY = "ready"
    FAILED = "failed"


class LinkTableBuilder:
    """Builds one :class:`LinkTable` per call to :meth:`build`."""

    def __init__(
        self,
        config: Optional[IndexerConfig] = None,
        handle_factory: HandleFactory = RequestHandle,
    ) -> None:
        self.config = config or IndexerConfig()
        self.handle_factory = handle_factory
        self.state = BuildState.CREATED
        self.probe_failures: List[ProbeError] = []

    async def build(self, url: str) -> LinkTable:
        self.state = BuildState.CREATED
        self.probe_failures = []
        start = time.monotonic()
        table = LinkTable()
        try:
            await self._populate(table, url)
        except BaseException:
            if self.state is not BuildState.ROOT_FAILED:
                self.state = BuildState.FAILED
            await table.close()
            raise

        self.state = BuildState.READY
        counts = Counter(link.type for link in table)
        logger.info(
            "Indexed %s: %d entries (%d dirs, %d files, %d unknown) in %.2f s",
            url,
            len(table),
            counts[LinkType.DIRECTORY],
            counts[LinkType.FILE],
            counts[LinkType.UNKNOWN],
            time.monotonic() - start,
        )
        return table

    async def _populate(self, table: LinkTable, url: str) -> None:
        try:
            # entry 0 keeps the full listing URL, only hrefs are bounded
            table.add(Link(url, self.config, self.handle_factory, truncate=False))
        except MemoryError as exc:
            raise AllocationError(url, "cannot create root entry") from exc
        root = table.root

        self.state = BuildState.ROOT_FETCHING
        logger.info("Fetching listing %s", url)
        try:
            result = await root.handle.get(url)
        except FetchError as exc:
            self.state = BuildState.ROOT_FAILED
            logger.error("Cannot retrieve the base URL %s: %s", url, exc.reason)
            raise RootFetchError(url, exc.reason) from exc
        root.body = result.body
        root.resolved_url = result.effective_url
        table.effective_url = result.effective_url
        self.state = BuildState.ROOT_FETCHED

        self.state = BuildState.EXTRACTING
        soup = parse_html(root.body, url)
        root.body = None
        added = extract_links(soup, table, self.config, self.handle_factory)
        soup.decompose()
        logger.debug("Extracted %d candidate links from %s", added, url)

        self.state = BuildState.CLASSIFYING
        self.probe_failures = await classify_pending(table, self.config.concurrency)


async def build_link_table(
    url: str,
    config: Optional[IndexerConfig] = None,
    handle_factory: HandleFactory = RequestHandle,
) -> LinkTable:
    """Build and return a classified link table for *url*."""
    return await LinkTableBuilder(config, handle_factory).build(url)


__all__ = ["BuildState", "LinkTableBuilder", "build_link_table"]
