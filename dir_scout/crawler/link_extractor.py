# dir_scout/crawler/link_extractor.py
"""
Candidate filtering and anchor extraction for directory listings.
"""
from __future__ import annotations

from typing import Iterator, List, Union

from bs4 import BeautifulSoup
from bs4.element import Tag
from bs4.exceptions import ParserRejectedMarkup

from dir_scout.config import IndexerConfig
from dir_scout.crawler.errors import AllocationError, ParseError
from dir_scout.crawler.fetcher import RequestHandle
from dir_scout.crawler.models import HandleFactory, Link, LinkTable
from dir_scout.logger import get_logger

logger = get_logger("extractor")

_ABSOLUTE_PREFIXES = ("http://", "https://")


def is_valid_candidate(href: str) -> bool:
    """
    Return True if *href* is an in-scope relative reference.

    The first character must be an ASCII letter or digit, so ``#frag``,
    ``?C=N;O=D``, ``../`` and ``/abs`` are all rejected. Links starting with
    ``http://`` or ``https://`` point elsewhere and are rejected too.
    """
    first = href[:1]
    if not (first.isascii() and first.isalnum()):
        return False
    return not href.startswith(_ABSOLUTE_PREFIXES)


def parse_html(body: Union[bytes, str], url: str = "") -> BeautifulSoup:
    """Parse a fetched listing; markup the parser refuses raises :class:`ParseError`."""
    try:
        return BeautifulSoup(body, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(url, str(exc)) from exc


def iter_anchor_hrefs(root: Tag) -> Iterator[str]:
    """Yield ``href`` values of ``<a>`` elements in document order.

    Depth-first pre-order walk over element nodes with an explicit stack, so
    deeply nested markup cannot exhaust the call stack.
    """
    stack: List[Tag] = [root]
    while stack:
        node = stack.pop()
        if node.name == "a":
            href = node.get("href")
            if isinstance(href, str):
                yield href
        children = [child for child in node.contents if isinstance(child, Tag)]
        stack.extend(reversed(children))


def extract_links(
    root: Tag,
    table: LinkTable,
    config: IndexerConfig,
    handle_factory: HandleFactory = RequestHandle,
) -> int:
    """Append a new link to *table* for every qualifying anchor under *root*.

    No deduplication: two anchors with the same href give two entries.
    Returns the number of links appended.
    """
    added = 0
    for href in iter_anchor_hrefs(root):
        if not is_valid_candidate(href):
            logger.debug("Skipped href %r", href)
            continue
        try:
            index = table.add(Link(href, config, handle_factory))
        except MemoryError as exc:
            raise AllocationError(table.base_url, f"cannot append entry for {href!r}") from exc
        logger.debug("Entry %d: %s", index, href)
        added += 1
    return added


__all__ = ["is_valid_candidate", "parse_html", "iter_anchor_hrefs", "extract_links"]
