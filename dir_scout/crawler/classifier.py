# dir_scout/crawler/classifier.py
"""
Classifier: HEAD-probes every unclassified entry of a link table.

An entry whose probe reports a ``Content-Length`` is a file (zero-byte files
included); one without it is a directory. Failed probes leave the entry
``UNKNOWN`` and are returned to the caller.
"""
from __future__ import annotations

import asyncio
from typing import List, Optional

from dir_scout.crawler.errors import FetchError, ProbeError
from dir_scout.crawler.models import Link, LinkTable, LinkType
from dir_scout.logger import get_logger
from dir_scout.utils import join_url

logger = get_logger("classifier")


async def probe_link(link: Link, base_dir: str) -> Optional[ProbeError]:
    """Resolve *link* against *base_dir* if needed and classify it from one HEAD request."""
    if link.resolved_url is None:
        link.resolved_url = join_url(base_dir, link.raw_ref)
    try:
        length = await link.handle.head(link.resolved_url)
    except FetchError as exc:
        error = ProbeError(link.resolved_url, exc.reason)
        link.error = str(error)
        logger.warning("%s", error)
        return error

    if length is None:
        link.classify(LinkType.DIRECTORY)
    else:
        link.classify(LinkType.FILE, length)
    logger.debug("%s -> %s (%d)", link.resolved_url, link.type.name, link.content_length)
    return None


async def classify_pending(table: LinkTable, concurrency: int = 1) -> List[ProbeError]:
    """Classify all ``UNKNOWN`` entries of *table* in table order.

    With ``concurrency > 1`` probes run under a semaphore; every task writes
    only its own entry, and the table is frozen so membership cannot change.
    """
    if concurrency < 1:
        raise ValueError("concurrency must be >= 1")
    table.freeze()
    pending = table.pending()
    if not pending:
        return []
    base_dir = table.base_dir

    if concurrency == 1:
        results = [await probe_link(link, base_dir) for link in pending]
    else:
        semaphore = asyncio.Semaphore(concurrency)

        async def _bounded(link: Link) -> Optional[ProbeError]:
            async with semaphore:
                return await probe_link(link, base_dir)

        results = await asyncio.gather(*(_bounded(link) for link in pending))

    failures = [err for err in results if err is not None]
    logger.debug("Probed %d entries, %d failed", len(pending), len(failures))
    return failures


__all__ = ["probe_link", "classify_pending"]
