# File: dir_scout/engine.py
"""dir_scout.engine: entry points that build one link table from a configuration."""

from __future__ import annotations

import asyncio
from typing import Optional

from dir_scout.config import IndexerConfig, load_config
from dir_scout.crawler.builder import build_link_table
from dir_scout.crawler.models import LinkTable
from dir_scout.logger import logger

__all__ = ["Engine", "start_index"]


async def start_index(cfg: IndexerConfig, url: Optional[str] = None) -> LinkTable:
    """
    Build the link table for *url* (or ``cfg.base_url``) and release its handles.

    The returned table is closed: its entries stay readable but no further
    requests can be made through it.
    """
    target = url or (str(cfg.base_url) if cfg.base_url else None)
    if not target:
        raise ValueError("No URL to index: pass one explicitly or set base_url")
    table = await build_link_table(target, cfg)
    await table.close()
    return table


class Engine:
    """Synchronous facade for the CLI and scripts."""

    @staticmethod
    def load_config(path: Optional[str]) -> IndexerConfig:
        return load_config(path)

    def __init__(self, config: IndexerConfig) -> None:
        self.config = config

    def run(self, url: Optional[str] = None, timeout: Optional[float] = None) -> LinkTable:
        """Index *url* with an optional overall timeout (seconds)."""
        logger.info("Starting index…")

        async def _runner() -> LinkTable:
            if timeout:
                return await asyncio.wait_for(start_index(self.config, url), timeout=timeout)
            return await start_index(self.config, url)

        try:
            return asyncio.run(_runner())
        except asyncio.TimeoutError:
            logger.error("Indexing did not finish within %s seconds", timeout)
            raise
