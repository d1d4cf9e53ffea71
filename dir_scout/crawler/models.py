# dir_scout/crawler/models.py
"""
Data models for link tables: one :class:`Link` per discovered reference,
collected in an ordered :class:`LinkTable`.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

from dir_scout.config import IndexerConfig
from dir_scout.crawler.fetcher import RequestHandle
from dir_scout.utils import parent_of, truncate_ref

HandleFactory = Callable[[IndexerConfig], Any]


class LinkType(str, Enum):
    UNKNOWN = "U"
    FILE = "F"
    DIRECTORY = "D"


class Link:
    """One reference found in a listing (or the listing URL itself)."""

    __slots__ = ("raw_ref", "resolved_url", "type", "content_length", "error", "body", "handle")

    def __init__(
        self,
        raw_ref: str,
        config: IndexerConfig,
        handle_factory: HandleFactory = RequestHandle,
        *,
        truncate: bool = True,
    ) -> None:
        self.raw_ref: str = truncate_ref(raw_ref, config.max_ref_length) if truncate else raw_ref
        self.resolved_url: Optional[str] = None
        self.type: LinkType = LinkType.UNKNOWN
        self.content_length: int = 0
        self.error: Optional[str] = None
        self.body: Optional[bytes] = None
        self.handle = handle_factory(config)

    def classify(self, link_type: LinkType, content_length: int = 0) -> None:
        """Set type and length together. A link is classified at most once."""
        if self.type is not LinkType.UNKNOWN:
            raise ValueError(f"{self.raw_ref!r} is already classified as {self.type.name}")
        if link_type is LinkType.UNKNOWN:
            raise ValueError("Cannot classify a link as UNKNOWN")
        self.content_length = content_length if link_type is LinkType.FILE else 0
        self.error = None
        self.type = link_type

    @property
    def is_dir(self) -> bool:
        return self.type is LinkType.DIRECTORY

    async def close(self) -> None:
        self.body = None
        await self.handle.close()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "raw_ref": self.raw_ref,
            "resolved_url": self.resolved_url,
            "type": self.type.name.lower(),
            "content_length": self.content_length,
            "error": self.error,
        }

    def __repr__(self) -> str:
        return f"<Link {self.type.value} {self.content_length} {self.raw_ref!r}>"


class LinkTable:
    """Ordered, append-only collection of links for one listing page.

    ``entries[0]`` is always the listing itself. The table owns every link and
    closing it releases all request handles.
    """

    def __init__(self) -> None:
        self.entries: List[Link] = []
        self.effective_url: Optional[str] = None
        self._frozen = False
        self._closed = False

    # Collection protocol ---------------------------------------------------
    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Link]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> Link:
        return self.entries[index]

    async def __aenter__(self) -> LinkTable:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # State -----------------------------------------------------------------
    @property
    def root(self) -> Link:
        if not self.entries:
            raise IndexError("Link table has no root entry")
        return self.entries[0]

    @property
    def base_url(self) -> str:
        return self.root.raw_ref

    @property
    def base_dir(self) -> str:
        """Directory every relative entry is resolved against."""
        return parent_of(self.effective_url or self.base_url)

    @property
    def closed(self) -> bool:
        return self._closed

    def add(self, link: Link) -> int:
        """Append *link* and return its index."""
        if self._closed:
            raise RuntimeError("Link table is closed")
        if self._frozen:
            raise RuntimeError("Link table is frozen; entries cannot be added during classification")
        self.entries.append(link)
        return len(self.entries) - 1

    def freeze(self) -> None:
        self._frozen = True

    def pending(self) -> List[Link]:
        return [link for link in self.entries if link.type is LinkType.UNKNOWN]

    async def close(self) -> None:
        if self._closed:
            return
        first: Optional[BaseException] = None
        for link in self.entries:
            try:
                await link.close()
            except BaseException as exc:
                # keep releasing the remaining handles, report the first failure
                if first is None:
                    first = exc
        self._closed = True
        if first is not None:
            raise first

    def as_rows(self) -> List[Dict[str, Any]]:
        """Read-only snapshot of every entry, handles excluded."""
        return [{"index": i, **link.as_dict()} for i, link in enumerate(self.entries)]


__all__ = ["LinkType", "Link", "LinkTable", "HandleFactory"]
