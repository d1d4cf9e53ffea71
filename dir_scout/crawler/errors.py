# dir_scout/crawler/errors.py
"""
Exceptions raised while building a link table.

:class:`BuildError` subclasses are fatal to a build and never come with a
table. :class:`ProbeError` only affects one entry.
"""
from __future__ import annotations

from typing import Optional


class DirScoutError(Exception):
    """Base class for all DirScout errors."""


class FetchError(DirScoutError):
    """A single HTTP request failed (network error, timeout or bad status)."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"{url}: {reason}")


class BuildError(DirScoutError):
    """A link table could not be built for *url*."""

    operation = "build"

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"{self.operation} failed for {url}: {detail}")


class RootFetchError(BuildError):
    operation = "GET"


class ParseError(BuildError):
    operation = "parse"


class AllocationError(BuildError):
    operation = "append"


class ProbeError(DirScoutError):
    """A HEAD probe for one entry failed; the entry stays unclassified."""

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"HEAD failed for {url}: {detail}")


__all__ = [
    "DirScoutError",
    "FetchError",
    "BuildError",
    "RootFetchError",
    "ParseError",
    "AllocationError",
    "ProbeError",
]
