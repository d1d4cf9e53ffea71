# File: dir_scout/utils.py
"""dir_scout.utils: URL algebra used to resolve listing entries against their directory."""

from __future__ import annotations

from typing import Sequence

from dir_scout.logger import get_logger

logger = get_logger("utils")

__all__: Sequence[str] = (
    "parent_of",
    "join_url",
    "truncate_ref",
)

_SCHEME_SEP = "://"


def parent_of(url: str) -> str:
    """Return *url* up to and including its last ``/``.

    ``http://host`` has no path separator beyond the scheme, so its parent is
    ``http://host/``. A string without any ``/`` raises :class:`ValueError`.
    """
    cut = url.rfind("/")
    if cut < 0:
        raise ValueError(f"URL has no path separator: {url!r}")
    scheme_end = url.find(_SCHEME_SEP)
    if scheme_end >= 0 and cut < scheme_end + len(_SCHEME_SEP):
        return url + "/"
    return url[: cut + 1]


def join_url(base: str, sublink: str) -> str:
    """Append *sublink* to *base*, inserting exactly one ``/`` between them.

    *sublink* is taken verbatim: absolute links must be filtered out beforehand.
    """
    if base.endswith("/"):
        joined = base + sublink
    else:
        joined = f"{base}/{sublink}"
    logger.debug("Joined URL: %s + %s -> %s", base, sublink, joined)
    return joined


def truncate_ref(ref: str, limit: int) -> str:
    """Bound raw reference text to *limit* characters."""
    if len(ref) <= limit:
        return ref
    logger.debug("Truncated reference of %d chars to %d", len(ref), limit)
    return ref[:limit]
