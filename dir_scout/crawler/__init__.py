"""dir_scout.crawler: building link tables from HTTP directory listings."""

from .builder import BuildState, LinkTableBuilder, build_link_table
from .classifier import classify_pending
from .errors import (
    AllocationError,
    BuildError,
    DirScoutError,
    FetchError,
    ParseError,
    ProbeError,
    RootFetchError,
)
from .fetcher import FetchResult, RequestHandle
from .link_extractor import extract_links, is_valid_candidate, parse_html
from .models import Link, LinkTable, LinkType

__all__ = [
    "AllocationError",
    "BuildError",
    "BuildState",
    "DirScoutError",
    "FetchError",
    "FetchResult",
    "Link",
    "LinkTable",
    "LinkTableBuilder",
    "LinkType",
    "ParseError",
    "ProbeError",
    "RequestHandle",
    "RootFetchError",
    "build_link_table",
    "classify_pending",
    "extract_links",
    "is_valid_candidate",
    "parse_html",
]
