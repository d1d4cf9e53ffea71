# dir_scout/__init__.py
"""
DirScout package initializer.
Defines package version and exposes the link-table API and CLI.
"""
__version__ = "0.1.0"

from .crawler import LinkTable, LinkTableBuilder, LinkType, build_link_table

# Expose CLI entry point
from .cli import cli  # экспорт для pytest

__all__ = ["__version__", "cli", "LinkTable", "LinkTableBuilder", "LinkType", "build_link_table"]
