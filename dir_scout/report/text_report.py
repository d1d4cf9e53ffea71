# dir_scout/report/text_report.py
"""Plain-text listing of a link table: one ``index type length ref`` line per entry."""
from __future__ import annotations

from typing import List

from dir_scout.crawler.models import LinkTable


def render_text(table: LinkTable) -> str:
    lines: List[str] = [
        f"{i} {link.type.value} {link.content_length} {link.raw_ref}"
        for i, link in enumerate(table)
    ]
    return "\n".join(lines)
