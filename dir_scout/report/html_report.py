# File: dir_scout/report/html_report.py
"""dir_scout.report.html_report: HTML listing of a link table rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from dir_scout.crawler.models import LinkTable, LinkType

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "listing.html.j2"


def render_html(
    table: LinkTable,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Render *table* through ``listing.html.j2`` and save it at *output_path*.

    Args:
        table: a built LinkTable.
        output_path: path of the resulting HTML file.
        template_dir: directory holding ``listing.html.j2``; the bundled
            template is used when omitted.

    Returns:
        Path of the saved HTML file.
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    entries = table.as_rows()
    context: dict[str, Any] = {
        "base_url": table.base_url,
        "entries": entries,
        "directories": sum(1 for link in table if link.type is LinkType.DIRECTORY),
        "files": sum(1 for link in table if link.type is LinkType.FILE),
        "unknown": sum(1 for link in table if link.type is LinkType.UNKNOWN),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
