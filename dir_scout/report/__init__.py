"""dir_scout.report: text, JSON and HTML renderings of a link table."""

from .html_report import render_html
from .json_report import render_json, table_to_dict
from .text_report import render_text

__all__ = ["render_html", "render_json", "render_text", "table_to_dict"]
