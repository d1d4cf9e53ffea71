# dir_scout/report/json_report.py

"""
JSON report for DirScout.

Serialises the rows of a :class:`~dir_scout.crawler.models.LinkTable` to a file.
"""
import json
from pathlib import Path
from typing import Any, Dict

from dir_scout.crawler.models import LinkTable


def table_to_dict(table: LinkTable) -> Dict[str, Any]:
    return {
        "base_url": table.base_url,
        "effective_url": table.effective_url,
        "entries": table.as_rows(),
    }


def render_json(table: LinkTable, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *table* as JSON at *output_path*.

    :param table: a built LinkTable (open or closed)
    :param output_path: path of the JSON file
    :return: Path of the written file

    Example:
    ```python
    from dir_scout.report.json_report import render_json
    report_path = render_json(table, 'reports/listing.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(table_to_dict(table), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
