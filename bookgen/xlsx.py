"""Utilities for exporting book data to Excel workbooks."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from openpyxl import Workbook  # type: ignore[import-untyped]
from openpyxl.styles import Alignment  # type: ignore[import-untyped]
from openpyxl.utils import get_column_letter  # type: ignore[import-untyped]
from openpyxl.worksheet.table import (  # type: ignore[import-untyped]
    Table,
    TableStyleInfo,
)

from bookgen.json_utils import json_dumps

Sheets = Dict[str, List[Dict[str, Any]]]

# Values longer than this are wrapped in a wide column.
LONG_TEXT = 50


def _flatten(data: Dict[str, Any]) -> Sheets:
    """Flatten the output of ``book_to_dict`` into tabular sheet data.

    Args:
        data: Book structure produced by ``bookgen.export.book_to_dict``.

    Returns:
        Mapping of sheet names to row dictionaries.
    """

    sheets: Sheets = {
        "Book": [dict(data.get("book", {}))],
        "Chapter": [],
        "Article": [],
        "Contributor": list(data.get("contributors", [])),
        "Url": [
            {"no": i, "url": u}
            for i, u in enumerate(data.get("urls", []), start=1)
        ],
    }

    for chapter in data.get("chapters", []):
        row = dict(chapter)
        articles = row.pop("articles", [])
        row["articles"] = ",".join(a["article_id"] for a in articles)
        sheets["Chapter"].append(row)

        # Articles reference their chapter by number; the synthetic
        # contributors chapter has no id.
        for article in articles:
            art_row = dict(article)
            art_row["chapter_no"] = chapter["no"]
            sheets["Article"].append(art_row)

    # Drop sheets for which no data was recorded.
    return {name: rows for name, rows in sheets.items() if rows}


def write_workbook(data: Dict[str, Any], path: Path) -> None:
    """Write book data into an Excel workbook.

    Args:
        data: Book structure produced by ``bookgen.export.book_to_dict``.
        path: Destination file path for the workbook.
    """

    sheets = _flatten(data)

    workbook = Workbook()

    # Remove the default sheet created by openpyxl when present.
    default_sheet = workbook.active
    if default_sheet is not None:
        workbook.remove(default_sheet)

    for sheet_name, rows in sheets.items():
        ws = workbook.create_sheet(title=sheet_name)

        headers = list(rows[0].keys())
        ws.append(headers)

        wrap_columns: set[int] = set()
        list_columns: set[int] = set()

        for row in rows:
            values: List[Any] = []
            for idx, header in enumerate(headers):
                cell_value = row.get(header)

                # Serialize nested structures to JSON strings.
                if isinstance(cell_value, (list, dict)):
                    list_columns.add(idx)
                    cell_value = json_dumps(cell_value)

                if isinstance(cell_value, str) and len(cell_value) > LONG_TEXT:
                    wrap_columns.add(idx)

                values.append(cell_value)
            ws.append(values)

        for col_idx in wrap_columns | list_columns:
            for col_cells in ws.iter_cols(
                min_col=col_idx + 1,
                max_col=col_idx + 1,
                min_row=1,
                max_row=ws.max_row,
            ):
                for cell in col_cells:
                    cell.alignment = Alignment(wrapText=True)

        # Set column widths based on the contained data type.
        for idx in range(len(headers)):
            col_letter = get_column_letter(idx + 1)
            if idx in wrap_columns:
                ws.column_dimensions[col_letter].width = 100
            elif idx in list_columns:
                ws.column_dimensions[col_letter].width = 50
            else:
                ws.column_dimensions[col_letter].width = 16

        end_column = get_column_letter(len(headers))
        table = Table(
            displayName=sheet_name, ref=f"A1:{end_column}{len(rows) + 1}"
        )
        table.tableStyleInfo = TableStyleInfo(
            name="TableStyleMedium9", showRowStripes=True
        )
        ws.add_table(table)

    workbook.save(path)
