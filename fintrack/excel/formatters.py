"""
Cell-level helpers: header rows, body/total cells, KPI cards, column widths.
"""
from __future__ import annotations

import datetime as dt

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from fintrack.excel.styles import (
    ALIGN,
    BODY_FONT,
    CELL_BORDER,
    HEADER_BORDER,
    HEADER_FILL,
    HEADER_FONT,
    KPI_FONT,
    KPI_LABEL_FONT,
    NUMBER_FORMATS,
    NUMERIC_KINDS,
    ROW_FILLS,
    SIGNED_KPI_FONTS,
    STRIPE_FILL,
    TOTAL_BORDER,
    TOTAL_FILL,
    TOTAL_FONT,
)


def style_header(ws: Worksheet, row: int, labels: list[str]) -> None:
    for col, label in enumerate(labels, 1):
        cell = ws.cell(row=row, column=col, value=label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.border = HEADER_BORDER
        cell.alignment = ALIGN["center"]


def write_cell(
    ws: Worksheet,
    row: int,
    col: int,
    value,
    kind: str = "text",
    total: bool = False,
    tint: str | None = None,
) -> None:
    """Write one body or total cell. `tint` picks a ROW_FILLS entry; otherwise rows are striped."""
    cell = ws.cell(row=row, column=col, value=value)
    cell.font = TOTAL_FONT if total else BODY_FONT
    cell.border = TOTAL_BORDER if total else CELL_BORDER
    cell.alignment = ALIGN["right" if kind in NUMERIC_KINDS else "left"]
    if kind in NUMBER_FORMATS:
        cell.number_format = NUMBER_FORMATS[kind]

    if total:
        cell.fill = TOTAL_FILL
    elif tint in ROW_FILLS:
        cell.fill = ROW_FILLS[tint]
    elif row % 2 == 0:
        cell.fill = STRIPE_FILL


def kpi_card(ws: Worksheet, row: int, col: int, value, label: str, kind: str = "currency") -> None:
    """Big value with a caption underneath. kind="signed" is currency coloured by sign."""
    value_cell = ws.cell(row=row, column=col, value=value)
    value_cell.alignment = ALIGN["center"]
    if kind == "signed":
        value_cell.font = SIGNED_KPI_FONTS[(value or 0) >= 0]
        value_cell.number_format = NUMBER_FORMATS["currency"]
    else:
        value_cell.font = KPI_FONT
        if kind in NUMBER_FORMATS:
            value_cell.number_format = NUMBER_FORMATS[kind]

    caption = ws.cell(row=row + 1, column=col, value=label)
    caption.font = KPI_LABEL_FONT
    caption.alignment = ALIGN["center"]


def _display_width(value) -> int:
    if value is None:
        return 0
    if isinstance(value, dt.date):
        return 10
    if isinstance(value, float):
        return len(f"{value:,.2f}") + 3
    return len(str(value))


def fit_columns(ws: Worksheet, first_row: int = 1, min_width: int = 10, max_width: int = 50) -> None:
    """Size each column to its widest cell from `first_row` down; rows above are ignored."""
    for cells in ws.iter_cols(min_row=first_row):
        widest = max((_display_width(c.value) for c in cells), default=0)
        ws.column_dimensions[get_column_letter(cells[0].column)].width = min(max(widest + 2, min_width), max_width)
