"""
ExcelWriter — builds the styled .xlsx workbooks behind ledger exports.

Tables are described by Column specs; money columns get R$ formatting,
rows can be tinted by transaction type, and optional total rows sum the
numeric columns.
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, NamedTuple, Optional

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from fintrack.excel.formatters import fit_columns, kpi_card, style_header, write_cell
from fintrack.excel.styles import SECTION_FONT, SUBTITLE_FONT, TITLE_FONT


class Column(NamedTuple):
    key: str
    kind: str  # text | date | currency | percent | number
    label: str


# Additive kinds get a sum in total rows; percentages do not
_SUMMED_KINDS = ("currency", "number")


class ExcelWriter:
    """One workbook, filled sheet by sheet."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._blank = self.wb.active

    def add_sheet(self, title: str) -> Worksheet:
        # The default sheet is renamed on first use instead of left empty
        if self._blank is not None:
            ws, self._blank = self._blank, None
            ws.title = title
            return ws
        return self.wb.create_sheet(title=title)

    def write_title(self, ws: Worksheet, title: str, subtitle: str, width: int = 6) -> int:
        """Merged title and subtitle on rows 1-2. Returns the next free row."""
        for row, text, font in ((1, title, TITLE_FONT), (2, subtitle, SUBTITLE_FONT)):
            ws.cell(row=row, column=1, value=text).font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=width)
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1, value=title).font = SECTION_FONT
        return row + 2

    def write_kpis(self, ws: Worksheet, row: int, cards: list[tuple], spacing: int = 2) -> int:
        """cards: [(value, label, kind), ...] laid out left to right. Returns the next free row."""
        for i, (value, label, kind) in enumerate(cards):
            kpi_card(ws, row, 1 + i * spacing, value, label, kind)
        return row + 3

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[Column],
        rows: list[dict],
        tint_fn: Optional[Callable[[dict], Optional[str]]] = None,
        total_label: Optional[str] = None,
    ) -> int:
        """Header, body and (when total_label is given) a total row. Returns the next free row."""
        style_header(ws, start_row, [c.label for c in columns])

        row = start_row + 1
        for record in rows:
            tint = tint_fn(record) if tint_fn else None
            for col, spec in enumerate(columns, 1):
                write_cell(ws, row, col, record.get(spec.key), spec.kind, tint=tint)
            row += 1

        if total_label and rows:
            for col, spec in enumerate(columns, 1):
                if col == 1:
                    write_cell(ws, row, col, total_label, total=True)
                elif spec.kind in _SUMMED_KINDS:
                    value = round(sum(r.get(spec.key) or 0 for r in rows), 2)
                    write_cell(ws, row, col, value, spec.kind, total=True)
                else:
                    write_cell(ws, row, col, None, total=True)
            row += 1

        fit_columns(ws, first_row=start_row)
        ws.freeze_panes = ws.cell(row=start_row + 1, column=1)
        return row

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path

    def to_bytes(self) -> bytes:
        """Serialized workbook for HTTP downloads."""
        buf = io.BytesIO()
        self.wb.save(buf)
        return buf.getvalue()
