"""
Workbook look for every ledger export: palette, fonts, fills, borders, number formats.
"""
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

# ---------------------------------------------------------------------------
# Palette (hex, no leading #), same purple as the web app
# ---------------------------------------------------------------------------
INK = "1F2937"
MUTED = "6B7280"
ACCENT = "7C3AED"
ACCENT_DARK = "4C1D95"
ACCENT_TINT = "EDE9FE"
STRIPE = "F9FAFB"
GRID = "E5E7EB"
INCOME_INK = "047857"
INCOME_TINT = "ECFDF5"
EXPENSE_INK = "B91C1C"
EXPENSE_TINT = "FEF2F2"


def _font(size: int = 10, bold: bool = False, color: str = INK, italic: bool = False) -> Font:
    return Font(name="Calibri", size=size, bold=bold, italic=italic, color=color)


def _fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _border(color: str, top: str = "thin", bottom: str = "thin") -> Border:
    side = Side(style="thin", color=color)
    return Border(left=side, right=side, top=Side(style=top, color=color), bottom=Side(style=bottom, color=color))


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = _font(20, bold=True, color=ACCENT_DARK)
SUBTITLE_FONT = _font(11, italic=True, color=MUTED)
SECTION_FONT = _font(13, bold=True, color=ACCENT)
HEADER_FONT = _font(11, bold=True, color="FFFFFF")
BODY_FONT = _font()
TOTAL_FONT = _font(bold=True)
KPI_FONT = _font(22, bold=True, color=ACCENT_DARK)
KPI_LABEL_FONT = _font(9, color=MUTED)
# Signed KPIs: keyed by value >= 0
SIGNED_KPI_FONTS = {
    True: _font(22, bold=True, color=INCOME_INK),
    False: _font(22, bold=True, color=EXPENSE_INK),
}

# ---------------------------------------------------------------------------
# Fills and borders
# ---------------------------------------------------------------------------
HEADER_FILL = _fill(ACCENT)
STRIPE_FILL = _fill(STRIPE)
TOTAL_FILL = _fill(ACCENT_TINT)
# Row tint per transaction type
ROW_FILLS = {
    "income": _fill(INCOME_TINT),
    "expense": _fill(EXPENSE_TINT),
}

CELL_BORDER = _border(GRID)
HEADER_BORDER = _border(ACCENT_DARK, bottom="medium")
TOTAL_BORDER = _border(MUTED, top="medium", bottom="medium")

ALIGN = {
    "left": Alignment(horizontal="left", vertical="center"),
    "center": Alignment(horizontal="center", vertical="center"),
    "right": Alignment(horizontal="right", vertical="center"),
}

# ---------------------------------------------------------------------------
# Number formats per column kind ("text" has none)
# ---------------------------------------------------------------------------
NUMBER_FORMATS = {
    "currency": '"R$" #,##0.00',
    "percent": '0.0"%"',
    "number": "#,##0",
    "date": "DD/MM/YYYY",
}
NUMERIC_KINDS = {"currency", "percent", "number"}
