"""
Column mapping and field normalization for imported spreadsheet rows.
"""
from __future__ import annotations

import datetime as dt
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from fintrack.config import (
    COLUMN_SYNONYMS,
    DEFAULT_CATEGORY,
    DEFAULT_PAYMENT_METHOD,
    EXPENSE_KEYWORDS,
    INCOME_KEYWORDS,
)
from fintrack.data.schemas import TransactionInsert


# ---------------------------------------------------------------------------
# Header normalisation
# ---------------------------------------------------------------------------

def normalize_header(header: str) -> str:
    """Map a raw column name to its canonical field; unknown names pass through trimmed."""
    name = str(header).strip().lstrip("\ufeff")
    return COLUMN_SYNONYMS.get(name.lower(), name)


def normalize_headers(headers: list[str]) -> list[str]:
    return [normalize_header(h) for h in headers]


def detect_delimiter(header_line: str) -> str:
    """Semicolon for Brazilian bank exports, comma otherwise."""
    if ";" in header_line and "," not in header_line:
        return ";"
    return ","


# ---------------------------------------------------------------------------
# Amount
# ---------------------------------------------------------------------------

_AMOUNT_JUNK_RE = re.compile(r"[^\d,.\-]")
_THOUSANDS_DOT_RE = re.compile(r"^[1-9]\d{0,2}\.\d{3}$")


def parse_amount(raw) -> Decimal:
    """Parse a locale-formatted amount ("R$ -1.234,56", "1,234.56", "-128.47").

    The rightmost of "," and "." is the decimal separator when both appear.
    A lone "," is decimal; repeated separators of one kind are thousands marks.
    A lone "." followed by exactly three digits ("1.500", "R$ 2.500") is a
    thousands mark too; any other lone "." is decimal ("-128.47").
    Raises ValueError when no number can be read.
    """
    if isinstance(raw, Decimal):
        return raw
    if isinstance(raw, (int, float)):
        return Decimal(str(raw))

    text = _AMOUNT_JUNK_RE.sub("", str(raw))
    negative = "-" in text
    digits = text.replace("-", "")
    if not any(ch.isdigit() for ch in digits):
        raise ValueError(f"valor inválido: {raw!r}")

    if "," in digits and "." in digits:
        if digits.rfind(",") > digits.rfind("."):
            digits = digits.replace(".", "").replace(",", ".")
        else:
            digits = digits.replace(",", "")
    elif "," in digits:
        digits = digits.replace(",", "") if digits.count(",") > 1 else digits.replace(",", ".")
    elif digits.count(".") > 1 or _THOUSANDS_DOT_RE.match(digits):
        digits = digits.replace(".", "")

    try:
        value = Decimal(digits)
    except InvalidOperation:
        raise ValueError(f"valor inválido: {raw!r}")
    return -value if negative else value


# ---------------------------------------------------------------------------
# Type
# ---------------------------------------------------------------------------

def parse_type(raw: Optional[str]) -> str:
    """Free-text income/expense marker; anything unrecognised is an expense."""
    if raw is None:
        return "expense"
    value = str(raw).strip().lower()
    if value in INCOME_KEYWORDS:
        return "income"
    if value in EXPENSE_KEYWORDS:
        return "expense"
    return "expense"


# ---------------------------------------------------------------------------
# Date
# ---------------------------------------------------------------------------

_DATE_SPLIT_RE = re.compile(r"[/.\-]")


def parse_date(raw, today: Optional[dt.date] = None, lenient: bool = False) -> dt.date:
    """Parse YYYY-MM-DD, DD/MM/YYYY (first part > 12) or, failing both, MM/DD/YYYY.

    Unreadable dates raise ValueError, or return `today` when lenient.
    """
    if isinstance(raw, dt.datetime):
        return raw.date()
    if isinstance(raw, dt.date):
        return raw

    try:
        tokens = str(raw or "").split()
        text = tokens[0] if tokens else ""
        parts = _DATE_SPLIT_RE.split(text)
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            raise ValueError(f"data inválida: {raw!r}")

        a, b, c = (int(p) for p in parts)
        if len(parts[0]) == 4:
            year, month, day = a, b, c
        elif a > 12:
            day, month, year = a, b, c
        else:
            month, day, year = a, b, c
        if year < 100:
            year += 2000
        return dt.date(year, month, day)
    except ValueError:
        if lenient:
            return today or dt.date.today()
        raise


# ---------------------------------------------------------------------------
# Whole record
# ---------------------------------------------------------------------------

def _text(record: dict, key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    return str(value).strip()


def normalize_record(
    record: dict,
    today: Optional[dt.date] = None,
    lenient_dates: bool = False,
) -> TransactionInsert:
    """Turn one header-keyed row into a canonical transaction insert.

    Raises ValueError describing the first field that cannot be read.
    """
    raw_amount = _text(record, "amount")
    if not raw_amount:
        raise ValueError("valor ausente")
    amount = parse_amount(raw_amount)

    tx_type = parse_type(record.get("type"))
    if amount < 0:
        tx_type = "expense"
        amount = -amount

    date = parse_date(_text(record, "date"), today=today, lenient=lenient_dates)

    card = _text(record, "creditCardId")
    return TransactionInsert(
        description=_text(record, "description"),
        amount=amount,
        date=date,
        type=tx_type,
        category=_text(record, "category") or DEFAULT_CATEGORY,
        payment_method=_text(record, "paymentMethod") or DEFAULT_PAYMENT_METHOD,
        notes=_text(record, "notes"),
        credit_card_id=int(card) if card.isdigit() else None,
    )
