"""
Read-side views over a user's records: recent transactions, upcoming bills,
month filters and the category breakdown used by the dashboard.

All views are linear scans; sorts are stable so ties keep insertion order.
"""
from __future__ import annotations

import datetime as dt
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from fintrack.config import MONTH_NAMES_PT
from fintrack.data.schemas import ZERO, Bill, Category, Transaction


def recent_transactions(transactions: Iterable[Transaction], limit: int) -> list[Transaction]:
    """Newest first by date; equal dates keep insertion order."""
    ordered = sorted(transactions, key=lambda t: t.date, reverse=True)
    return ordered[:max(limit, 0)]


def upcoming_bills(
    bills: Iterable[Bill],
    limit: int,
    today: Optional[dt.date] = None,
) -> list[Bill]:
    """Unpaid bills due today or later, soonest first."""
    today = today or dt.date.today()
    pending = [b for b in bills if b.due_date >= today and not b.paid]
    pending.sort(key=lambda b: b.due_date)
    return pending[:max(limit, 0)]


def transactions_by_month(transactions: Iterable[Transaction], year: int, month: int) -> list[Transaction]:
    """Transactions dated in the given calendar month (month is 1-12)."""
    return [t for t in transactions if t.date.year == year and t.date.month == month]


def _percent(part: Decimal, total: Decimal) -> int:
    if total == 0:
        return 0
    return int((part / total * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def expenses_by_category(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    year: int,
    month: int,
) -> list[dict]:
    """Month's expenses summed per category, in category order.

    Categories are joined by name; expenses whose category has no matching
    Category are left out, as are categories with nothing spent.
    """
    totals: dict[str, Decimal] = {}
    for t in transactions_by_month(transactions, year, month):
        if t.type == "expense":
            totals[t.category] = totals.get(t.category, ZERO) + t.amount

    rows = []
    seen = set()
    for cat in categories:
        if cat.name in seen:
            continue
        seen.add(cat.name)
        value = totals.get(cat.name, ZERO)
        if value > 0:
            rows.append({"name": cat.name, "value": value, "color": cat.color})

    grand_total = sum((r["value"] for r in rows), ZERO)
    for r in rows:
        r["percentage"] = _percent(r["value"], grand_total)
    return rows


def month_label(year: int, month: int) -> str:
    """pt-BR month label as shown on the dashboard, e.g. "outubro de 2026"."""
    return f"{MONTH_NAMES_PT[month]} de {year}"
