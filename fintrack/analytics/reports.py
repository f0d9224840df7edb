"""
Report analytics — monthly income/expense series and category breakdowns
over a period, computed with pandas from a user's transactions.
"""
from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd

from fintrack.analytics.common import money, pct_of_total, sanitize_for_json
from fintrack.data.schemas import Category, PeriodFilter, Transaction, short_month_label
from fintrack.data.store import LedgerStore

_COLUMNS = ["id", "date", "year", "month", "type", "category", "description", "amount"]


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """One row per transaction; amount as float for aggregation."""
    rows = [{
        "id": t.id,
        "date": pd.Timestamp(t.date),
        "year": t.date.year,
        "month": t.date.month,
        "type": t.type,
        "category": t.category,
        "description": t.description,
        "amount": float(t.amount),
    } for t in transactions]
    return pd.DataFrame(rows, columns=_COLUMNS)


def _apply_period(df: pd.DataFrame, period: Optional[PeriodFilter]) -> pd.DataFrame:
    if period is None or df.empty:
        return df
    start, end = period.resolve()
    if start is not None:
        df = df[df["date"] >= pd.Timestamp(start)]
    if end is not None:
        df = df[df["date"] <= pd.Timestamp(end)]
    return df


def monthly_totals(df: pd.DataFrame) -> list[dict]:
    """Income, expense and net per calendar month, oldest first."""
    if df.empty:
        return []

    pivot = (
        df.pivot_table(index=["year", "month"], columns="type", values="amount", aggfunc="sum", fill_value=0.0)
        .reindex(columns=["income", "expense"], fill_value=0.0)
        .reset_index()
        .sort_values(["year", "month"])
    )

    rows = []
    for _, r in pivot.iterrows():
        y, m = int(r["year"]), int(r["month"])
        income, expense = money(r["income"]), money(r["expense"])
        rows.append({
            "month": f"{y}-{m:02d}",
            "label": short_month_label(y, m),
            "income": income,
            "expense": expense,
            "net": money(income - expense),
        })
    return rows


def category_totals(df: pd.DataFrame, tx_type: str, categories: Iterable[Category] = ()) -> list[dict]:
    """Totals per category for one transaction type, largest first."""
    subset = df[df["type"] == tx_type]
    if subset.empty:
        return []

    colors = {c.name: c.color for c in categories}
    grouped = subset.groupby("category")["amount"].sum().sort_values(ascending=False)
    total = float(grouped.sum())
    return [{
        "name": name,
        "value": money(value),
        "color": colors.get(name),
        "percentage": round(pct_of_total(float(value), total), 1),
    } for name, value in grouped.items() if value > 0]


def summary(store: LedgerStore, user_id: int, period: Optional[PeriodFilter] = None) -> dict:
    """Report payload: totals, monthly series and both category breakdowns."""
    df = _apply_period(transactions_frame(store.list_transactions(user_id)), period)
    categories = store.list_categories(user_id)

    income = float(df.loc[df["type"] == "income", "amount"].sum()) if not df.empty else 0.0
    expense = float(df.loc[df["type"] == "expense", "amount"].sum()) if not df.empty else 0.0

    if df.empty:
        date_range = "N/A"
    else:
        date_range = f"{df['date'].min():%d/%m/%Y} a {df['date'].max():%d/%m/%Y}"

    return sanitize_for_json({
        "period": period.label if period else PeriodFilter().label,
        "date_range": date_range,
        "transactions": int(len(df)),
        "totals": {
            "income": money(income),
            "expense": money(expense),
            "net": money(income - expense),
        },
        "monthly": monthly_totals(df),
        "expenses_by_category": category_totals(df, "expense", categories),
        "income_by_category": category_totals(df, "income", categories),
    })
