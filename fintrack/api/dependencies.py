"""
FastAPI dependencies — LedgerStore singleton, current principal, period parsing.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from fastapi import HTTPException, Query

from fintrack.config import DEMO_USER_ID
from fintrack.data.store import LedgerStore
from fintrack.data.schemas import PeriodFilter, PeriodType

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: LedgerStore | None = None


def set_store(store: LedgerStore | None) -> None:
    global _store
    _store = store


def get_store() -> LedgerStore:
    if _store is None:
        raise HTTPException(503, "Servidor ainda não inicializado")
    return _store


# ---------------------------------------------------------------------------
# Current principal
# ---------------------------------------------------------------------------

def get_current_user_id() -> int:
    """The user every request acts as. Swap for real authentication later."""
    return DEMO_USER_ID


# ---------------------------------------------------------------------------
# Period parsing from query params
# ---------------------------------------------------------------------------

def _parse_iso(value: Optional[str], name: str) -> Optional[dt.date]:
    if not value:
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        raise HTTPException(400, f"Data inválida em {name}: {value}")


def parse_period(
    period_type: Optional[str] = Query(None, description="month|quarter|year|custom|last_months|all"),
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    quarter: Optional[int] = Query(None, ge=1, le=4),
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    months: Optional[int] = Query(None, ge=1, le=120, description="Window for last_months"),
) -> PeriodFilter | None:
    """Parse period query parameters into a PeriodFilter."""
    if period_type is None:
        return None

    try:
        pt = PeriodType(period_type)
    except ValueError:
        raise HTTPException(400, f"period_type inválido: {period_type}")

    return PeriodFilter(
        period_type=pt,
        year=year,
        month=month,
        quarter=quarter,
        start_date=_parse_iso(start_date, "start_date"),
        end_date=_parse_iso(end_date, "end_date"),
        months=months,
    )
