"""
Report endpoints — period summary with monthly and per-category series.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from fintrack.data.store import LedgerStore
from fintrack.data.schemas import PeriodFilter
from fintrack.api.dependencies import get_current_user_id, get_store, parse_period
from fintrack.reports import transactions_report

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/summary")
def report_summary(
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
    period: PeriodFilter | None = Depends(parse_period),
):
    """Income vs expenses per month and by category for the chosen period.

    Query: period_type (month|quarter|year|custom|last_months|all) with
    year/month/quarter, start_date/end_date or months as the type needs.
    """
    return transactions_report.generate_json(store, user_id, period)
