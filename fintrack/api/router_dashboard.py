"""
Dashboard endpoint — balance snapshot, recent activity, bills, cards, and
the current month's spending by category.
"""
from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException

from fintrack.config import DASHBOARD_BILLS_LIMIT, DASHBOARD_RECENT_LIMIT
from fintrack.data.queries import month_label
from fintrack.data.store import LedgerStore
from fintrack.api.dependencies import get_current_user_id, get_store
from fintrack.api.response_models import DashboardResponse

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    balance = store.get_account_balance(user_id)
    if balance is None:
        raise HTTPException(404, "Balanço não encontrado")

    today = dt.date.today()
    return DashboardResponse(
        balance=balance,
        recent_transactions=store.recent_transactions(user_id, DASHBOARD_RECENT_LIMIT),
        upcoming_bills=store.upcoming_bills(user_id, DASHBOARD_BILLS_LIMIT, today),
        credit_cards=store.list_credit_cards(user_id),
        expenses_by_category=store.expenses_by_category(user_id, today.year, today.month),
        current_month=month_label(today.year, today.month),
    )
