"""
Meta endpoints: health, current user profile, account balance.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from fintrack.data.store import LedgerStore
from fintrack.data.schemas import AccountBalance, PublicUser
from fintrack.api.dependencies import get_current_user_id, get_store
from fintrack.api.response_models import BalanceCheckResponse, HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: LedgerStore = Depends(get_store)):
    return HealthResponse(status="ok", **store.counts())


@router.get("/user", response_model=PublicUser)
def current_user(
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    """Profile of the current user; the password never leaves the store."""
    user = store.get_user(user_id)
    if user is None:
        raise HTTPException(404, "Usuário não encontrado")
    return PublicUser.model_validate(user.model_dump(exclude={"password"}))


@router.get("/balance", response_model=AccountBalance)
def get_balance(
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    balance = store.get_account_balance(user_id)
    if balance is None:
        raise HTTPException(404, "Balanço não encontrado")
    return balance


@router.get("/balance/verify", response_model=BalanceCheckResponse)
def verify_balance(
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    """Compare the running snapshot with one rebuilt from every transaction."""
    with store.user_lock(user_id):
        stored = store.get_account_balance(user_id)
        recomputed = store.recomputed_balance(user_id)
    if stored is None or recomputed is None:
        raise HTTPException(404, "Balanço não encontrado")

    in_sync = (
        stored.total_balance == recomputed.total_balance
        and stored.monthly_income == recomputed.monthly_income
        and stored.monthly_expenses == recomputed.monthly_expenses
    )
    return BalanceCheckResponse(in_sync=in_sync, stored=stored, recomputed=recomputed)
