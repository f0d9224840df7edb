"""
Bill endpoints: list, upcoming, create, update, delete.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from fintrack.data.store import LedgerStore
from fintrack.data.schemas import Bill, BillInsert, BillUpdate
from fintrack.api.dependencies import get_current_user_id, get_store

router = APIRouter(prefix="/api/bills", tags=["bills"])


@router.get("", response_model=list[Bill])
def list_bills(
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    return store.list_bills(user_id)


@router.get("/upcoming", response_model=list[Bill])
def upcoming_bills(
    limit: int = Query(4, ge=1, le=100),
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    """Unpaid bills due from today on, soonest first."""
    return store.upcoming_bills(user_id, limit)


@router.post("", response_model=Bill, status_code=201)
def create_bill(
    body: BillInsert,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    return store.create_bill(user_id, body)


@router.put("/{bill_id}", response_model=Bill)
def update_bill(
    bill_id: int,
    body: BillUpdate,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    bill = store.update_bill(bill_id, body, user_id)
    if bill is None:
        raise HTTPException(404, "Conta não encontrada")
    return bill


@router.delete("/{bill_id}", status_code=204, response_class=Response)
def delete_bill(
    bill_id: int,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    if not store.delete_bill(bill_id, user_id):
        raise HTTPException(404, "Conta não encontrada")
    return Response(status_code=204)
