"""
Transaction endpoints: list, create, update, delete, Excel export.
Every write goes through LedgerStore so the account balance follows along.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from fintrack.data.store import LedgerStore
from fintrack.data.schemas import PeriodFilter, Transaction, TransactionInsert, TransactionUpdate
from fintrack.api.dependencies import get_current_user_id, get_store, parse_period
from fintrack.reports import transactions_report

router = APIRouter(prefix="/api/transactions", tags=["transactions"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("", response_model=list[Transaction])
def list_transactions(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    """All of the user's transactions, or one calendar month when year+month are given."""
    if year is not None and month is not None:
        return store.transactions_by_month(user_id, year, month)
    return store.list_transactions(user_id)


@router.post("", response_model=Transaction, status_code=201)
def create_transaction(
    body: TransactionInsert,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    return store.create_transaction(user_id, body)


@router.get("/export")
def export_transactions(
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
    period: PeriodFilter | None = Depends(parse_period),
):
    """Download the user's transactions as a styled .xlsx workbook."""
    content = transactions_report.build_workbook(store, user_id, period).to_bytes()
    filename = f"transacoes_{dt.date.today():%Y-%m-%d}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{tx_id}", response_model=Transaction)
def get_transaction(
    tx_id: int,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    tx = store.get_transaction(tx_id, user_id)
    if tx is None:
        raise HTTPException(404, "Transação não encontrada")
    return tx


@router.put("/{tx_id}", response_model=Transaction)
def update_transaction(
    tx_id: int,
    body: TransactionUpdate,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    tx = store.update_transaction(tx_id, body, user_id)
    if tx is None:
        raise HTTPException(404, "Transação não encontrada")
    return tx


@router.delete("/{tx_id}", status_code=204, response_class=Response)
def delete_transaction(
    tx_id: int,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    if not store.delete_transaction(tx_id, user_id):
        raise HTTPException(404, "Transação não encontrada")
    return Response(status_code=204)
