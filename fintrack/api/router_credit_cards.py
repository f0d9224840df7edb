"""
Credit card endpoints: list, create, update, delete.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from fintrack.data.store import LedgerStore
from fintrack.data.schemas import CreditCard, CreditCardInsert, CreditCardUpdate
from fintrack.api.dependencies import get_current_user_id, get_store

router = APIRouter(prefix="/api/credit-cards", tags=["credit-cards"])


@router.get("", response_model=list[CreditCard])
def list_credit_cards(
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    return store.list_credit_cards(user_id)


@router.post("", response_model=CreditCard, status_code=201)
def create_credit_card(
    body: CreditCardInsert,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    return store.create_credit_card(user_id, body)


@router.put("/{card_id}", response_model=CreditCard)
def update_credit_card(
    card_id: int,
    body: CreditCardUpdate,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    card = store.update_credit_card(card_id, body, user_id)
    if card is None:
        raise HTTPException(404, "Cartão não encontrado")
    return card


@router.delete("/{card_id}", status_code=204, response_class=Response)
def delete_credit_card(
    card_id: int,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    if not store.delete_credit_card(card_id, user_id):
        raise HTTPException(404, "Cartão não encontrado")
    return Response(status_code=204)
