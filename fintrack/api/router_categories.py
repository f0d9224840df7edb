"""
Category endpoints. Transactions reference categories by name, so renaming
or deleting a category leaves existing transactions untouched.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from fintrack.data.store import LedgerStore
from fintrack.data.schemas import Category, CategoryInsert, CategoryUpdate
from fintrack.api.dependencies import get_current_user_id, get_store

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[Category])
def list_categories(
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    return store.list_categories(user_id)


@router.post("", response_model=Category, status_code=201)
def create_category(
    body: CategoryInsert,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    return store.create_category(user_id, body)


@router.put("/{category_id}", response_model=Category)
def update_category(
    category_id: int,
    body: CategoryUpdate,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    category = store.update_category(category_id, body, user_id)
    if category is None:
        raise HTTPException(404, "Categoria não encontrada")
    return category


@router.delete("/{category_id}", status_code=204, response_class=Response)
def delete_category(
    category_id: int,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    if not store.delete_category(category_id, user_id):
        raise HTTPException(404, "Categoria não encontrada")
    return Response(status_code=204)
