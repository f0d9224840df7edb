"""
Savings goal endpoints.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from fintrack.data.store import LedgerStore
from fintrack.data.schemas import SavingsGoal, SavingsGoalInsert, SavingsGoalUpdate
from fintrack.api.dependencies import get_current_user_id, get_store

router = APIRouter(prefix="/api/goals", tags=["goals"])


@router.get("", response_model=list[SavingsGoal])
def list_goals(
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    return store.list_savings_goals(user_id)


@router.post("", response_model=SavingsGoal, status_code=201)
def create_goal(
    body: SavingsGoalInsert,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    return store.create_savings_goal(user_id, body)


@router.put("/{goal_id}", response_model=SavingsGoal)
def update_goal(
    goal_id: int,
    body: SavingsGoalUpdate,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    goal = store.update_savings_goal(goal_id, body, user_id)
    if goal is None:
        raise HTTPException(404, "Meta não encontrada")
    return goal


@router.delete("/{goal_id}", status_code=204, response_class=Response)
def delete_goal(
    goal_id: int,
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    if not store.delete_savings_goal(goal_id, user_id):
        raise HTTPException(404, "Meta não encontrada")
    return Response(status_code=204)
