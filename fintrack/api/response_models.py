"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from fintrack.data.schemas import AccountBalance, Bill, CreditCard, Transaction


class _Response(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    status: str
    users: int
    transactions: int
    categories: int
    bills: int
    credit_cards: int
    savings_goals: int


class CategoryExpense(_Response):
    name: str
    value: Decimal
    color: str
    percentage: int


class DashboardResponse(_Response):
    balance: AccountBalance
    recent_transactions: list[Transaction]
    upcoming_bills: list[Bill]
    credit_cards: list[CreditCard]
    expenses_by_category: list[CategoryExpense]
    current_month: str


class BalanceCheckResponse(_Response):
    in_sync: bool
    stored: AccountBalance
    recomputed: AccountBalance


class ImportRowError(BaseModel):
    line: int
    message: str


class ImportResponse(BaseModel):
    message: str
    count: int
    errors: list[ImportRowError] = []

