"""
Balance aggregation — keeps a user's AccountBalance snapshot in step with
transaction creation, edits and deletions.

All arithmetic is Decimal. Monthly figures accumulate and are never reset at
month boundaries.
"""
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Iterable

from fintrack.data.schemas import ZERO, AccountBalance, Transaction, quantize_money


def _deltas(tx: Transaction) -> tuple[Decimal, Decimal, Decimal]:
    """(total, income, expenses) contribution of one transaction."""
    amount = Decimal(tx.amount)
    if tx.type == "income":
        return amount, amount, ZERO
    return -amount, ZERO, amount


def _shift(balance: AccountBalance, tx: Transaction, sign: int) -> AccountBalance:
    total, income, expenses = _deltas(tx)
    return balance.model_copy(update={
        "total_balance": quantize_money(balance.total_balance + sign * total),
        "monthly_income": quantize_money(balance.monthly_income + sign * income),
        "monthly_expenses": quantize_money(balance.monthly_expenses + sign * expenses),
        "updated_at": dt.datetime.now(),
    })


def apply_transaction(balance: AccountBalance, tx: Transaction) -> AccountBalance:
    """Add a newly created transaction to the snapshot."""
    return _shift(balance, tx, 1)


def revert_transaction(balance: AccountBalance, tx: Transaction) -> AccountBalance:
    """Remove a transaction's contribution (used on delete and before an edit)."""
    return _shift(balance, tx, -1)


def recompute(
    balance: AccountBalance,
    transactions: Iterable[Transaction],
    opening: AccountBalance | None = None,
) -> AccountBalance:
    """Fold transactions into a fresh snapshot starting from `opening` figures.

    Without an opening snapshot every running total starts at zero;
    credit_card_bills is carried over from `balance` because transactions
    never touch it.
    """
    base = balance.model_copy(update={
        "total_balance": opening.total_balance if opening else ZERO,
        "monthly_income": opening.monthly_income if opening else ZERO,
        "monthly_expenses": opening.monthly_expenses if opening else ZERO,
    })
    for tx in transactions:
        base = apply_transaction(base, tx)
    return base
