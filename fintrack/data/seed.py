"""
Demo data: one user with categories, cards, a week of transactions, bills and goals.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from fintrack.config import (
    DEMO_BILLS,
    DEMO_CATEGORIES,
    DEMO_CREDIT_CARDS,
    DEMO_GOALS,
    DEMO_OPENING_BALANCE,
    DEMO_TRANSACTIONS,
    DEMO_USER,
)
from fintrack.data.schemas import (
    AccountBalanceUpdate,
    BillInsert,
    CategoryInsert,
    CreditCardInsert,
    SavingsGoalInsert,
    TransactionInsert,
    User,
    UserInsert,
)
from fintrack.data.store import LedgerStore


def seed_demo_data(store: LedgerStore, today: Optional[dt.date] = None) -> User:
    """Create the demo user and its records. Returns the user."""
    existing = store.get_user_by_username(DEMO_USER["username"])
    if existing is not None:
        print("  Demo user already exists — skipping seed")
        return existing

    today = today or dt.date.today()
    user = store.create_user(UserInsert(**DEMO_USER))

    # Opening figures first so the seeded transactions land on top of them
    store.update_account_balance(user.id, AccountBalanceUpdate.model_validate(DEMO_OPENING_BALANCE))

    for name, color in DEMO_CATEGORIES:
        store.create_category(user.id, CategoryInsert(name=name, color=color))

    cards = [store.create_credit_card(user.id, CreditCardInsert.model_validate(c)) for c in DEMO_CREDIT_CARDS]

    for days_ago, description, amount, tx_type, category, method, card_idx in DEMO_TRANSACTIONS:
        store.create_transaction(user.id, TransactionInsert(
            description=description,
            amount=amount,
            date=today - dt.timedelta(days=days_ago),
            type=tx_type,
            category=category,
            payment_method=method,
            notes="",
            credit_card_id=cards[card_idx].id if card_idx is not None else None,
        ))

    for days_ahead, description, amount, category in DEMO_BILLS:
        store.create_bill(user.id, BillInsert(
            description=description,
            amount=amount,
            due_date=today + dt.timedelta(days=days_ahead),
            recurring=True,
            category=category,
            notes="",
        ))

    for goal in DEMO_GOALS:
        store.create_savings_goal(user.id, SavingsGoalInsert.model_validate(goal))

    counts = store.counts()
    print(f"  Seeded demo user '{user.username}' (id {user.id}): "
          f"{counts['transactions']} transactions, {counts['bills']} bills, "
          f"{counts['credit_cards']} cards, {counts['categories']} categories")
    return user
