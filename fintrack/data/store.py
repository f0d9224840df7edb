"""
LedgerStore — In-memory record store for every ledger entity.

Seeded once at startup, queried and mutated on every request.
Each entity type keeps its own id counter. Transaction writes update the
owner's AccountBalance under a per-user lock, so the snapshot always equals
the opening figures plus the signed sum of the user's transactions.
"""
from __future__ import annotations

import datetime as dt
import threading
from typing import Any, Generic, Iterable, Optional, TypeVar

from pydantic import BaseModel

from fintrack.data import balance as aggregator
from fintrack.data import queries
from fintrack.data.schemas import (
    AccountBalance,
    AccountBalanceUpdate,
    Bill,
    BillInsert,
    Category,
    CategoryInsert,
    CreditCard,
    CreditCardInsert,
    SavingsGoal,
    SavingsGoalInsert,
    Transaction,
    TransactionInsert,
    User,
    UserInsert,
)
from fintrack.errors import UnknownUserError

E = TypeVar("E", bound=BaseModel)


def _as_changes(changes: BaseModel | dict) -> dict[str, Any]:
    if isinstance(changes, BaseModel):
        return changes.model_dump(exclude_unset=True)
    return dict(changes)


class _Collection(Generic[E]):
    """One keyed table with its own monotonic id counter."""

    def __init__(self, model: type[E]) -> None:
        self.model = model
        self._rows: dict[int, E] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def insert(self, **fields: Any) -> E:
        with self._lock:
            record = self.model(id=self._next_id, **fields)
            self._rows[record.id] = record
            self._next_id += 1
        return record

    def get(self, record_id: int, user_id: Optional[int] = None) -> Optional[E]:
        record = self._rows.get(record_id)
        if record is None:
            return None
        if user_id is not None and getattr(record, "user_id", user_id) != user_id:
            return None
        return record

    def values(self) -> list[E]:
        return list(self._rows.values())

    def by_user(self, user_id: int) -> list[E]:
        return [r for r in self._rows.values() if r.user_id == user_id]

    def merge(self, record: E, changes: dict[str, Any]) -> E:
        """Shallow-merge changes; nulls never clear a required field."""
        fields = self.model.model_fields
        clean = {
            k: v for k, v in changes.items()
            if k in fields and k not in ("id", "user_id")
            and not (v is None and fields[k].is_required())
        }
        return self.model.model_validate({**record.model_dump(), **clean})

    def put(self, record: E) -> E:
        self._rows[record.id] = record
        return record

    def remove(self, record_id: int) -> bool:
        return self._rows.pop(record_id, None) is not None

    def __len__(self) -> int:
        return len(self._rows)


class LedgerStore:
    """In-memory ledger with per-user scoping and derived balances."""

    def __init__(self) -> None:
        self.users: _Collection[User] = _Collection(User)
        self.transactions: _Collection[Transaction] = _Collection(Transaction)
        self.categories: _Collection[Category] = _Collection(Category)
        self.bills: _Collection[Bill] = _Collection(Bill)
        self.credit_cards: _Collection[CreditCard] = _Collection(CreditCard)
        self.savings_goals: _Collection[SavingsGoal] = _Collection(SavingsGoal)
        self.account_balances: _Collection[AccountBalance] = _Collection(AccountBalance)
        # Opening figures per user: what the balance would be with no transactions
        self._openings: dict[int, AccountBalance] = {}
        self._user_locks: dict[int, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------

    def user_lock(self, user_id: int) -> threading.RLock:
        """Serializes every balance-affecting write for one user."""
        with self._locks_guard:
            lock = self._user_locks.get(user_id)
            if lock is None:
                lock = self._user_locks[user_id] = threading.RLock()
            return lock

    def _require_user(self, user_id: int) -> None:
        if self.users.get(user_id) is None:
            raise UnknownUserError(f"Usuário {user_id} não encontrado")

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_user(self, data: UserInsert) -> User:
        return self.users.insert(**data.model_dump())

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def list_transactions(self, user_id: int) -> list[Transaction]:
        return self.transactions.by_user(user_id)

    def get_transaction(self, tx_id: int, user_id: Optional[int] = None) -> Optional[Transaction]:
        return self.transactions.get(tx_id, user_id)

    def create_transaction(self, user_id: int, data: TransactionInsert) -> Transaction:
        """Store a transaction and fold it into the owner's balance."""
        self._require_user(user_id)
        with self.user_lock(user_id):
            tx = self.transactions.insert(user_id=user_id, **data.model_dump())
            current = self._balance_or_zero(user_id)
            self.account_balances.put(aggregator.apply_transaction(current, tx))
        return tx

    def update_transaction(
        self,
        tx_id: int,
        changes: BaseModel | dict,
        user_id: Optional[int] = None,
    ) -> Optional[Transaction]:
        old = self.transactions.get(tx_id, user_id)
        if old is None:
            return None
        with self.user_lock(old.user_id):
            old = self.transactions.get(tx_id)
            if old is None:
                return None
            new = self.transactions.merge(old, _as_changes(changes))
            self.transactions.put(new)
            current = self._balance_or_zero(old.user_id)
            current = aggregator.revert_transaction(current, old)
            self.account_balances.put(aggregator.apply_transaction(current, new))
        return new

    def delete_transaction(self, tx_id: int, user_id: Optional[int] = None) -> bool:
        tx = self.transactions.get(tx_id, user_id)
        if tx is None:
            return False
        with self.user_lock(tx.user_id):
            if not self.transactions.remove(tx_id):
                return False
            current = self._balance_or_zero(tx.user_id)
            self.account_balances.put(aggregator.revert_transaction(current, tx))
        return True

    def import_transactions(self, user_id: int, rows: Iterable[TransactionInsert]) -> list[Transaction]:
        """Create each row in order through the normal creation path."""
        with self.user_lock(user_id):
            return [self.create_transaction(user_id, row) for row in rows]

    def transactions_by_month(self, user_id: int, year: int, month: int) -> list[Transaction]:
        return queries.transactions_by_month(self.list_transactions(user_id), year, month)

    def recent_transactions(self, user_id: int, limit: int) -> list[Transaction]:
        return queries.recent_transactions(self.list_transactions(user_id), limit)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self, user_id: int) -> list[Category]:
        return self.categories.by_user(user_id)

    def create_category(self, user_id: int, data: CategoryInsert) -> Category:
        self._require_user(user_id)
        return self.categories.insert(user_id=user_id, **data.model_dump())

    def update_category(self, cat_id: int, changes: BaseModel | dict, user_id: Optional[int] = None) -> Optional[Category]:
        return self._update(self.categories, cat_id, changes, user_id)

    def delete_category(self, cat_id: int, user_id: Optional[int] = None) -> bool:
        return self._delete(self.categories, cat_id, user_id)

    def expenses_by_category(self, user_id: int, year: int, month: int) -> list[dict]:
        return queries.expenses_by_category(
            self.list_transactions(user_id), self.list_categories(user_id), year, month,
        )

    # ------------------------------------------------------------------
    # Bills
    # ------------------------------------------------------------------

    def list_bills(self, user_id: int) -> list[Bill]:
        return self.bills.by_user(user_id)

    def create_bill(self, user_id: int, data: BillInsert) -> Bill:
        self._require_user(user_id)
        return self.bills.insert(user_id=user_id, **data.model_dump())

    def update_bill(self, bill_id: int, changes: BaseModel | dict, user_id: Optional[int] = None) -> Optional[Bill]:
        return self._update(self.bills, bill_id, changes, user_id)

    def delete_bill(self, bill_id: int, user_id: Optional[int] = None) -> bool:
        return self._delete(self.bills, bill_id, user_id)

    def upcoming_bills(self, user_id: int, limit: int, today: Optional[dt.date] = None) -> list[Bill]:
        return queries.upcoming_bills(self.list_bills(user_id), limit, today)

    # ------------------------------------------------------------------
    # Credit cards
    # ------------------------------------------------------------------

    def list_credit_cards(self, user_id: int) -> list[CreditCard]:
        return self.credit_cards.by_user(user_id)

    def create_credit_card(self, user_id: int, data: CreditCardInsert) -> CreditCard:
        self._require_user(user_id)
        return self.credit_cards.insert(user_id=user_id, **data.model_dump())

    def update_credit_card(self, card_id: int, changes: BaseModel | dict, user_id: Optional[int] = None) -> Optional[CreditCard]:
        return self._update(self.credit_cards, card_id, changes, user_id)

    def delete_credit_card(self, card_id: int, user_id: Optional[int] = None) -> bool:
        return self._delete(self.credit_cards, card_id, user_id)

    # ------------------------------------------------------------------
    # Savings goals
    # ------------------------------------------------------------------

    def list_savings_goals(self, user_id: int) -> list[SavingsGoal]:
        return self.savings_goals.by_user(user_id)

    def create_savings_goal(self, user_id: int, data: SavingsGoalInsert) -> SavingsGoal:
        self._require_user(user_id)
        now = dt.datetime.now()
        return self.savings_goals.insert(user_id=user_id, created_at=now, updated_at=now, **data.model_dump())

    def update_savings_goal(self, goal_id: int, changes: BaseModel | dict, user_id: Optional[int] = None) -> Optional[SavingsGoal]:
        changes = _as_changes(changes)
        changes["updated_at"] = dt.datetime.now()
        return self._update(self.savings_goals, goal_id, changes, user_id)

    def delete_savings_goal(self, goal_id: int, user_id: Optional[int] = None) -> bool:
        return self._delete(self.savings_goals, goal_id, user_id)

    # ------------------------------------------------------------------
    # Account balance
    # ------------------------------------------------------------------

    def get_account_balance(self, user_id: int) -> Optional[AccountBalance]:
        return next((b for b in self.account_balances.values() if b.user_id == user_id), None)

    def update_account_balance(self, user_id: int, changes: AccountBalanceUpdate | dict) -> AccountBalance:
        """Manual adjustment: overwrite figures and re-anchor the opening snapshot."""
        self._require_user(user_id)
        with self.user_lock(user_id):
            current = self._balance_or_zero(user_id)
            updated = self.account_balances.merge(
                current, {**_as_changes(changes), "updated_at": dt.datetime.now()},
            )
            self.account_balances.put(updated)

            opening = updated
            for tx in self.list_transactions(user_id):
                opening = aggregator.revert_transaction(opening, tx)
            self._openings[user_id] = opening
        return updated

    def recomputed_balance(self, user_id: int) -> Optional[AccountBalance]:
        """Balance rebuilt from scratch: opening figures plus every transaction."""
        current = self.get_account_balance(user_id)
        if current is None:
            return None
        return aggregator.recompute(current, self.list_transactions(user_id), self._openings.get(user_id))

    def _balance_or_zero(self, user_id: int) -> AccountBalance:
        current = self.get_account_balance(user_id)
        if current is None:
            current = self.account_balances.insert(user_id=user_id, updated_at=dt.datetime.now())
        return current

    # ------------------------------------------------------------------
    # Shared update/delete
    # ------------------------------------------------------------------

    def _update(self, coll: _Collection[E], record_id: int, changes: BaseModel | dict, user_id: Optional[int]) -> Optional[E]:
        record = coll.get(record_id, user_id)
        if record is None:
            return None
        return coll.put(coll.merge(record, _as_changes(changes)))

    def _delete(self, coll: _Collection[E], record_id: int, user_id: Optional[int]) -> bool:
        if coll.get(record_id, user_id) is None:
            return False
        return coll.remove(record_id)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def counts(self) -> dict[str, int]:
        return {
            "users": len(self.users),
            "transactions": len(self.transactions),
            "categories": len(self.categories),
            "bills": len(self.bills),
            "credit_cards": len(self.credit_cards),
            "savings_goals": len(self.savings_goals),
        }
