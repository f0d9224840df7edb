from decimal import Decimal

from fintrack.data.schemas import AccountBalanceUpdate, TransactionInsert


def _tx(amount, tx_type="expense", **overrides):
    data = {
        "description": "Lançamento",
        "amount": amount,
        "date": "2024-03-10",
        "type": tx_type,
        "category": "Outros",
    }
    data.update(overrides)
    return TransactionInsert.model_validate(data)


def _assert_consistent(store, user_id=1):
    stored = store.get_account_balance(user_id)
    recomputed = store.recomputed_balance(user_id)
    assert stored.total_balance == recomputed.total_balance
    assert stored.monthly_income == recomputed.monthly_income
    assert stored.monthly_expenses == recomputed.monthly_expenses


def test_expense_reduces_total_and_raises_expenses(store):
    store.update_account_balance(1, AccountBalanceUpdate(total_balance="1000.00"))
    store.create_transaction(1, _tx("250.50"))

    balance = store.get_account_balance(1)
    assert balance.total_balance == Decimal("749.50")
    assert balance.monthly_expenses == Decimal("250.50")
    assert balance.monthly_income == Decimal("0.00")


def test_income_raises_total_and_income(store):
    store.create_transaction(1, _tx("5250", "income"))

    balance = store.get_account_balance(1)
    assert balance.total_balance == Decimal("5250.00")
    assert balance.monthly_income == Decimal("5250.00")


def test_first_transaction_creates_zero_balance(store):
    assert store.get_account_balance(1) is None
    store.create_transaction(1, _tx("10.00"))
    assert store.get_account_balance(1).total_balance == Decimal("-10.00")


def test_total_equals_signed_sum_of_transactions(store):
    for amount, tx_type in [("0.10", "expense"), ("0.20", "expense"), ("100.00", "income"), ("33.33", "expense")]:
        store.create_transaction(1, _tx(amount, tx_type))

    assert store.get_account_balance(1).total_balance == Decimal("66.37")
    _assert_consistent(store)


def test_delete_reverts_contribution(store):
    store.update_account_balance(1, AccountBalanceUpdate(total_balance="1000.00"))
    tx = store.create_transaction(1, _tx("250.50"))
    store.delete_transaction(tx.id, 1)

    balance = store.get_account_balance(1)
    assert balance.total_balance == Decimal("1000.00")
    assert balance.monthly_expenses == Decimal("0.00")
    _assert_consistent(store)


def test_update_amount_reconciles(store):
    store.update_account_balance(1, AccountBalanceUpdate(total_balance="1000.00"))
    tx = store.create_transaction(1, _tx("250.50"))
    store.update_transaction(tx.id, {"amount": Decimal("100.00")}, 1)

    balance = store.get_account_balance(1)
    assert balance.total_balance == Decimal("900.00")
    assert balance.monthly_expenses == Decimal("100.00")
    _assert_consistent(store)


def test_update_type_moves_between_income_and_expenses(store):
    tx = store.create_transaction(1, _tx("40.00"))
    store.update_transaction(tx.id, {"type": "income"}, 1)

    balance = store.get_account_balance(1)
    assert balance.total_balance == Decimal("40.00")
    assert balance.monthly_income == Decimal("40.00")
    assert balance.monthly_expenses == Decimal("0.00")
    _assert_consistent(store)


def test_manual_adjustment_reanchors_opening(store):
    store.create_transaction(1, _tx("100.00"))
    store.update_account_balance(1, {"total_balance": Decimal("500.00")})
    store.create_transaction(1, _tx("50.00"))

    assert store.get_account_balance(1).total_balance == Decimal("450.00")
    _assert_consistent(store)


def test_credit_card_bills_untouched_by_transactions(store):
    store.update_account_balance(1, AccountBalanceUpdate(credit_card_bills="1840.32"))
    store.create_transaction(1, _tx("99.90", credit_card_id=1))

    assert store.get_account_balance(1).credit_card_bills == Decimal("1840.32")


def test_seeded_balance(seeded_store):
    balance = seeded_store.get_account_balance(1)
    assert balance.total_balance == Decimal("4628.90")
    assert balance.monthly_income == Decimal("5250.00")
    assert balance.monthly_expenses == Decimal("3187.45")
    assert balance.credit_card_bills == Decimal("1840.32")
    _assert_consistent(seeded_store)


def test_income_then_expense_from_zero(store):
    store.create_transaction(1, _tx("1000.00", "income"))
    balance = store.get_account_balance(1)
    assert balance.total_balance == Decimal("1000.00")
    assert balance.monthly_income == Decimal("1000.00")

    store.create_transaction(1, _tx("250.50"))
    balance = store.get_account_balance(1)
    assert balance.total_balance == Decimal("749.50")
    assert balance.monthly_expenses == Decimal("250.50")
