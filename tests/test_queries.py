import datetime as dt
from decimal import Decimal

from fintrack.data import queries
from fintrack.data.schemas import ZERO, Bill, Category, PeriodFilter, PeriodType, Transaction

TODAY = dt.date(2024, 3, 15)


def _tx(id, day, amount="10.00", tx_type="expense", category="Alimentação"):
    return Transaction(
        id=id, user_id=1, description=f"tx{id}", amount=amount, date=day,
        type=tx_type, category=category,
    )


def _bill(id, due, paid=False):
    return Bill(id=id, user_id=1, description=f"bill{id}", amount="100", due_date=due, paid=paid)


def _cat(id, name, color="#000"):
    return Category(id=id, user_id=1, name=name, color=color)


def test_recent_transactions_newest_first_and_stable():
    txs = [
        _tx(1, dt.date(2024, 3, 1)),
        _tx(2, dt.date(2024, 3, 10)),
        _tx(3, dt.date(2024, 3, 10)),
        _tx(4, dt.date(2024, 2, 28)),
    ]
    recent = queries.recent_transactions(txs, 3)
    assert [t.id for t in recent] == [2, 3, 1]


def test_recent_transactions_limit_larger_than_list():
    txs = [_tx(1, TODAY)]
    assert queries.recent_transactions(txs, 5) == txs
    assert queries.recent_transactions([], 5) == []


def test_upcoming_bills_filters_paid_and_past():
    bills = [
        _bill(1, TODAY + dt.timedelta(days=10)),
        _bill(2, TODAY - dt.timedelta(days=1)),
        _bill(3, TODAY),
        _bill(4, TODAY + dt.timedelta(days=2), paid=True),
        _bill(5, TODAY + dt.timedelta(days=5)),
    ]
    upcoming = queries.upcoming_bills(bills, 4, today=TODAY)
    assert [b.id for b in upcoming] == [3, 5, 1]


def test_upcoming_bills_respects_limit():
    bills = [_bill(i, TODAY + dt.timedelta(days=i)) for i in range(1, 8)]
    assert [b.id for b in queries.upcoming_bills(bills, 4, today=TODAY)] == [1, 2, 3, 4]


def test_transactions_by_month():
    txs = [_tx(1, dt.date(2024, 1, 31)), _tx(2, dt.date(2024, 2, 1)), _tx(3, dt.date(2023, 2, 14))]
    assert [t.id for t in queries.transactions_by_month(txs, 2024, 2)] == [2]


def test_expenses_by_category_percentages():
    txs = [
        _tx(1, TODAY, "30.00", category="Alimentação"),
        _tx(2, TODAY, "60.00", category="Transporte"),
        _tx(3, TODAY, "10.00", category="Lazer"),
        _tx(4, TODAY, "500.00", "income", category="Receita"),
        _tx(5, dt.date(2024, 2, 1), "999.00", category="Lazer"),
    ]
    cats = [_cat(1, "Alimentação"), _cat(2, "Transporte"), _cat(3, "Lazer"), _cat(4, "Receita"), _cat(5, "Saúde")]

    rows = queries.expenses_by_category(txs, cats, 2024, 3)

    assert [r["name"] for r in rows] == ["Alimentação", "Transporte", "Lazer"]
    assert [r["percentage"] for r in rows] == [30, 60, 10]
    assert rows[0]["value"] == Decimal("30.00")
    assert sum(r["percentage"] for r in rows) == 100


def test_expenses_by_category_rounding_stays_near_100():
    txs = [_tx(i, TODAY, "1.00", category=name) for i, name in enumerate(["A", "B", "C"], 1)]
    cats = [_cat(1, "A"), _cat(2, "B"), _cat(3, "C")]

    rows = queries.expenses_by_category(txs, cats, 2024, 3)
    assert [r["percentage"] for r in rows] == [33, 33, 33]
    assert abs(sum(r["percentage"] for r in rows) - 100) <= len(rows)


def test_expenses_by_category_empty_month():
    cats = [_cat(1, "Alimentação")]
    assert queries.expenses_by_category([], cats, 2024, 3) == []


def test_expenses_by_category_ignores_unknown_and_duplicate_names():
    txs = [_tx(1, TODAY, "20.00", category="Lazer"), _tx(2, TODAY, "20.00", category="Sem categoria")]
    cats = [_cat(1, "Lazer", "#111"), _cat(2, "Lazer", "#222")]

    rows = queries.expenses_by_category(txs, cats, 2024, 3)
    assert rows == [{"name": "Lazer", "value": Decimal("20.00"), "color": "#111", "percentage": 100}]


def test_month_label():
    assert queries.month_label(2026, 10) == "outubro de 2026"
    assert queries.month_label(2024, 3) == "março de 2024"


def test_period_filter_ranges():
    assert PeriodFilter(PeriodType.MONTH, year=2024, month=2).resolve() == (dt.date(2024, 2, 1), dt.date(2024, 2, 29))
    assert PeriodFilter(PeriodType.QUARTER, year=2024, quarter=4).resolve() == (dt.date(2024, 10, 1), dt.date(2024, 12, 31))
    last3 = PeriodFilter(PeriodType.LAST_MONTHS, months=3, today=dt.date(2024, 1, 20))
    assert last3.resolve() == (dt.date(2023, 11, 1), dt.date(2024, 1, 31))
    assert last3.label == "Últimos 3 meses"
    assert PeriodFilter().resolve() == (None, None)


def test_percent_of_zero_total_is_zero():
    assert queries._percent(ZERO, ZERO) == 0
    assert queries._percent(Decimal("5.00"), ZERO) == 0
    assert queries._percent(Decimal("1.00"), Decimal("3.00")) == 33
