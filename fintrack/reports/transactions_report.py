"""
Transactions Report — period summary plus the full transaction list, as JSON or Excel.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Optional

from fintrack.analytics import reports
from fintrack.analytics.common import money
from fintrack.config import TYPE_LABELS_PT
from fintrack.data.schemas import PeriodFilter
from fintrack.data.store import LedgerStore
from fintrack.excel.writer import Column, ExcelWriter


TRANSACTION_COLS = [
    Column("date", "date", "Data"),
    Column("description", "text", "Descrição"),
    Column("category", "text", "Categoria"),
    Column("type_label", "text", "Tipo"),
    Column("payment_method", "text", "Forma de pagamento"),
    Column("amount", "currency", "Valor"),
]

CATEGORY_COLS = [
    Column("name", "text", "Categoria"),
    Column("value", "currency", "Total"),
    Column("percentage", "percent", "% do total"),
]

MONTHLY_COLS = [
    Column("label", "text", "Mês"),
    Column("income", "currency", "Receitas"),
    Column("expense", "currency", "Despesas"),
    Column("net", "currency", "Saldo"),
]


def _transaction_rows(store: LedgerStore, user_id: int, period: Optional[PeriodFilter]) -> list[dict]:
    txs = store.list_transactions(user_id)
    if period is not None:
        txs = [t for t in txs if period.contains(t.date)]
    txs = sorted(txs, key=lambda t: t.date)
    return [{
        "date": t.date,
        "description": t.description,
        "category": t.category,
        "type": t.type,
        "type_label": TYPE_LABELS_PT[t.type],
        "payment_method": t.payment_method or "",
        "amount": money(t.amount),
    } for t in txs]


def generate_json(store: LedgerStore, user_id: int, period: Optional[PeriodFilter] = None) -> dict:
    data = reports.summary(store, user_id, period)
    balance = store.get_account_balance(user_id)
    data["balance"] = money(balance.total_balance) if balance else 0.0
    return data


def build_workbook(store: LedgerStore, user_id: int, period: Optional[PeriodFilter] = None) -> ExcelWriter:
    data = generate_json(store, user_id, period)
    t = data["totals"]
    ew = ExcelWriter()

    ws = ew.add_sheet("Resumo")
    ew.write_title(ws, "RELATÓRIO DE TRANSAÇÕES",
                   f"{data['period']}  |  {data['date_range']}  |  Gerado em {dt.date.today():%d/%m/%Y}")
    row = ew.write_section(ws, 5, "VISÃO GERAL")
    row = ew.write_kpis(ws, row, [
        (t["income"], "RECEITAS", "currency"),
        (t["expense"], "DESPESAS", "currency"),
        (data["transactions"], "TRANSAÇÕES", "number"),
    ])
    ew.write_kpis(ws, row, [
        (t["net"], "SALDO DO PERÍODO", "signed"),
        (data["balance"], "SALDO TOTAL", "signed"),
    ])

    ew.write_table(ew.add_sheet("Mensal"), 1, MONTHLY_COLS, data["monthly"], total_label="TOTAL")
    ew.write_table(ew.add_sheet("Despesas por categoria"), 1, CATEGORY_COLS,
                   data["expenses_by_category"], total_label="TOTAL")
    ew.write_table(ew.add_sheet("Transações"), 1, TRANSACTION_COLS,
                   _transaction_rows(store, user_id, period), tint_fn=lambda r: r["type"])
    return ew


def generate_excel(
    store: LedgerStore,
    user_id: int,
    output_path: str | Path,
    period: Optional[PeriodFilter] = None,
) -> Path:
    return build_workbook(store, user_id, period).save(output_path)
