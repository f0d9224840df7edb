import datetime as dt
import io

from openpyxl import load_workbook

from fintrack import cli
from fintrack.analytics import reports
from fintrack.data.schemas import PeriodFilter, PeriodType, TransactionInsert
from fintrack.reports import transactions_report


def _add(store, day, amount, tx_type, category):
    store.create_transaction(1, TransactionInsert(
        description=category, amount=amount, date=day, type=tx_type, category=category,
    ))


def test_monthly_totals_and_categories(store):
    _add(store, dt.date(2024, 1, 5), "1000.00", "income", "Receita")
    _add(store, dt.date(2024, 1, 9), "200.00", "expense", "Moradia")
    _add(store, dt.date(2024, 2, 3), "50.00", "expense", "Lazer")
    _add(store, dt.date(2024, 2, 4), "150.00", "expense", "Moradia")

    data = reports.summary(store, 1)

    assert data["transactions"] == 4
    assert data["totals"] == {"income": 1000.0, "expense": 400.0, "net": 600.0}
    assert data["monthly"] == [
        {"month": "2024-01", "label": "jan. de 2024", "income": 1000.0, "expense": 200.0, "net": 800.0},
        {"month": "2024-02", "label": "fev. de 2024", "income": 0.0, "expense": 200.0, "net": -200.0},
    ]
    assert [(c["name"], c["value"], c["percentage"]) for c in data["expenses_by_category"]] == [
        ("Moradia", 350.0, 87.5),
        ("Lazer", 50.0, 12.5),
    ]
    assert data["date_range"] == "05/01/2024 a 04/02/2024"


def test_summary_respects_period(store):
    _add(store, dt.date(2024, 1, 5), "1000.00", "income", "Receita")
    _add(store, dt.date(2024, 2, 3), "50.00", "expense", "Lazer")

    period = PeriodFilter(PeriodType.MONTH, year=2024, month=2)
    data = reports.summary(store, 1, period)

    assert data["period"] == "fevereiro de 2024"
    assert data["transactions"] == 1
    assert data["income_by_category"] == []


def test_summary_empty(store):
    data = reports.summary(store, 1)
    assert data["transactions"] == 0
    assert data["monthly"] == []
    assert data["date_range"] == "N/A"


def test_workbook_sheets(seeded_store):
    content = transactions_report.build_workbook(seeded_store, 1).to_bytes()
    wb = load_workbook(io.BytesIO(content))
    assert wb.sheetnames == ["Resumo", "Mensal", "Despesas por categoria", "Transações"]
    assert wb["Transações"].cell(row=1, column=1).value == "Data"


def test_cli_export_writes_file(tmp_path):
    output = tmp_path / "relatorio.xlsx"
    assert cli.main(["export", "--output", str(output)]) == 0
    assert output.exists()


def test_cli_preview(tmp_path, capsys):
    path = tmp_path / "extrato.csv"
    path.write_text("data;descricao;valor\n15/03/2024;Feira;-42,90\n16/03/2024;Quebrada\n", encoding="utf-8")

    assert cli.main(["preview", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Feira" in out
    assert "line 3" in out
    assert "1 rows ready to import" in out


def test_cli_preview_missing_file(tmp_path):
    assert cli.main(["preview", str(tmp_path / "nada.csv")]) == 1
