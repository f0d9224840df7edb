import asyncio

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _new_tx(**overrides):
    body = {
        "description": "Padaria",
        "amount": "12.50",
        "date": "2024-03-10T03:00:00.000Z",
        "type": "expense",
        "category": "Alimentação",
        "paymentMethod": "Pix",
    }
    body.update(overrides)
    return body


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["users"] == 1
    assert data["transactions"] == 5


def test_current_user_hides_password(client):
    r = client.get("/api/user")
    assert r.status_code == 200
    data = r.json()
    assert data["username"] == "demo"
    assert "password" not in data


def test_dashboard_shape(client):
    r = client.get("/api/dashboard")
    assert r.status_code == 200
    data = r.json()
    assert set(data) == {
        "balance", "recentTransactions", "upcomingBills", "creditCards",
        "expensesByCategory", "currentMonth",
    }
    assert data["balance"]["totalBalance"] == "4628.90"
    assert len(data["recentTransactions"]) == 5
    assert [b["description"] for b in data["upcomingBills"]] == [
        "Aluguel", "Energia Elétrica", "Fatura Cartão Nubank", "Internet",
    ]
    assert len(data["creditCards"]) == 2
    assert " de " in data["currentMonth"]


def test_dashboard_without_balance_is_404(empty_client):
    r = empty_client.get("/api/dashboard")
    assert r.status_code == 404
    assert r.json() == {"message": "Balanço não encontrado"}


def test_create_transaction_updates_balance(client):
    r = client.post("/api/transactions", json=_new_tx())
    assert r.status_code == 201
    tx = r.json()
    assert tx["id"] == 6
    assert tx["amount"] == "12.50"
    assert tx["date"] == "2024-03-10"
    assert tx["paymentMethod"] == "Pix"

    balance = client.get("/api/balance").json()
    assert balance["totalBalance"] == "4616.40"
    assert client.get("/api/balance/verify").json()["inSync"] is True


def test_create_transaction_validation_error(client):
    r = client.post("/api/transactions", json=_new_tx(amount="-5", type="transfer"))
    assert r.status_code == 400
    message = r.json()["message"]
    assert message.startswith("Validation error")
    assert "amount" in message


def test_transaction_update_and_delete(client):
    r = client.put("/api/transactions/1", json={"amount": "28.47"})
    assert r.status_code == 200
    assert r.json()["amount"] == "28.47"
    assert r.json()["description"] == "Mercado Pão de Açúcar"
    assert client.get("/api/balance").json()["totalBalance"] == "4728.90"

    r = client.delete("/api/transactions/1")
    assert r.status_code == 204
    assert client.get("/api/transactions/1").status_code == 404
    assert client.get("/api/balance").json()["totalBalance"] == "4757.37"
    assert client.get("/api/balance/verify").json()["inSync"] is True


def test_missing_transaction_is_404(client):
    r = client.put("/api/transactions/999", json={"amount": "1.00"})
    assert r.status_code == 404
    assert r.json() == {"message": "Transação não encontrada"}
    assert client.delete("/api/transactions/999").status_code == 404


def test_transactions_by_month(client):
    client.post("/api/transactions", json=_new_tx(date="2020-02-14"))
    r = client.get("/api/transactions", params={"year": 2020, "month": 2})
    assert [t["date"] for t in r.json()] == ["2020-02-14"]


def test_category_bill_card_goal_crud(client):
    r = client.post("/api/categories", json={"name": "Pets", "color": "#22c55e"})
    assert r.status_code == 201
    assert r.json()["id"] == 8
    assert client.put("/api/categories/8", json={"color": "#000000"}).json()["color"] == "#000000"
    assert client.delete("/api/categories/8").status_code == 204

    r = client.post("/api/bills", json={"description": "Academia", "amount": "99.90", "dueDate": "2099-01-05"})
    assert r.status_code == 201
    bill_id = r.json()["id"]
    assert client.put(f"/api/bills/{bill_id}", json={"paid": True}).json()["paid"] is True
    assert client.delete(f"/api/bills/{bill_id}").status_code == 204
    assert client.delete(f"/api/bills/{bill_id}").json() == {"message": "Conta não encontrada"}

    r = client.post("/api/credit-cards", json={
        "name": "Inter", "lastFourDigits": "1234", "limit": "3000",
        "dueDate": 20, "closingDate": 13, "color": "#f97316",
    })
    assert r.status_code == 201
    assert r.json()["currentBalance"] == "0.00"
    assert client.post("/api/credit-cards", json={
        "name": "Inter", "lastFourDigits": "12", "limit": "3000",
        "dueDate": 20, "closingDate": 13, "color": "#f97316",
    }).status_code == 400

    r = client.post("/api/goals", json={"name": "Carro", "targetAmount": "40000"})
    assert r.status_code == 201
    goal = r.json()
    assert goal["currentAmount"] == "0.00"
    assert "createdAt" in goal


def test_upcoming_bills_limit(client):
    r = client.get("/api/bills/upcoming", params={"limit": 2})
    assert [b["description"] for b in r.json()] == ["Aluguel", "Energia Elétrica"]


def test_import_endpoint(client):
    content = (
        "data,descricao,valor,tipo\n"
        "2024-01-10,Mercado,-128.47,\n"
        "2024-01-11,Salario,5250,receita\n"
        "2024-01-12,Quebrada\n"
    ).encode("utf-8")
    r = client.post("/api/import", files={"file": ("extrato.csv", content, "text/csv")})
    assert r.status_code == 201
    data = r.json()
    assert data["count"] == 2
    assert data["message"] == "2 transações importadas com sucesso"
    assert data["errors"] == [{"line": 4, "message": "esperadas 4 colunas, encontradas 2"}]
    assert client.get("/api/balance/verify").json()["inSync"] is True


def test_import_rejects_bad_files(client):
    r = client.post("/api/import", files={"file": ("extrato.pdf", b"%PDF", "application/pdf")})
    assert r.status_code == 400
    assert r.json()["message"].startswith("Erro ao importar arquivo")

    r = client.post("/api/import")
    assert r.status_code == 400
    assert r.json() == {"message": "Nenhum arquivo enviado"}


def test_export_xlsx(client):
    r = client.get("/api/transactions/export")
    assert r.status_code == 200
    assert r.headers["content-type"] == XLSX
    assert r.content[:2] == b"PK"


def test_report_summary(client):
    r = client.get("/api/reports/summary")
    assert r.status_code == 200
    data = r.json()
    assert data["transactions"] == 5
    assert data["totals"] == {"income": 5250.0, "expense": 393.37, "net": 4856.63}
    assert data["balance"] == 4628.9

    r = client.get("/api/reports/summary", params={"period_type": "year", "year": 1999})
    assert r.json()["transactions"] == 0

    r = client.get("/api/reports/summary", params={"period_type": "fortnight"})
    assert r.status_code == 400


def test_import_parses_off_the_event_loop(client, monkeypatch):
    from fintrack.api import router_upload

    seen = {}
    real_import = router_upload.import_file

    def recording_import(*args, **kwargs):
        try:
            asyncio.get_running_loop()
            seen["on_loop"] = True
        except RuntimeError:
            seen["on_loop"] = False
        return real_import(*args, **kwargs)

    monkeypatch.setattr(router_upload, "import_file", recording_import)
    content = "data,descricao,valor\n2024-01-10,Mercado,10.00\n".encode("utf-8")
    r = client.post("/api/import", files={"file": ("extrato.csv", content, "text/csv")})

    assert r.status_code == 201
    assert seen == {"on_loop": False}
