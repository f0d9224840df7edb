"""
Fintrack — Configuration: paths, demo principal, import rules, seed data.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with FINTRACK_DATA_DIR env var for cloud deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("FINTRACK_DATA_DIR", str(Path.home() / "Fintrack")))
BASE_FOLDER = _data_dir
EXPORTS_FOLDER = _data_dir / "exports"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Principal: stands in for authentication until real auth exists
# ---------------------------------------------------------------------------
DEMO_USER_ID = int(os.environ.get("FINTRACK_DEMO_USER_ID", "1"))
SEED_DEMO_DATA = _env_flag("FINTRACK_SEED_DEMO", True)

# ---------------------------------------------------------------------------
# Import limits
# ---------------------------------------------------------------------------
MAX_UPLOAD_MB = int(os.environ.get("FINTRACK_MAX_UPLOAD_MB", "5"))
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024
ALLOWED_IMPORT_EXTENSIONS = {".csv", ".xlsx", ".xls"}

# Unparseable import dates: False rejects the row, True falls back to today
LENIENT_IMPORT_DATES = _env_flag("FINTRACK_LENIENT_DATES", False)

# ---------------------------------------------------------------------------
# Column mapping from spreadsheet headers → canonical transaction fields
# (keys are matched lower-cased and trimmed)
# ---------------------------------------------------------------------------
COLUMN_SYNONYMS = {
    # date
    "date": "date",
    "data": "date",
    "dt": "date",
    "data da transação": "date",
    "data transação": "date",
    "data da transacao": "date",
    "data do lançamento": "date",
    "data do lancamento": "date",
    # description
    "description": "description",
    "descrição": "description",
    "descricao": "description",
    "histórico": "description",
    "historico": "description",
    "lançamento": "description",
    "lancamento": "description",
    # amount
    "amount": "amount",
    "value": "amount",
    "valor": "amount",
    "quantia": "amount",
    "montante": "amount",
    # category
    "category": "category",
    "categoria": "category",
    # type (income/expense)
    "type": "type",
    "tipo": "type",
    "receita/despesa": "type",
    "entrada/saída": "type",
    "entrada/saida": "type",
    # payment method
    "paymentmethod": "paymentMethod",
    "payment method": "paymentMethod",
    "método de pagamento": "paymentMethod",
    "metodo de pagamento": "paymentMethod",
    "forma de pagamento": "paymentMethod",
    "formapagamento": "paymentMethod",
    "pagamento": "paymentMethod",
    # notes
    "notes": "notes",
    "observações": "notes",
    "observacoes": "notes",
    "notas": "notes",
    "comentários": "notes",
    "comentarios": "notes",
    # credit card reference
    "creditcardid": "creditCardId",
    "cartaoid": "creditCardId",
}

INCOME_KEYWORDS = {"receita", "entrada", "income", "revenue", "credito", "crédito"}
EXPENSE_KEYWORDS = {"despesa", "saída", "saida", "expense", "debito", "débito"}

DEFAULT_CATEGORY = "Outros"
DEFAULT_PAYMENT_METHOD = "Outros"

# ---------------------------------------------------------------------------
# Locale labels (pt-BR)
# ---------------------------------------------------------------------------
MONTH_NAMES_PT = [
    "", "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]
MONTH_ABBR_PT = [
    "", "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
]
TYPE_LABELS_PT = {"income": "Receita", "expense": "Despesa"}

# ---------------------------------------------------------------------------
# Dashboard sizes
# ---------------------------------------------------------------------------
DASHBOARD_RECENT_LIMIT = 5
DASHBOARD_BILLS_LIMIT = 4

# ---------------------------------------------------------------------------
# Demo seed
# Day offsets are relative to the day the server starts.
# ---------------------------------------------------------------------------
DEMO_USER = {
    "username": "demo",
    "password": "demo123",
    "name": "João Silva",
    "email": "joao@example.com",
}

DEMO_CATEGORIES = [
    ("Moradia", "#2563eb"),
    ("Alimentação", "#10b981"),
    ("Transporte", "#f59e0b"),
    ("Saúde", "#ef4444"),
    ("Lazer", "#dc2626"),
    ("Receita", "#8b5cf6"),
    ("Outros", "#9ca3af"),
]

DEMO_CREDIT_CARDS = [
    {
        "name": "Nubank", "lastFourDigits": "4587", "limit": "5000",
        "currentBalance": "1240.56", "dueDate": 9, "closingDate": 2,
        "cardType": "mastercard", "color": "#9333ea",
    },
    {
        "name": "Itaú Platinum", "lastFourDigits": "7845", "limit": "8000",
        "currentBalance": "599.76", "dueDate": 15, "closingDate": 10,
        "cardType": "visa", "color": "#0284c7",
    },
]

# (days_ago, description, amount, type, category, payment method, card index)
DEMO_TRANSACTIONS = [
    (0, "Mercado Pão de Açúcar", "128.47", "expense", "Alimentação", "Cartão de Crédito", 0),
    (1, "iFood", "42.90", "expense", "Alimentação", "Cartão de Crédito", 0),
    (7, "Posto Shell", "150.00", "expense", "Transporte", "Cartão de Crédito", 1),
    (7, "Salário", "5250.00", "income", "Receita", "Transferência", None),
    (7, "Cinema Shopping", "72.00", "expense", "Lazer", "Cartão de Débito", None),
]

# (days_ahead, description, amount, category)
DEMO_BILLS = [
    (3, "Aluguel", "1800.00", "Moradia"),
    (5, "Energia Elétrica", "245.78", "Moradia"),
    (7, "Fatura Cartão Nubank", "1240.56", "Cartão de Crédito"),
    (10, "Internet", "119.90", "Moradia"),
]

DEMO_GOALS = [
    {"name": "Reserva de emergência", "targetAmount": "15000.00", "currentAmount": "4200.00",
     "category": "Outros", "color": "#8b5cf6"},
    {"name": "Viagem de férias", "targetAmount": "6000.00", "currentAmount": "1350.00",
     "category": "Lazer", "color": "#f59e0b"},
]

# Opening figures recorded before the seeded transactions are applied
DEMO_OPENING_BALANCE = {
    "totalBalance": "-227.73",
    "monthlyIncome": "0.00",
    "monthlyExpenses": "2794.08",
    "creditCardBills": "1840.32",
}
