"""
Ledger entity schemas and period filters for time-based queries.

Attributes are snake_case in Python and camelCase on the wire.
Money is Decimal quantized to cents and serialized as a decimal string.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fintrack.config import MONTH_ABBR_PT, MONTH_NAMES_PT

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _date_only(value):
    # Clients send full ISO timestamps ("2024-01-10T03:00:00.000Z"); keep the calendar day
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    if isinstance(value, dt.datetime):
        return value.date()
    return value


SignedMoney = Annotated[Decimal, AfterValidator(quantize_money)]
Money = Annotated[Decimal, Field(ge=0), AfterValidator(quantize_money)]
CalendarDate = Annotated[dt.date, BeforeValidator(_date_only)]
DayOfMonth = Annotated[int, Field(ge=1, le=31)]
TransactionType = Literal["expense", "income"]


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserInsert(_Model):
    username: str
    password: str
    name: str
    email: str


class User(UserInsert):
    id: int


class PublicUser(_Model):
    id: int
    username: str
    name: str
    email: str


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

class TransactionInsert(_Model):
    description: str
    amount: Money
    date: CalendarDate
    type: TransactionType
    category: str
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    credit_card_id: Optional[int] = None
    receipt_image: Optional[str] = None


class TransactionUpdate(_Model):
    description: Optional[str] = None
    amount: Optional[Money] = None
    date: Optional[CalendarDate] = None
    type: Optional[TransactionType] = None
    category: Optional[str] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    credit_card_id: Optional[int] = None
    receipt_image: Optional[str] = None


class Transaction(TransactionInsert):
    id: int
    user_id: int


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class CategoryInsert(_Model):
    name: str = Field(min_length=1)
    color: str = Field(min_length=1)


class CategoryUpdate(_Model):
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = Field(default=None, min_length=1)


class Category(CategoryInsert):
    id: int
    user_id: int


# ---------------------------------------------------------------------------
# Bills
# ---------------------------------------------------------------------------

class BillInsert(_Model):
    description: str
    amount: Money
    due_date: CalendarDate
    paid: bool = False
    recurring: bool = False
    category: Optional[str] = None
    notes: Optional[str] = None


class BillUpdate(_Model):
    description: Optional[str] = None
    amount: Optional[Money] = None
    due_date: Optional[CalendarDate] = None
    paid: Optional[bool] = None
    recurring: Optional[bool] = None
    category: Optional[str] = None
    notes: Optional[str] = None


class Bill(BillInsert):
    id: int
    user_id: int


# ---------------------------------------------------------------------------
# Credit cards
# ---------------------------------------------------------------------------

class CreditCardInsert(_Model):
    name: str
    last_four_digits: str = Field(pattern=r"^\d{4}$")
    limit: Money
    current_balance: SignedMoney = ZERO
    due_date: DayOfMonth
    closing_date: DayOfMonth
    card_type: Optional[str] = None
    color: str


class CreditCardUpdate(_Model):
    name: Optional[str] = None
    last_four_digits: Optional[str] = Field(default=None, pattern=r"^\d{4}$")
    limit: Optional[Money] = None
    current_balance: Optional[SignedMoney] = None
    due_date: Optional[DayOfMonth] = None
    closing_date: Optional[DayOfMonth] = None
    card_type: Optional[str] = None
    color: Optional[str] = None


class CreditCard(CreditCardInsert):
    id: int
    user_id: int


# ---------------------------------------------------------------------------
# Savings goals
# ---------------------------------------------------------------------------

class SavingsGoalInsert(_Model):
    name: str = Field(min_length=1)
    target_amount: Money
    current_amount: Money = ZERO
    deadline: Optional[CalendarDate] = None
    category: Optional[str] = None
    color: str = "#8b5cf6"
    notes: Optional[str] = None


class SavingsGoalUpdate(_Model):
    name: Optional[str] = Field(default=None, min_length=1)
    target_amount: Optional[Money] = None
    current_amount: Optional[Money] = None
    deadline: Optional[CalendarDate] = None
    category: Optional[str] = None
    color: Optional[str] = None
    notes: Optional[str] = None


class SavingsGoal(SavingsGoalInsert):
    id: int
    user_id: int
    created_at: dt.datetime
    updated_at: dt.datetime


# ---------------------------------------------------------------------------
# Account balance (one per user)
# ---------------------------------------------------------------------------

class AccountBalanceUpdate(_Model):
    total_balance: Optional[SignedMoney] = None
    monthly_income: Optional[SignedMoney] = None
    monthly_expenses: Optional[SignedMoney] = None
    credit_card_bills: Optional[SignedMoney] = None


class AccountBalance(_Model):
    id: int
    user_id: int
    total_balance: SignedMoney = ZERO
    monthly_income: SignedMoney = ZERO
    monthly_expenses: SignedMoney = ZERO
    credit_card_bills: SignedMoney = ZERO
    updated_at: dt.datetime


# ---------------------------------------------------------------------------
# Period filters
# ---------------------------------------------------------------------------

class PeriodType(str, Enum):
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"
    LAST_MONTHS = "last_months"
    ALL = "all"


def _month_end(year: int, month: int) -> dt.date:
    if month == 12:
        return dt.date(year + 1, 1, 1) - dt.timedelta(days=1)
    return dt.date(year, month + 1, 1) - dt.timedelta(days=1)


@dataclass
class PeriodFilter:
    """Defines a date range for filtering transactions."""
    period_type: PeriodType = PeriodType.ALL
    year: Optional[int] = None
    month: Optional[int] = None          # 1-12
    quarter: Optional[int] = None        # 1-4
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    months: Optional[int] = None         # LAST_MONTHS: window size incl. current month
    today: Optional[dt.date] = None      # LAST_MONTHS reference day

    def resolve(self) -> tuple[Optional[dt.date], Optional[dt.date]]:
        """Return (start_date, end_date) based on period_type."""
        if self.period_type == PeriodType.ALL:
            return None, None

        if self.period_type == PeriodType.CUSTOM:
            return self.start_date, self.end_date

        if self.period_type == PeriodType.LAST_MONTHS:
            if not self.months:
                return None, None
            ref = self.today or dt.date.today()
            index = ref.year * 12 + (ref.month - 1) - (self.months - 1)
            start = dt.date(index // 12, index % 12 + 1, 1)
            return start, _month_end(ref.year, ref.month)

        if self.year is None:
            return None, None

        if self.period_type == PeriodType.MONTH:
            if self.month is None:
                return None, None
            return dt.date(self.year, self.month, 1), _month_end(self.year, self.month)

        if self.period_type == PeriodType.QUARTER:
            if self.quarter is None:
                return None, None
            start_month = (self.quarter - 1) * 3 + 1
            return dt.date(self.year, start_month, 1), _month_end(self.year, start_month + 2)

        if self.period_type == PeriodType.YEAR:
            return dt.date(self.year, 1, 1), dt.date(self.year, 12, 31)

        return None, None

    def contains(self, day: dt.date) -> bool:
        start, end = self.resolve()
        if start is not None and day < start:
            return False
        if end is not None and day > end:
            return False
        return True

    @property
    def label(self) -> str:
        """Human-readable (pt-BR) label for the period."""
        if self.period_type == PeriodType.ALL:
            return "Todo o período"
        if self.period_type == PeriodType.MONTH and self.year and self.month:
            return f"{MONTH_NAMES_PT[self.month]} de {self.year}"
        if self.period_type == PeriodType.QUARTER and self.year and self.quarter:
            return f"{self.quarter}º trimestre de {self.year}"
        if self.period_type == PeriodType.YEAR and self.year:
            return str(self.year)
        if self.period_type == PeriodType.LAST_MONTHS and self.months:
            if self.months == 1:
                return "Último mês"
            return f"Últimos {self.months} meses"
        if self.period_type == PeriodType.CUSTOM:
            s = self.start_date.strftime("%d/%m/%Y") if self.start_date else "?"
            e = self.end_date.strftime("%d/%m/%Y") if self.end_date else "?"
            return f"{s} a {e}"
        return "Período desconhecido"


def short_month_label(year: int, month: int) -> str:
    """Chart-axis label, e.g. "out. de 2026"."""
    return f"{MONTH_ABBR_PT[month]}. de {year}"
