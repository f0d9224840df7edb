"""Ledger records, balance aggregation, read-side queries, and spreadsheet import."""
from .store import LedgerStore
from .schemas import PeriodFilter, PeriodType
from .loader import import_file, parse_file, ImportResult, RowError
from .seed import seed_demo_data
