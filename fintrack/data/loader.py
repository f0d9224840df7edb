"""
Spreadsheet import: decode CSV/Excel uploads, normalise rows, feed the store.
"""
from __future__ import annotations

import csv
import datetime as dt
import io
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pandas as pd
from pydantic import ValidationError

from fintrack.config import ALLOWED_IMPORT_EXTENSIONS, LENIENT_IMPORT_DATES, MAX_UPLOAD_BYTES
from fintrack.data.normalize import detect_delimiter, normalize_headers, normalize_record
from fintrack.data.schemas import Transaction, TransactionInsert
from fintrack.data.store import LedgerStore
from fintrack.errors import ImportFileError


@dataclass
class RowError:
    """A source row that was not imported. `line` is 1-based in the file."""
    line: int
    message: str


@dataclass
class ImportResult:
    count: int = 0
    transactions: list[Transaction] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)


@dataclass
class ParsedRows:
    rows: list[tuple[int, TransactionInsert]] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Upload checks
# ---------------------------------------------------------------------------

def file_extension(filename: str) -> str:
    return Path(filename or "").suffix.lower()


def check_upload(filename: Optional[str], size: int) -> str:
    """Reject unsupported or oversized files up front. Returns the extension."""
    if not filename:
        raise ImportFileError("Nenhum arquivo enviado")
    ext = file_extension(filename)
    if ext not in ALLOWED_IMPORT_EXTENSIONS:
        raise ImportFileError("Apenas arquivos de planilha são permitidos (.csv, .xlsx, .xls)")
    if size > MAX_UPLOAD_BYTES:
        raise ImportFileError(f"Arquivo excede o limite de {MAX_UPLOAD_BYTES // (1024 * 1024)}MB")
    return ext


# ---------------------------------------------------------------------------
# Table readers → (headers, [(line_no, values), ...])
# ---------------------------------------------------------------------------

def decode_text(content: bytes) -> str:
    """UTF-8 (BOM tolerated), falling back to latin-1 for legacy bank exports."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def read_csv_table(text: str) -> tuple[list[str], list[tuple[int, list[str]]]]:
    """Split on CRLF/LF, drop blank lines, first remaining line is the header."""
    lines = [(no, line) for no, line in enumerate(re.split(r"\r?\n", text), 1) if line.strip()]
    if not lines:
        return [], []

    delimiter = detect_delimiter(lines[0][1])

    def split(line: str) -> list[str]:
        return next(csv.reader([line], delimiter=delimiter))

    headers = [h.strip() for h in split(lines[0][1])]
    rows = [(no, split(line)) for no, line in lines[1:]]
    return headers, rows


def read_excel_table(content: bytes) -> tuple[list[str], list[tuple[int, list[str]]]]:
    """First sheet, every cell as text; blank rows dropped like blank CSV lines."""
    try:
        df = pd.read_excel(io.BytesIO(content), sheet_name=0, header=None, dtype=str)
    except Exception as exc:
        raise ImportFileError(f"Erro ao ler planilha: {exc}")
    df = df.fillna("")

    table = []
    for idx, values in enumerate(df.values.tolist(), 1):
        cells = [str(v).strip() for v in values]
        if any(cells):
            table.append((idx, cells))
    if not table:
        return [], []

    headers = table[0][1]
    # Trailing empty header cells are sheet padding, not columns
    while headers and not headers[-1]:
        headers = headers[:-1]
    width = len(headers)
    rows = [(no, cells[:width] if not any(cells[width:]) else cells) for no, cells in table[1:]]
    return headers, rows


def read_table(content: bytes, filename: str) -> tuple[list[str], list[tuple[int, list[str]]]]:
    if file_extension(filename) in (".xlsx", ".xls"):
        return read_excel_table(content)
    return read_csv_table(decode_text(content))


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"{err.get('msg', 'inválido')} em {loc}" if loc else err.get("msg", "inválido")


def parse_rows(
    headers: list[str],
    rows: list[tuple[int, list[str]]],
    today: Optional[dt.date] = None,
    lenient_dates: bool = LENIENT_IMPORT_DATES,
) -> ParsedRows:
    """Map header synonyms and normalise each row, collecting per-row errors."""
    canonical = normalize_headers(headers)
    parsed = ParsedRows()

    for line_no, values in rows:
        if len(values) != len(canonical):
            parsed.errors.append(RowError(
                line_no, f"esperadas {len(canonical)} colunas, encontradas {len(values)}",
            ))
            continue
        record = dict(zip(canonical, (v.strip() for v in values)))
        try:
            parsed.rows.append((line_no, normalize_record(record, today=today, lenient_dates=lenient_dates)))
        except ValidationError as exc:
            parsed.errors.append(RowError(line_no, _first_error(exc)))
        except ValueError as exc:
            parsed.errors.append(RowError(line_no, str(exc)))

    return parsed


def parse_file(
    content: bytes,
    filename: str,
    today: Optional[dt.date] = None,
    lenient_dates: bool = LENIENT_IMPORT_DATES,
) -> ParsedRows:
    headers, rows = read_table(content, filename)
    if not headers:
        raise ImportFileError("Arquivo vazio ou sem cabeçalho")
    return parse_rows(headers, rows, today=today, lenient_dates=lenient_dates)


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------

def import_file(
    store: LedgerStore,
    user_id: int,
    content: bytes,
    filename: str,
    today: Optional[dt.date] = None,
    lenient_dates: bool = LENIENT_IMPORT_DATES,
) -> ImportResult:
    """Parse an upload and create every valid row, in file order."""
    check_upload(filename, len(content))
    parsed = parse_file(content, filename, today=today, lenient_dates=lenient_dates)

    created = store.import_transactions(user_id, [row for _, row in parsed.rows])
    result = ImportResult(count=len(created), transactions=created, errors=parsed.errors)

    print(f"  Import {filename}: {result.count:,} transactions created, {len(result.errors):,} rows skipped")
    for err in result.errors[:10]:
        print(f"    - line {err.line}: {err.message}")
    return result
