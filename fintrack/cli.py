#!/usr/bin/env python3
"""
Fintrack CLI — API server, import dry-runs, and Excel exports.

USAGE:
  python -m fintrack.cli serve                              # Start API server
  python -m fintrack.cli serve --port 8000 --reload

  python -m fintrack.cli preview extrato.csv                # Show how a file would import
  python -m fintrack.cli preview extrato.csv --lenient-dates

  python -m fintrack.cli export                             # Demo data → Excel report
  python -m fintrack.cli export --output relatorio.xlsx --period last_months --months 6
"""
from __future__ import annotations

import argparse
import os
import sys
from datetime import datetime
from pathlib import Path

from fintrack.config import EXPORTS_FOLDER, LENIENT_IMPORT_DATES, TYPE_LABELS_PT
from fintrack.data.loader import parse_file
from fintrack.data.schemas import PeriodFilter, PeriodType
from fintrack.data.seed import seed_demo_data
from fintrack.data.store import LedgerStore
from fintrack.errors import ImportFileError
from fintrack.reports import transactions_report


def _build_period(args) -> PeriodFilter | None:
    """Build a PeriodFilter from CLI args."""
    pt = getattr(args, "period", None)
    if pt is None:
        return None
    return PeriodFilter(
        period_type=PeriodType(pt),
        year=getattr(args, "year", None),
        month=getattr(args, "month", None),
        quarter=getattr(args, "quarter", None),
        months=getattr(args, "months", None),
    )


def cmd_preview(args) -> int:
    """Parse an import file without storing anything."""
    path = Path(args.file)
    if not path.is_file():
        print(f"File not found: {path}")
        return 1

    try:
        parsed = parse_file(path.read_bytes(), path.name, lenient_dates=args.lenient_dates)
    except ImportFileError as exc:
        print(f"Cannot import {path.name}: {exc.message}")
        return 1

    print("\n" + "=" * 70)
    print(f"  IMPORT PREVIEW — {path.name}")
    print("=" * 70)
    for line_no, tx in parsed.rows:
        print(f"  {line_no:>5}  {tx.date:%d/%m/%Y}  {TYPE_LABELS_PT[tx.type]:<8} "
              f"{tx.amount:>12}  {tx.category:<15} {tx.description}")

    if parsed.errors:
        print(f"\n  {len(parsed.errors)} rows would be skipped:")
        for err in parsed.errors:
            print(f"    line {err.line}: {err.message}")

    print(f"\n  {len(parsed.rows)} rows ready to import")
    return 0


def cmd_export(args) -> int:
    """Seed a demo ledger and write its Excel report."""
    store = LedgerStore()
    user = seed_demo_data(store)

    output = Path(args.output) if args.output else EXPORTS_FOLDER / f"transacoes_{datetime.now():%Y-%m-%d}.xlsx"
    path = transactions_report.generate_excel(store, user.id, output, _build_period(args))
    print(f"  Saved: {path}")
    return 0


def cmd_serve(args) -> int:
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Fintrack API on port {args.port}...")
    uvicorn.run("fintrack.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Fintrack — personal finance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    # preview subcommand
    preview_parser = subparsers.add_parser("preview", help="Dry-run a CSV/XLSX import")
    preview_parser.add_argument("file", help="Spreadsheet to parse")
    preview_parser.add_argument("--lenient-dates", action="store_true", default=LENIENT_IMPORT_DATES,
                                help="Use today's date for unreadable dates instead of skipping the row")
    preview_parser.set_defaults(func=cmd_preview)

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Write the demo Excel report")
    export_parser.add_argument("--output", help="Output .xlsx path")
    export_parser.add_argument("--period", choices=[p.value for p in PeriodType], help="Period type")
    export_parser.add_argument("--year", type=int, help="Year")
    export_parser.add_argument("--month", type=int, help="Month (1-12)")
    export_parser.add_argument("--quarter", type=int, help="Quarter (1-4)")
    export_parser.add_argument("--months", type=int, help="Window size for last_months")
    export_parser.set_defaults(func=cmd_export)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
