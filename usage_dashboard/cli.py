#!/usr/bin/env python3
"""
Usage Dashboard CLI — summaries, Excel exports, and the API server.

USAGE:
  python -m usage_dashboard.cli usage                            # Default usage sheet
  python -m usage_dashboard.cli usage "Jan 2026 (School Wise)"   # Another catalogued sheet
  python -m usage_dashboard.cli usage ./export.csv --strict      # Local file, list bad cells
  python -m usage_dashboard.cli usage --json

  python -m usage_dashboard.cli newspapers                       # Every catalogued month
  python -m usage_dashboard.cli newspapers "March 2025" "April 2025"

  python -m usage_dashboard.cli export --output usage.xlsx       # Usage workbook
  python -m usage_dashboard.cli export --newspapers              # Newspaper workbook

  python -m usage_dashboard.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from usage_dashboard.config import (
    DEFAULT_USAGE_DATASET,
    EXPORTS_FOLDER,
    NEWSPAPER_DATASETS,
)
from usage_dashboard.data.loader import (
    load_all_newspaper_months,
    load_newspaper_month,
    load_usage_dataset,
)
from usage_dashboard.errors import RetrievalError
from usage_dashboard.reports import newspaper_report, usage_report


def _banner(title: str):
    print("\n" + "=" * 70)
    print(f"  USAGE DASHBOARD — {title}")
    print("=" * 70)


def _load_months(periods: list[str]) -> dict:
    if not periods:
        return load_all_newspaper_months()
    return {p: load_newspaper_month(p, allow_paths=True) for p in periods}


def cmd_usage(args):
    """Print the summary of one usage sheet."""
    table = load_usage_dataset(args.dataset, strict=args.strict, allow_paths=True)
    data = usage_report.generate_json(table, args.dataset)
    if args.json:
        print(json.dumps(data, indent=2))
        return

    s = data["summary"]
    _banner("USAGE SUMMARY")
    print(f"\n  Dataset:  {args.dataset}")
    print(f"  Layout:   {table.layout.value if table.layout else '(no header found)'}")
    print(f"  Periods:  {s['period_count']}    Series: {s['series_count']}")
    print(f"  Total:    {s['total_usage']:,.0f}")
    if s["top_series"]:
        top = s["top_series"]
        print(f"  Top:      {top['name']} ({top['total']:,.0f}, {top['share']:.1f}%)")
    if s["peak_period"]:
        print(f"  Peak:     {s['peak_period']['month']} ({s['peak_period']['total']:,.0f})")
    print(f"  Std dev:  {s['std_dev']:,.1f}    CV: {s['cv']:.2f} ({s['consistency']})")
    if s["growth_pct"] is not None:
        print(f"  Growth:   {s['growth_pct']:+.1f}%")

    if s["ranking"]:
        print(f"\n  TOP {len(s['ranking'])}:\n")
        for i, item in enumerate(s["ranking"], 1):
            print(f"  {i:<4}{item['name'][:40]:<42}{item['total']:>12,.0f}")

    if data["warnings"]:
        print(f"\n  {len(data['warnings'])} cell(s) degraded to 0:")
        for w in data["warnings"][:20]:
            print(f"    row {w['row']}, {w['column']}: {w['value']!r}")
    print("=" * 70 + "\n")


def cmd_newspapers(args):
    """Print ledger totals per month and the cross-month overview."""
    months = _load_months(args.periods)
    data = newspaper_report.generate_json(months)
    if args.json:
        print(json.dumps(data, indent=2))
        return

    o = data["overview"]
    _banner("NEWSPAPER SUBSCRIPTIONS")
    if not o["months"]:
        print("\n  No newspaper ledgers available.\n")
        return

    print(f"\n  {'MONTH':<18}{'PAPERS':>8}{'COPIES':>12}{'COST (₹)':>16}")
    for m in o["months"]:
        print(f"  {m['period']:<18}{m['newspapers']:>8}{m['total_copies']:>12,.0f}{m['total_price']:>16,.2f}")
    print(f"\n  Total cost:     ₹{o['total_price']:,.2f}")
    print(f"  Total copies:   {o['total_copies']:,.0f}")
    if o["peak_month"]:
        print(f"  Peak month:     {o['peak_month']['period']} (₹{o['peak_month']['total_price']:,.2f})")
    if o["top_newspaper"]:
        top = o["top_newspaper"]
        print(f"  Top newspaper:  {top['name']} ({top['share']:.1f}% of cost)")
    split = ", ".join(f"{lang['name']} {lang['value']:,.0f}" for lang in o["languages"])
    print(f"  Languages:      {split} (dominant: {o['dominant_language']})")
    print("=" * 70 + "\n")


def cmd_export(args):
    """Write a styled Excel workbook."""
    now = datetime.now()
    if args.newspapers:
        months = _load_months(args.periods or [])
        output = args.output or EXPORTS_FOLDER / f"Newspapers_{now:%Y%m%d}.xlsx"
        path = newspaper_report.generate_excel(months, output, generated=now)
    else:
        table = load_usage_dataset(args.dataset, allow_paths=True)
        slug = "".join(c if c.isalnum() else "_" for c in Path(args.dataset).stem).strip("_")
        output = args.output or EXPORTS_FOLDER / f"Usage_{slug}_{now:%Y%m%d}.xlsx"
        path = usage_report.generate_excel(table, output, args.dataset, generated=now)
    print(f"\n  Saved: {path}\n")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Usage Dashboard API on port {args.port}...")
    uvicorn.run("usage_dashboard.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Usage Dashboard — e-resource usage and newspaper subscription analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log loader activity")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # usage subcommand
    usage_parser = subparsers.add_parser("usage", help="Summarize a usage sheet")
    usage_parser.add_argument("dataset", nargs="?", default=DEFAULT_USAGE_DATASET,
                              help="Dataset id or CSV path")
    usage_parser.add_argument("--strict", action="store_true", help="Report cells that degraded to 0")
    usage_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    usage_parser.set_defaults(func=cmd_usage)

    # newspapers subcommand
    news_parser = subparsers.add_parser("newspapers", help="Summarize newspaper ledgers")
    news_parser.add_argument("periods", nargs="*", help=f"Months (default: all {len(NEWSPAPER_DATASETS)})")
    news_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    news_parser.set_defaults(func=cmd_newspapers)

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Export an Excel workbook")
    export_parser.add_argument("dataset", nargs="?", default=DEFAULT_USAGE_DATASET,
                               help="Usage dataset id or CSV path")
    export_parser.add_argument("--output", type=Path, help="Output .xlsx path")
    export_parser.add_argument("--newspapers", action="store_true", help="Export newspaper ledgers instead")
    export_parser.add_argument("--periods", nargs="*", help="Months to include with --newspapers")
    export_parser.set_defaults(func=cmd_export)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    try:
        args.func(args)
    except RetrievalError as exc:
        print(f"\n  ERROR: {exc}\n", file=sys.stderr)
        return 1
    except KeyError as exc:
        print(f"\n  ERROR: unknown dataset {exc}\n", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
