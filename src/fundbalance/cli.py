#!/usr/bin/env python3
"""
Command-line interface for the fund bucket rebalancer.

Usage:
    fundbalance serve --port 8080
    fundbalance buckets
    fundbalance rebalance --threshold 0.05
    fundbalance history --limit 20
    fundbalance show 3
    fundbalance add-fund 1 --name "Bond Fund" --code 000001 --current 50 --weight 0.5
    fundbalance edit-fund 1 0 --current 70
    fundbalance delete-fund 1 0
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from fundbalance.app_context import AppContext
from fundbalance.config.logging_config import setup_logging
from fundbalance.config.settings import LOG_LEVELS, get_settings
from fundbalance.core.result import capture
from fundbalance.domain.models import Bucket, FundPatch, RebalanceRecord
from fundbalance.domain.views import RebalanceResult
from fundbalance.services import summarize_suggestions

logger = logging.getLogger(__name__)


def print_buckets(buckets: list[Bucket], out: TextIO) -> None:
    """Print the portfolio grouped by bucket."""
    for bi, bucket in enumerate(buckets):
        out.write(f"\n[{bi}] {bucket.name} (target {bucket.target_rate * 100:.1f}%)\n")
        out.write("-" * 60 + "\n")
        for fi, fund in enumerate(bucket.funds):
            out.write(
                f"  {fi}. {fund.name} ({fund.code}) | current {fund.current:.2f}"
                f" | weight {fund.weight * 100:.1f}%\n"
            )


def print_rebalance(result: RebalanceResult, record: RebalanceRecord, out: TextIO) -> None:
    """Print the rebalance order list."""
    out.write(
        f"\nRebalance #{record.record_id} | threshold {result.threshold * 100:.1f}%"
        f" | total value {result.total_value:.2f}\n"
    )
    out.write("-" * 60 + "\n")
    for bucket in result.buckets:
        for s in bucket.suggestions:
            out.write(
                f"{s.fund_name} ({s.fund_code}) | current {s.current_value:.2f}"
                f" | target {s.target_value:.2f} | {s.advice.value}"
                f" | diff {s.diff_value:.2f}\n"
            )


def print_history(records: list[RebalanceRecord], out: TextIO) -> None:
    """Print record summaries."""
    for r in records:
        out.write(
            f"#{r.record_id} | {r.created_at:%Y-%m-%d %H:%M:%S} | threshold"
            f" {r.threshold * 100:.1f}% | total value {r.total_value:.2f}\n"
        )


def print_record(record: RebalanceRecord, out: TextIO) -> None:
    """Print one record with suggestions and derived stats."""
    stats = summarize_suggestions(record.suggestions)
    print_history([record], out)
    for s in record.suggestions:
        out.write(f"  {s.advice.value:<4} {s.fund_name} ({s.fund_code}): {s.reason}\n")
    out.write(
        f"BUY {stats.buy_count} ({stats.total_buy_amount:.2f}) | "
        f"SELL {stats.sell_count} ({stats.total_sell_amount:.2f}) | "
        f"HOLD {stats.hold_count}\n"
    )


def serve(host: str, port: int) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from fundbalance.main import app

    uvicorn.run(app, host=host, port=port)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="fundbalance",
        description="Bucket-based fund portfolio rebalancer",
    )
    parser.add_argument("--data-dir", type=Path, default=None, help="Data directory")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Overrides FUNDBALANCE_LOG_LEVEL",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=settings.host)
    serve_p.add_argument("--port", type=int, default=settings.port)

    sub.add_parser("buckets", help="Show current buckets and funds")

    rebalance_p = sub.add_parser("rebalance", help="Run a rebalance analysis")
    rebalance_p.add_argument(
        "--threshold",
        default=None,
        help="Tolerance as a fraction, e.g. 0.05 for 5%%",
    )

    history_p = sub.add_parser("history", help="List recent rebalance runs")
    history_p.add_argument("--limit", type=int, default=settings.history_default_limit)

    show_p = sub.add_parser("show", help="Show one rebalance run in detail")
    show_p.add_argument("record_id", type=int)

    add_p = sub.add_parser("add-fund", help="Append a fund to a bucket")
    add_p.add_argument("bucket_index", type=int)
    add_p.add_argument("--name", required=True)
    add_p.add_argument("--code", required=True)
    add_p.add_argument("--current", required=True)
    add_p.add_argument("--weight", required=True, help="Share of the bucket, in (0, 1]")

    edit_p = sub.add_parser("edit-fund", help="Change one or more fields of a fund")
    edit_p.add_argument("bucket_index", type=int)
    edit_p.add_argument("fund_index", type=int)
    for name in ("name", "code", "current", "weight"):
        edit_p.add_argument(f"--{name}", default=None)

    delete_p = sub.add_parser("delete-fund", help="Remove a fund")
    delete_p.add_argument("bucket_index", type=int)
    delete_p.add_argument("fund_index", type=int)

    return parser


def main(argv: Optional[list[str]] = None, out: TextIO = sys.stdout) -> int:
    """CLI entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.command == "serve":
        serve(args.host, args.port)
        return 0

    context = AppContext(data_dir=args.data_dir)
    try:
        result = capture(lambda: run_command(context, args, out))
    finally:
        context.close()

    if not result.is_ok:
        logger.error("%s failed: %s", args.command, result.error.message)
        out.write(f"Error: {result.error.message}\n")
        return 1
    return 0


def run_command(context: AppContext, args: argparse.Namespace, out: TextIO) -> None:
    """Initialize the context and execute one non-server command."""
    context.initialize()
    portfolio = context.portfolio

    if args.command == "buckets":
        print_buckets(portfolio.list_buckets(), out)
    elif args.command == "rebalance":
        result, record = context.rebalance.run(args.threshold)
        print_rebalance(result, record, out)
    elif args.command == "history":
        print_history(context.history.list_records(args.limit), out)
    elif args.command == "show":
        print_record(context.history.get_record(args.record_id), out)
    elif args.command == "add-fund":
        buckets = portfolio.add_fund(
            args.bucket_index, args.name, args.code, args.current, args.weight
        )
        out.write("Fund added\n")
        print_buckets(buckets, out)
    elif args.command == "edit-fund":
        patch = FundPatch(
            name=args.name,
            code=args.code,
            current=args.current,
            weight=args.weight,
        )
        buckets = portfolio.edit_fund(args.bucket_index, args.fund_index, patch)
        out.write("Fund updated\n")
        print_buckets(buckets, out)
    elif args.command == "delete-fund":
        buckets = portfolio.delete_fund(args.bucket_index, args.fund_index)
        out.write("Fund deleted\n")
        print_buckets(buckets, out)


if __name__ == "__main__":
    sys.exit(main())
