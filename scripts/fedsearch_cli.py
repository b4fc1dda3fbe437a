#!/usr/bin/env python3
"""
Federated search from the command line: expands the query with DataMuse,
searches Europeana and PLOS in parallel and prints one ranked list.

Reads EUROPEANA_API_KEY (and the other settings) from the environment or the
project `.env`; exits with status 1 if the key is missing.

Examples:
  uv run python scripts/fedsearch_cli.py "ancient pottery"
  uv run python scripts/fedsearch_cli.py "cat dog" --limit 5
  uv run python scripts/fedsearch_cli.py "climate change" --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List

_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from fedsearch_server.core.config import load_config, load_env
from fedsearch_server.core.error import ConfigurationError, EmptyQueryError
from fedsearch_server.core.logger import setup_logger
from fedsearch_server.core.pipeline import search_report
from fedsearch_server.models.schema import ResultRecord


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synonym-expanded federated search (Europeana + PLOS)")
    parser.add_argument("query", help="Free-text query")
    parser.add_argument("--limit", type=int, default=0, help="Print at most N results (default: all)")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def format_table(records: List[ResultRecord], width: int = 60) -> str:
    lines = [f"{'#':>3}  {'score':>5}  {'source':<10}  title"]
    for i, r in enumerate(records, 1):
        title = r["title"] if len(r["title"]) <= width else r["title"][: width - 3] + "..."
        lines.append(f"{i:>3}  {r['normalized_score']:.2f}  {r['source']:<10}  {title}")
        lines.append(f"{'':>3}  {'':>5}  {'':<10}  {r['link']}")
    return "\n".join(lines)


def main(argv=None) -> int:
    args = _parse_args(argv)
    setup_logger(name="fedsearch_server", level=args.log_level)
    load_env()
    try:
        config = load_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        report = asyncio.run(search_report(args.query, config=config))
    except EmptyQueryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.limit > 0:
        report["results"] = report["results"][: args.limit]

    if args.json:
        print(json.dumps(report, ensure_ascii=False, indent=2))
        return 0

    print(f"Query used: {report['query_used'] or '(empty)'}")
    print(f"Found: {report['n_found']}  by source: {report['by_source']}")
    for provider, err in report["errors"].items():
        print(f"  ! {provider}: {err}")
    if report["results"]:
        print(format_table(report["results"]))
    else:
        print("No results.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
