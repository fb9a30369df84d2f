"""Run one transcript export to Google Sheets from the command line.

Usage:
    python scripts/run_export.py --from-date 2025-01-01 --to-date 2025-01-07 --env qa
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from shiftsheet.core.config import AppSettings
from shiftsheet.core.exceptions import ShiftSheetError
from shiftsheet.core.logging import configure_logging
from shiftsheet.export.exporter import ShiftExporter
from shiftsheet.models.export import DateRange
from shiftsheet.persistence import create_persistence

logger = logging.getLogger("shiftsheet.scripts.run_export")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export processed transcripts to Google Sheets")
    parser.add_argument("--from-date", required=True, help="Inclusive ISO-8601 start (e.g. 2025-01-01T00:00:00Z)")
    parser.add_argument("--to-date", required=True, help="Inclusive ISO-8601 end; a bare date covers the whole day")
    parser.add_argument("--env", default=None, help="Index namespace (default: SHIFTSHEET_DEFAULT_NAMESPACE)")
    parser.add_argument("--merge-mode", choices=["append", "refresh"], default=None,
                        help="append after a header check, or clear and rewrite the sheet")
    parser.add_argument("--agent", action="append", default=None,
                        help="Restrict to this client/agent tag (repeatable)")
    return parser


def main(argv: list[str] | None = None, settings: AppSettings | None = None,
         collaborators: tuple | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if settings is None:
            settings = AppSettings()
        configure_logging(settings.log_level)
        date_range = DateRange.parse(args.from_date, args.to_date)
        query_client, sheet_store = collaborators or create_persistence(settings)
        exporter = ShiftExporter(settings=settings, query_client=query_client, sheet_store=sheet_store)
        result = exporter.run(date_range, namespace=args.env, allow_list=args.agent,
                              merge_mode=args.merge_mode)
    except (ShiftSheetError, ValidationError) as exc:
        logger.error("Export failed: %s", exc)
        print(f"Export failed: {exc}", file=sys.stderr)
        return 1

    print(result.message)
    if result.has_data:
        print(f"  fetched={result.fetched_count} stored={result.stored_count} "
              f"relabelled={result.relabelled_count}")
        return 0
    return 2


if __name__ == "__main__":
    sys.exit(main())
