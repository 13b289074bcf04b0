"""Command line entry point: ``fairdraw participants.csv -n 7``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import get_settings
from .errors import FairDrawError
from .logging_utils import setup_logging
from .report import export_json, export_winners_csv, render_text_report
from .session import DrawSession
from .workflows import read_csv_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="fairdraw",
        description="Draw winners from a CSV participant list with an auditable trail.",
    )
    parser.add_argument("csv_file", type=Path, help="participant CSV file")
    parser.add_argument(
        "-n",
        "--winners",
        type=int,
        default=settings.winner_count,
        help="number of winners to draw (default: %(default)s)",
    )
    parser.add_argument(
        "--dedupe",
        action=argparse.BooleanOptionalAction,
        default=settings.deduplicate,
        help="drop rows repeating an earlier email address",
    )
    parser.add_argument(
        "--encoding",
        default=settings.csv_encoding,
        help="encoding of the CSV file (default: %(default)s)",
    )
    parser.add_argument("--report", type=Path, help="write the text audit report here")
    parser.add_argument("--json", type=Path, help="write the JSON export here")
    parser.add_argument("--csv", type=Path, help="write the winners CSV here")
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a draw from the command line and return the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        raw_text = read_csv_file(args.csv_file, encoding=args.encoding)
    except OSError as exc:
        print(f"error: cannot read {args.csv_file}: {exc}", file=sys.stderr)
        return 1
    except (UnicodeDecodeError, LookupError) as exc:
        print(
            f"error: cannot decode {args.csv_file} as {args.encoding}: {exc}",
            file=sys.stderr,
        )
        return 1

    session = DrawSession(deduplicate=args.dedupe)
    report = session.load_csv(raw_text)
    print(f"Loaded {len(report.participants)} participants ({report.dialect.label})")

    try:
        result = session.draw(args.winners)
    except FairDrawError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(f"Draw {result.draw_id} at {result.timestamp.isoformat()}")
    for rank, winner in result.ranked_winners():
        print(f"{rank:>3}. {winner.name} <{winner.email}>")

    outputs = (
        (args.report, render_text_report),
        (args.json, export_json),
        (args.csv, export_winners_csv),
    )
    for path, render in outputs:
        if path is None:
            continue
        path.write_text(render(result), encoding="utf-8")
        logger.info("Wrote %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
