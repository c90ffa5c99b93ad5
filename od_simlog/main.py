# od_simlog/main.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional
from zipfile import BadZipFile

from openpyxl.utils.exceptions import InvalidFileException

from .config import LogConfig, ParserConfig
from .generator import generate_log, write_report
from .parser import parse_log
from .records import write_records

logger = logging.getLogger(__name__)

GENERATE_LOG = "generate_log"
PARSE_LOG = "parse_log"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="od-simlog",
        description="Generate a narrative log from a protection sim workbook, or parse one back.",
    )
    parser.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser(
        GENERATE_LOG,
        help="Generate a narrative log from a sim file",
        epilog=f"Example:\n  od-simlog {GENERATE_LOG} --sim sim.xlsm --result sim.txt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    gen.add_argument("--sim", default="", help="Path to the sim file")
    gen.add_argument("--result", default="", help='Path to the result file; "" or "std" prints to stdout')
    gen.add_argument("--hour", type=int, default=0, help="Generate only this hour (default: all hours)")
    gen.set_defaults(print_help=gen.print_help)

    prs = sub.add_parser(
        PARSE_LOG,
        help="Parse a narrative log into per-hour records",
        epilog=f"Example:\n  od-simlog {PARSE_LOG} --log sim.txt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    prs.add_argument("--log", default="", help="Path to the txt log file")
    prs.add_argument("--result", default="", help="Path to a .json or .xlsx result file; default prints JSON")
    prs.add_argument("--debug", action="store_true", help="Enable debug logging")
    prs.set_defaults(print_help=prs.print_help)

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")


def _run_generate(args: argparse.Namespace) -> int:
    logger.info("Generating log for sim file: %s", args.sim)
    try:
        result = generate_log(args.sim, hour=args.hour or None, config=LogConfig())
    except (OSError, InvalidFileException, BadZipFile) as err:
        print(f"Error on opening file: {err}")
        return 1

    if result.error is not None:
        print(result.error)
    write_report(result.report, args.result)
    return 0 if result.ok else 1


def _run_parse(args: argparse.Namespace) -> int:
    logger.info("Parsing %s", args.log)
    try:
        result = parse_log(args.log, ParserConfig(debug=args.debug))
    except OSError as err:
        print(f"Error on reading log file: {err}")
        return 1

    if result.error is not None:
        print(result.error)
    write_records(result.records, args.result)
    return 0 if result.ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_usage()
        return 1

    level = "DEBUG" if getattr(args, "debug", False) else args.log_level
    _configure_logging(level)

    if args.command == GENERATE_LOG:
        if not args.sim:
            args.print_help()
            return 1
        return _run_generate(args)

    if not args.log:
        args.print_help()
        return 1
    return _run_parse(args)


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
