"""Command-line driver that feeds keys to a Calculator."""

from __future__ import annotations

import argparse
import logging
import sys

from keycalc.config import load_settings
from keycalc.core import Calculator
from keycalc.exceptions import CalculatorError
from keycalc.history import HistoryService
from keycalc.keys import split_keys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keycalc",
        description="Press calculator keys and print the resulting display.",
        epilog="Example: keycalc 5+3x2=   or   keycalc 9 r",
    )
    parser.add_argument(
        "keys",
        nargs="+",
        help="Keys to press; tokens are split into characters unless they "
        "name a key such as Enter or Backspace",
    )
    parser.add_argument(
        "--history",
        action="store_true",
        help="Also print every evaluation recorded along the way",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: KEYCALC_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except CalculatorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    history = HistoryService(settings)
    calc = Calculator(history=history, settings=settings)
    calc.press_many(split_keys(args.keys))

    if args.history:
        for index, entry in enumerate(history.entries):
            print(f"{index}: {entry}")
    if calc.expression:
        print(calc.expression)
    print(calc.operand)
    return 0


if __name__ == "__main__":
    sys.exit(main())
