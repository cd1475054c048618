"""
REPL / CLI

    radixcalc [-e EXPR ...] [--base B] [--digits N] [--state-file PATH] [--no-state] [-v]

Без -e читает строки со stdin до EOF. Только здесь CalculatorError
перехватывается: печатается 'Error: <message>', работа продолжается.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from radixcalc import __version__
from radixcalc.core.domain.calculator_state import CalculatorState
from radixcalc.core.errors import CalculatorError
from radixcalc.core.math.alphabet import base_name, base_symbol
from radixcalc.shell.commands import PACKAGE_LOGGER, execute
from radixcalc.shell.storage import DEFAULT_STATE_PATH, StateStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PROMPT = "> "


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radixcalc",
        description="Arbitrary-precision complex calculator for bases 2 to 36",
    )
    parser.add_argument(
        "-e",
        "--expression",
        action="append",
        default=[],
        help="Evaluate EXPR (or run a :command) and exit; may be repeated",
    )
    parser.add_argument("--base", type=int, help="Active base (2..36)")
    parser.add_argument("--digits", type=int, help="Display precision in digits of the active base")
    parser.add_argument(
        "--state-file",
        type=Path,
        default=DEFAULT_STATE_PATH,
        help=f"State file (default: {DEFAULT_STATE_PATH})",
    )
    parser.add_argument("--no-state", action="store_true", help="Neither load nor save the state file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_line(line: str, state: CalculatorState, out: TextIO) -> bool:
    """Одна строка ввода; False, если строка завершилась ошибкой."""
    if not line.strip():
        return True
    try:
        reply = execute(line, state)
    except CalculatorError as exc:
        print(f"Error: {exc}", file=out)
        return False
    if reply:
        print(reply, file=out)
    return True


def _interactive(state: CalculatorState, stdin: TextIO, out: TextIO) -> None:
    print(
        f"radixcalc {__version__}: {base_name(state.base)} ({base_symbol(state.base)}), "
        f"{state.digits} digits, {state.angle_mode.value}. Type :help for help.",
        file=out,
    )
    interactive = stdin.isatty()
    while True:
        if interactive:
            print(PROMPT, end="", file=out, flush=True)
        line = stdin.readline()
        if not line:
            break
        run_line(line.rstrip("\n"), state, out)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    if args.verbose:
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

    store = None if args.no_state else StateStore(args.state_file)
    state = store.load() if store is not None else None
    if state is None:
        state = CalculatorState()

    try:
        if args.base is not None:
            state.set_base(args.base)
        if args.digits is not None:
            state.set_digits(args.digits)
    except CalculatorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    state.debug = args.verbose

    exit_code = 0
    try:
        if args.expression:
            for line in args.expression:
                if not run_line(line, state, sys.stdout):
                    exit_code = 1
        else:
            _interactive(state, sys.stdin, sys.stdout)
    except KeyboardInterrupt:
        print(file=sys.stdout)
    finally:
        if store is not None:
            try:
                store.save(state)
            except OSError as exc:
                logger.warning("Could not save state to %s: %s", store.path, exc)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
