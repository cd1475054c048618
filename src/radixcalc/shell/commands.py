"""
Command Dispatcher — строки, начинающиеся с ':'

Команды меняют конфигурацию CalculatorState, никогда не историю:
- :base <digit>   основание одной цифрой (0 означает 36, "Z+1")
- :digits <value> точность, записанная в активном основании
- :radians, :degrees
- :debug          переключение подробного журнала
- :help
- :test           прогон встроенного набора выражений на свежем состоянии

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Некорректная команда поднимает InvalidConfiguration, состояние не меняется
2. Имена команд без учёта регистра; пробелы, табуляция и '_' в аргументах игнорируются
"""

import logging
import random
from dataclasses import dataclass
from typing import Final, Optional

from radixcalc.core.domain.calculator_state import AngleMode, CalculatorState
from radixcalc.core.errors import CalculatorError, InvalidConfiguration
from radixcalc.core.math.alphabet import MAX_BASE, base_name, base_symbol, digit_value
from radixcalc.core.math.conversion import IGNORED_CHARACTERS, format_complex, format_integer
from radixcalc.expression.evaluator import evaluate
from radixcalc.expression.lexer import COMMAND_PREFIX, is_command_line
from radixcalc.expression.tokens import CONSTANT_NAMES, FUNCTION_NAMES

logger = logging.getLogger(__name__)

PACKAGE_LOGGER: Final[str] = "radixcalc"


@dataclass(frozen=True)
class CommandResult:
    """Итог команды: сообщение для пользователя."""

    success: bool
    message: str


# =============================================================================
# СПРАВКА
# =============================================================================

_COMMAND_HELP: Final[tuple[tuple[str, str], ...]] = (
    (":base <digit>", "Set number base (2 to Z+1, 0 for Z+1)"),
    (":digits <value>", "Set display precision, written in the active base"),
    (":radians", "Switch angle units to radians"),
    (":degrees", "Switch angle units to degrees"),
    (":debug", "Toggle debug logging"),
    (":help", "Show this help"),
    (":test", "Run the built-in self test"),
)

_CONSTANT_HELP: Final[dict[str, str]] = {
    "pi": "Ratio of a circle's circumference to its diameter",
    "e": "Base of the natural logarithm",
    "gamma": "Euler-Mascheroni constant",
    "phi": "Golden ratio",
    "rand": "Uniform random number in [0, 1)",
    "grand": "Standard normal random number",
}

_OPERATOR_HELP: Final[tuple[tuple[str, str], ...]] = (
    ("+ -", "Addition and subtraction"),
    ("* / %", "Multiplication, division and floored modulus"),
    ("^", "Exponentiation (right associative)"),
    ("[re, im]", "Complex literal"),
    ("&", "Most recent result"),
    ("@k", "k-th result (1-based, decimal)"),
)


def help_text() -> str:
    lines = ["Commands:"]
    lines.extend(f"  {name:<18}{description}" for name, description in _COMMAND_HELP)
    lines.append("")
    lines.append("Constants (@name or $name):")
    lines.extend(f"  @{name:<17}{_CONSTANT_HELP[name]}" for name in CONSTANT_NAMES)
    lines.append("")
    lines.append("Unary functions:")
    lines.append("  " + " ".join(f"#{name}" for name in FUNCTION_NAMES))
    lines.append("")
    lines.append("Operators:")
    lines.extend(f"  {symbol:<18}{description}" for symbol, description in _OPERATOR_HELP)
    return "\n".join(lines)


# =============================================================================
# САМОПРОВЕРКА
# =============================================================================

# (строка ввода, ожидаемый вывод); команды внутри набора меняют состояние прогона
SELF_TEST_CASES: Final[tuple[tuple[str, str], ...]] = (
    ("2+3*4", "14"),
    ("(1+2)*3", "9"),
    ("--1+2*3", "7"),
    ("1---3", "-2"),
    ("2^(3^2)", "512"),
    ("(2^3)^2", "64"),
    ("2^10", "1 024"),
    ("1 2 3 4 5", "12 345"),
    ("1/3+1/3+1/3-1", "0"),
    ("1/(1+1/(1+1/(1+1/2)))", "0.625"),
    ("[3,4]*[1,-1]", "[7, 1]"),
    ("#sqrt(-1)", "[0, 1]"),
    ("#sqrt-1-1", "[-1, 1]"),
    ("-#sin(@pi/2)", "-1"),
    ("#sin(@pi/4)", "0.707 106 781 187~"),
    ("#log(100)", "2"),
    ("-#cos#sin0", "-1"),
    ("7%3", "1"),
    ("-7%3", "2"),
    ("#fact 5", "120"),
    (":base C", "Base set to Dozenal (C)."),
    ("1/(1+1/(1+1/(1+1/2)))", "0.76"),
    ("B+1", "10"),
    (":digits 20", "Precision set to 20 digits."),
    ("5^-25", "1.86 BA3 547 200 980 95A 405 483~ :-17"),
    (
        "5^-25*[-3.24,-4.1b]",
        "[-5.58 BA6 424 28A 6A9 238 829 27A~ :-17, -7.17 49A 618 591 429 757 6B6 512~ :-17]",
    ),
    (":digits 10", "Precision set to 10 digits."),
    (":degrees", "Angle units set to degrees."),
    ("#sin76", "1"),
    (":radians", "Angle units set to radians."),
    (":base A", "Base set to Decimal (A)."),
)


def run_self_test(rng: Optional[random.Random] = None) -> tuple[int, int]:
    """Прогон SELF_TEST_CASES на изолированном состоянии; возвращает (passed, total)."""
    state = CalculatorState()
    passed = 0
    for line, expected in SELF_TEST_CASES:
        try:
            actual = execute(line, state, rng)
        except CalculatorError as exc:
            actual = f"Error: {exc}"
        if actual == expected:
            passed += 1
        else:
            logger.warning("Self test %r: expected %r, got %r", line, expected, actual)
    return passed, len(SELF_TEST_CASES)


# =============================================================================
# КОМАНДЫ
# =============================================================================


def _strip_ignored(text: str) -> str:
    return "".join(char for char in text if char not in IGNORED_CHARACTERS)


def _split_command(line: str) -> tuple[str, str]:
    """':DIGits 2 0' -> ('digits', '2 0')"""
    body = line.lstrip("".join(IGNORED_CHARACTERS))
    if not body.startswith(COMMAND_PREFIX):
        raise InvalidConfiguration(f"Not a command line: {line!r}")
    body = body[len(COMMAND_PREFIX):].lstrip()
    end = 0
    while end < len(body) and body[end].isascii() and body[end].isalpha():
        end += 1
    return body[:end].lower(), body[end:]


def _require_no_argument(name: str, argument: str) -> None:
    if _strip_ignored(argument):
        raise InvalidConfiguration(f"Invalid characters after :{name}: {argument.strip()!r}")


def _set_base(state: CalculatorState, argument: str) -> CommandResult:
    text = _strip_ignored(argument)
    if not text:
        raise InvalidConfiguration("Missing base value")
    if len(text) != 1:
        raise InvalidConfiguration(f"Base must be a single digit, got {text!r}")
    value = digit_value(text)
    if value is None:
        raise InvalidConfiguration(f"Invalid base value: {text!r}")
    state.set_base(MAX_BASE if value == 0 else value)
    return CommandResult(True, f"Base set to {base_name(state.base)} ({base_symbol(state.base)}).")


def _set_digits(state: CalculatorState, argument: str) -> CommandResult:
    text = _strip_ignored(argument)
    if not text:
        raise InvalidConfiguration("Missing precision value")
    value = 0
    for char in text:
        digit = digit_value(char, state.base)
        if digit is None:
            raise InvalidConfiguration(
                f"Precision must be a positive integer in base {state.base}, got {text!r}"
            )
        value = value * state.base + digit
    state.set_digits(value)
    return CommandResult(True, f"Precision set to {format_integer(value, state.base)} digits.")


def _toggle_debug(state: CalculatorState) -> CommandResult:
    state.debug = not state.debug
    level = logging.DEBUG if state.debug else logging.WARNING
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    return CommandResult(True, "Debug enabled" if state.debug else "Debug disabled")


def dispatch_command(line: str, state: CalculatorState) -> CommandResult:
    """
    Выполнение одной командной строки.

    Raises:
        InvalidConfiguration: Неизвестная команда или недопустимый аргумент
    """
    name, argument = _split_command(line)
    logger.debug("Command %r with argument %r", name, argument)

    if name == "base":
        return _set_base(state, argument)
    if name == "digits":
        return _set_digits(state, argument)

    _require_no_argument(name, argument)
    if name == "radians":
        state.set_angle_mode(AngleMode.RADIANS)
        return CommandResult(True, "Angle units set to radians.")
    if name == "degrees":
        state.set_angle_mode(AngleMode.DEGREES)
        return CommandResult(True, "Angle units set to degrees.")
    if name == "debug":
        return _toggle_debug(state)
    if name == "help":
        return CommandResult(True, help_text())
    if name == "test":
        passed, total = run_self_test()
        return CommandResult(passed == total, f"{passed}/{total} tests passed.")
    raise InvalidConfiguration(f"Unknown command: {line.strip()}")


def execute(line: str, state: CalculatorState, rng: Optional[random.Random] = None) -> str:
    """
    Одна строка REPL: команда либо выражение; возвращает текст ответа.

    Raises:
        CalculatorError: Ошибка команды или вычисления
    """
    if is_command_line(line):
        return dispatch_command(line, state).message
    result = evaluate(line, state, rng)
    return format_complex(result, state.base, state.digits)
