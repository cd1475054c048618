"""
Token model

Закрытые перечисления операторов, функций и констант разрешаются один
раз во время лексического анализа; вычислитель работает только с
вариантами перечислений, без поиска по строкам.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class TokenKind(str, Enum):
    NUMBER = "number"
    COMPLEX_OPEN = "complex_open"
    COMPLEX_SEPARATOR = "complex_separator"
    COMPLEX_CLOSE = "complex_close"
    BINARY_OP = "binary_op"
    UNARY_FUNC = "unary_func"
    CONSTANT = "constant"
    HISTORY_REF = "history_ref"
    LPAREN = "lparen"
    RPAREN = "rparen"
    COMMAND = "command"
    END = "end"


class BinaryOperator(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULUS = "%"
    POWER = "^"


class UnaryFunction(str, Enum):
    """Префиксные функции '#name'; NEGATE порождается только унарным минусом."""

    SQRT = "sqrt"
    ABS = "abs"
    LN = "ln"
    LOG = "log"
    EXP = "exp"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    ERF = "erf"
    FACT = "fact"
    CEIL = "ceil"
    FLOOR = "floor"
    ROUND = "round"
    INT = "int"
    FRAC = "frac"
    RE = "re"
    IM = "im"
    ANGLE = "angle"
    SIGN = "sign"
    NEGATE = "negate"


class ConstantName(str, Enum):
    PI = "pi"
    E = "e"
    GAMMA = "gamma"
    PHI = "phi"
    RAND = "rand"
    GRAND = "grand"


FUNCTION_NAMES: dict[str, UnaryFunction] = {
    function.value: function for function in UnaryFunction if function is not UnaryFunction.NEGATE
}

CONSTANT_NAMES: dict[str, ConstantName] = {constant.value: constant for constant in ConstantName}


@dataclass(frozen=True)
class NumberLiteral:
    """Цифры литерала в активном основании (значения 0..base-1)."""

    integer_digits: tuple[int, ...]
    fraction_digits: tuple[int, ...]


TokenValue = Union[NumberLiteral, BinaryOperator, UnaryFunction, ConstantName, int, str, None]


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    position: int
    text: str
    # HISTORY_REF: номер записи (1-based) или None для '&'
    value: Optional[TokenValue] = None
