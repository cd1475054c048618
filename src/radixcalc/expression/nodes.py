"""
Expression tree nodes

Дерево принадлежит вызову, который его построил; узлы неизменяемы.
"""

from dataclasses import dataclass
from typing import Optional, Union

from radixcalc.core.math.complex_number import Complex
from radixcalc.expression.tokens import BinaryOperator, ConstantName, UnaryFunction


@dataclass(frozen=True)
class Literal:
    value: Complex


@dataclass(frozen=True)
class BinaryOp:
    operator: BinaryOperator
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class UnaryFunc:
    function: UnaryFunction
    operand: "Node"


@dataclass(frozen=True)
class HistoryRef:
    # None означает последний результат ('&')
    index: Optional[int]


@dataclass(frozen=True)
class Constant:
    name: ConstantName


Node = Union[Literal, BinaryOp, UnaryFunc, HistoryRef, Constant]
