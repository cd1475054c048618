"""
Evaluator — вычисление дерева выражения над CalculatorState

Единственная точка входа для числовых строк REPL:
    evaluate(line, state) -> Complex

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ошибка любого подвыражения прерывает всю строку (исключение не глотается)
2. Результат добавляется в историю только после успешного вычисления строки
3. Результат округлён до рабочей точности состояния
"""

import logging
import random
from typing import Callable, Optional

from radixcalc.core.domain.calculator_state import CalculatorState
from radixcalc.core.math import constants, transcendental
from radixcalc.core.math.complex_number import Complex
from radixcalc.expression.lexer import tokenize
from radixcalc.expression.nodes import BinaryOp, Constant, HistoryRef, Literal, Node, UnaryFunc
from radixcalc.expression.parser import parse
from radixcalc.expression.tokens import BinaryOperator, ConstantName, UnaryFunction

logger = logging.getLogger(__name__)


class Evaluator:
    """
    Вычисляет деревья выражений с точностью и единицами углов состояния.

    rng подменяет общий генератор процесса для @rand и @grand.
    """

    def __init__(self, state: CalculatorState, rng: Optional[random.Random] = None):
        self.state = state
        self.rng = rng
        self._functions: dict[UnaryFunction, Callable[[Complex, int], Complex]] = {
            UnaryFunction.SQRT: transcendental.sqrt,
            UnaryFunction.ABS: transcendental.absolute,
            UnaryFunction.LN: transcendental.ln,
            UnaryFunction.LOG: lambda z, p: transcendental.log(z, self.state.base, p),
            UnaryFunction.EXP: transcendental.exp,
            UnaryFunction.SIN: self._angular(transcendental.sin),
            UnaryFunction.COS: self._angular(transcendental.cos),
            UnaryFunction.TAN: self._angular(transcendental.tan),
            UnaryFunction.ASIN: self._angular(transcendental.asin),
            UnaryFunction.ACOS: self._angular(transcendental.acos),
            UnaryFunction.ATAN: self._angular(transcendental.atan),
            UnaryFunction.ANGLE: self._angular(transcendental.angle),
            UnaryFunction.ERF: transcendental.erf,
            UnaryFunction.FACT: transcendental.factorial,
            UnaryFunction.SIGN: transcendental.sign,
            UnaryFunction.CEIL: lambda z, p: z.ceil(),
            UnaryFunction.FLOOR: lambda z, p: z.floor(),
            UnaryFunction.ROUND: lambda z, p: z.round_integer(),
            UnaryFunction.INT: lambda z, p: z.truncate(),
            UnaryFunction.FRAC: lambda z, p: z.fraction(),
            UnaryFunction.RE: lambda z, p: z.real_part(),
            UnaryFunction.IM: lambda z, p: z.imag_part(),
            UnaryFunction.NEGATE: lambda z, p: z.negate(),
        }

    def _angular(
        self, function: Callable[[Complex, int, str], Complex]
    ) -> Callable[[Complex, int], Complex]:
        return lambda z, p: function(z, p, self.state.angle_mode.value)

    # -------------------------------------------------------------------------
    # Узлы
    # -------------------------------------------------------------------------

    def evaluate_node(self, node: Node) -> Complex:
        precision = self.state.precision
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, BinaryOp):
            left = self.evaluate_node(node.left)
            right = self.evaluate_node(node.right)
            return self._binary(node.operator, left, right, precision)
        if isinstance(node, UnaryFunc):
            operand = self.evaluate_node(node.operand)
            return self._functions[node.function](operand, precision)
        if isinstance(node, HistoryRef):
            return self.state.resolve_history(node.index)
        if isinstance(node, Constant):
            return self._constant(node.name, precision)
        raise TypeError(f"Unknown expression node: {node!r}")

    def _binary(self, operator: BinaryOperator, left: Complex, right: Complex, precision: int) -> Complex:
        if operator is BinaryOperator.ADD:
            return left.add(right, precision)
        if operator is BinaryOperator.SUBTRACT:
            return left.sub(right, precision)
        if operator is BinaryOperator.MULTIPLY:
            return left.mul(right, precision)
        if operator is BinaryOperator.DIVIDE:
            return left.div(right, precision)
        if operator is BinaryOperator.MODULUS:
            return left.mod(right, precision)
        return transcendental.power(left, right, precision)

    def _constant(self, name: ConstantName, precision: int) -> Complex:
        if name is ConstantName.PI:
            value = transcendental.pi(precision)
        elif name is ConstantName.E:
            value = constants.euler_e(precision)
        elif name is ConstantName.GAMMA:
            value = constants.euler_gamma(precision)
        elif name is ConstantName.PHI:
            value = constants.golden_ratio(precision)
        elif name is ConstantName.RAND:
            value = constants.random_uniform(precision, self.rng)
        else:
            value = constants.random_gaussian(precision, self.rng)
        return Complex(value)

    # -------------------------------------------------------------------------
    # Строка
    # -------------------------------------------------------------------------

    def evaluate(self, line: str) -> Complex:
        """
        Разбор и вычисление строки; успешный результат добавляется в историю.

        Raises:
            EvalError: Первая ошибка разбора или вычисления
        """
        logger.debug("Evaluating %r in base %d", line, self.state.base)
        tokens = tokenize(line, self.state.base)
        tree = parse(tokens, self.state.base, self.state.precision)
        result = self.evaluate_node(tree).round_to(self.state.precision)
        index = self.state.append_history(result)
        logger.debug("Result @%d = %r", index, result)
        return result


def evaluate(line: str, state: CalculatorState, rng: Optional[random.Random] = None) -> Complex:
    return Evaluator(state, rng).evaluate(line)
