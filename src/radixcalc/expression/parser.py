"""
Parser — рекурсивный спуск по потоку токенов

Приоритеты (от низшего к высшему):
    expression := term (('+' | '-') term)*
    term       := function (('*' | '/' | '%') function)*
    function   := '#name' function | power
    power      := unary ('^' function)?          правоассоциативно
    unary      := ('-' | '+') (function | unary) | primary
    primary    := number | '[' signed ',' signed ']' | constant
                | history | '(' expression ')'

Числовые литералы переводятся в BigNum при разборе с активной точностью.
Глубина вложенности (скобки, знаки, функции) ограничена MAX_NESTING_DEPTH.
"""

from contextlib import contextmanager
from typing import Final, Iterator, Optional

from radixcalc.core.errors import UnexpectedToken
from radixcalc.core.math.bignum import BigNum
from radixcalc.core.math.complex_number import Complex
from radixcalc.core.math.conversion import bignum_from_digits
from radixcalc.expression.nodes import BinaryOp, Constant, HistoryRef, Literal, Node, UnaryFunc
from radixcalc.expression.tokens import BinaryOperator, NumberLiteral, Token, TokenKind, UnaryFunction

_ADDITIVE = (BinaryOperator.ADD, BinaryOperator.SUBTRACT)
_MULTIPLICATIVE = (BinaryOperator.MULTIPLY, BinaryOperator.DIVIDE, BinaryOperator.MODULUS)

# каждая скобка, знак или функция занимает одну единицу глубины
MAX_NESTING_DEPTH: Final[int] = 100


class Parser:
    """Строит дерево выражения из токенов одной строки."""

    def __init__(self, tokens: list[Token], base: int, precision: int):
        if not tokens or tokens[-1].kind is not TokenKind.END:
            raise ValueError("Token stream must end with an END token")
        self.tokens = tokens
        self.base = base
        self.precision = precision
        self.index = 0
        self.depth = 0

    # -------------------------------------------------------------------------
    # Навигация
    # -------------------------------------------------------------------------

    @property
    def _current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind is not TokenKind.END:
            self.index += 1
        return token

    def _is_operator(self, operators: tuple[BinaryOperator, ...]) -> Optional[BinaryOperator]:
        token = self._current
        if token.kind is TokenKind.BINARY_OP and token.value in operators:
            return token.value
        return None

    def _unexpected(self, expected: str) -> UnexpectedToken:
        token = self._current
        if token.kind is TokenKind.END:
            return UnexpectedToken("Incomplete expression", token.position)
        return UnexpectedToken(f"{expected}, found '{token.text}'", token.position)

    @contextmanager
    def _nested(self) -> Iterator[None]:
        if self.depth >= MAX_NESTING_DEPTH:
            raise UnexpectedToken("Expression nested too deeply", self._current.position)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    # -------------------------------------------------------------------------
    # Грамматика
    # -------------------------------------------------------------------------

    def parse(self) -> Node:
        token = self._current
        if token.kind is TokenKind.END:
            raise UnexpectedToken("Empty expression", token.position)
        if token.kind is TokenKind.COMMAND:
            raise UnexpectedToken("Command lines are handled by the command dispatcher", token.position)
        node = self._parse_expression()
        token = self._current
        if token.kind is TokenKind.RPAREN:
            raise UnexpectedToken("Mismatched parentheses", token.position)
        if token.kind is not TokenKind.END:
            raise self._unexpected("Expected an operator")
        return node

    def _parse_expression(self) -> Node:
        node = self._parse_term()
        operator = self._is_operator(_ADDITIVE)
        while operator is not None:
            self._advance()
            node = BinaryOp(operator, node, self._parse_term())
            operator = self._is_operator(_ADDITIVE)
        return node

    def _parse_term(self) -> Node:
        node = self._parse_function()
        operator = self._is_operator(_MULTIPLICATIVE)
        while operator is not None:
            self._advance()
            node = BinaryOp(operator, node, self._parse_function())
            operator = self._is_operator(_MULTIPLICATIVE)
        return node

    def _parse_function(self) -> Node:
        token = self._current
        with self._nested():
            if token.kind is TokenKind.UNARY_FUNC:
                self._advance()
                return UnaryFunc(token.value, self._parse_function())
            return self._parse_power()

    def _parse_power(self) -> Node:
        base = self._parse_unary()
        if self._is_operator((BinaryOperator.POWER,)) is not None:
            self._advance()
            return BinaryOp(BinaryOperator.POWER, base, self._parse_function())
        return base

    def _parse_unary(self) -> Node:
        operator = self._is_operator(_ADDITIVE)
        if operator is None:
            return self._parse_primary()
        self._advance()
        with self._nested():
            if self._current.kind is TokenKind.UNARY_FUNC:
                operand = self._parse_function()
            else:
                operand = self._parse_unary()
        if operator is BinaryOperator.SUBTRACT:
            return UnaryFunc(UnaryFunction.NEGATE, operand)
        return operand

    def _parse_primary(self) -> Node:
        token = self._current
        kind = token.kind
        if kind is TokenKind.NUMBER:
            self._advance()
            return Literal(Complex(self._number(token.value)))
        if kind is TokenKind.COMPLEX_OPEN:
            return self._parse_complex_literal()
        if kind is TokenKind.CONSTANT:
            self._advance()
            return Constant(token.value)
        if kind is TokenKind.HISTORY_REF:
            self._advance()
            return HistoryRef(token.value)
        if kind is TokenKind.LPAREN:
            self._advance()
            node = self._parse_expression()
            if self._current.kind is not TokenKind.RPAREN:
                if self._current.kind is TokenKind.END:
                    raise UnexpectedToken("Mismatched parentheses", token.position)
                raise self._unexpected("Expected ')'")
            self._advance()
            return node
        raise self._unexpected("Expected a number")

    def _parse_complex_literal(self) -> Node:
        opening = self._advance()
        real = self._signed_number()
        if self._current.kind is not TokenKind.COMPLEX_SEPARATOR:
            if self._current.kind is TokenKind.END:
                raise UnexpectedToken("Unclosed complex number", opening.position)
            raise self._unexpected("Expected ','")
        self._advance()
        imaginary = self._signed_number()
        if self._current.kind is not TokenKind.COMPLEX_CLOSE:
            if self._current.kind is TokenKind.END:
                raise UnexpectedToken("Unclosed complex number", opening.position)
            raise self._unexpected("Expected ']'")
        self._advance()
        return Literal(Complex(real, imaginary))

    def _signed_number(self) -> BigNum:
        negative = False
        operator = self._is_operator(_ADDITIVE)
        while operator is not None:
            negative ^= operator is BinaryOperator.SUBTRACT
            self._advance()
            operator = self._is_operator(_ADDITIVE)
        token = self._current
        if token.kind is not TokenKind.NUMBER:
            raise self._unexpected("Expected a number in complex literal")
        self._advance()
        value = self._number(token.value)
        return value.negate() if negative else value

    def _number(self, literal: NumberLiteral) -> BigNum:
        return bignum_from_digits(literal.integer_digits, literal.fraction_digits, self.base, self.precision)


def parse(tokens: list[Token], base: int, precision: int) -> Node:
    return Parser(tokens, base, precision).parse()
