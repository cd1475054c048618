"""
Lexer

Один проход слева направо по входной строке:
- серии цифр активного основания с необязательной точкой -> NUMBER
- '[', ',', ']' -> разделители комплексного литерала
- '#имя' -> UNARY_FUNC (самый длинный известный префикс, регистр не важен)
- '@имя' / '$имя' -> CONSTANT
- '@<десятичные цифры>' -> HISTORY_REF(k), '&' -> HISTORY_REF(последний)
- ':' в начале строки -> COMMAND (остаток строки целиком)

Пробел, табуляция и подчёркивание пропускаются везде, в том числе внутри
чисел и после '#', '@', '$': '1 2 + 3' -> 12 + 3, '# sin 0' -> sin 0.
"""

from typing import Optional

from radixcalc.core.errors import InvalidDigit, UnexpectedCharacter, UnexpectedToken
from radixcalc.core.math.alphabet import digit_value, is_digit_symbol
from radixcalc.core.math.conversion import IGNORED_CHARACTERS, RADIX_POINT
from radixcalc.expression.tokens import (
    CONSTANT_NAMES,
    FUNCTION_NAMES,
    BinaryOperator,
    NumberLiteral,
    Token,
    TokenKind,
)

COMMAND_PREFIX = ":"

_SINGLE_CHARACTER_TOKENS: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.COMPLEX_OPEN,
    ",": TokenKind.COMPLEX_SEPARATOR,
    "]": TokenKind.COMPLEX_CLOSE,
}

_OPERATORS: dict[str, BinaryOperator] = {operator.value: operator for operator in BinaryOperator}


def is_command_line(text: str) -> bool:
    """Строка — команда, если первый значащий символ ':'."""
    stripped = "".join(char for char in text if char not in IGNORED_CHARACTERS)
    return stripped.startswith(COMMAND_PREFIX)


class Lexer:
    """Токенизатор строки в активном основании."""

    def __init__(self, text: str, base: int):
        self.text = text
        self.base = base
        self.index = 0

    def _skip_ignored(self) -> None:
        while self.index < len(self.text) and self.text[self.index] in IGNORED_CHARACTERS:
            self.index += 1

    def _peek(self) -> Optional[str]:
        return self.text[self.index] if self.index < len(self.text) else None

    def tokenize(self) -> list[Token]:
        if is_command_line(self.text):
            self._skip_ignored()
            start = self.index
            return [
                Token(TokenKind.COMMAND, start, self.text[start:], self.text[start + 1 :].strip()),
                Token(TokenKind.END, len(self.text), ""),
            ]

        tokens: list[Token] = []
        while True:
            self._skip_ignored()
            char = self._peek()
            if char is None:
                tokens.append(Token(TokenKind.END, self.index, ""))
                return tokens
            start = self.index
            if char in _SINGLE_CHARACTER_TOKENS:
                self.index += 1
                tokens.append(Token(_SINGLE_CHARACTER_TOKENS[char], start, char))
            elif char in _OPERATORS:
                self.index += 1
                tokens.append(Token(TokenKind.BINARY_OP, start, char, _OPERATORS[char]))
            elif char == "&":
                self.index += 1
                tokens.append(Token(TokenKind.HISTORY_REF, start, char, None))
            elif char == "#":
                tokens.append(self._read_function())
            elif char in ("@", "$"):
                tokens.append(self._read_reference())
            elif char == RADIX_POINT or is_digit_symbol(char):
                tokens.append(self._read_number())
            else:
                raise UnexpectedCharacter(f"Unexpected character '{char}'", start)

    # -------------------------------------------------------------------------
    # Числа
    # -------------------------------------------------------------------------

    def _read_number(self) -> Token:
        start = self.index
        integer_digits: list[int] = []
        fraction_digits: list[int] = []
        seen_point = False
        while True:
            self._skip_ignored()
            char = self._peek()
            if char is None:
                break
            if char == RADIX_POINT:
                if seen_point:
                    raise InvalidDigit("Multiple radix points", self.index)
                seen_point = True
                self.index += 1
                continue
            if not is_digit_symbol(char):
                break
            value = digit_value(char, self.base)
            if value is None:
                raise InvalidDigit(f"Digit '{char}' is out of range for base {self.base}", self.index)
            (fraction_digits if seen_point else integer_digits).append(value)
            self.index += 1
        if not integer_digits and not fraction_digits:
            raise InvalidDigit("Number has no digits", start)
        literal = NumberLiteral(tuple(integer_digits), tuple(fraction_digits))
        return Token(TokenKind.NUMBER, start, self.text[start : self.index].strip(), literal)

    # -------------------------------------------------------------------------
    # Имена
    # -------------------------------------------------------------------------

    def _read_name(self) -> str:
        begin = self.index
        while self.index < len(self.text) and self.text[self.index].isascii() and self.text[self.index].isalpha():
            self.index += 1
        return self.text[begin : self.index]

    def _match_prefix(self, name: str, table: dict, name_start: int, start: int, sigil: str):
        """Самое длинное известное имя, являющееся префиксом name; остаток возвращается во вход."""
        lowered = name.lower()
        for length in range(len(lowered), 0, -1):
            entry = table.get(lowered[:length])
            if entry is not None:
                self.index = name_start + length
                return entry
        raise UnexpectedToken(f"Unknown name '{sigil}{name}'", start)

    def _read_function(self) -> Token:
        start = self.index
        self.index += 1
        self._skip_ignored()
        name_start = self.index
        name = self._read_name()
        function = self._match_prefix(name, FUNCTION_NAMES, name_start, start, "#")
        return Token(TokenKind.UNARY_FUNC, start, self.text[start : self.index], function)

    def _read_reference(self) -> Token:
        start = self.index
        sigil = self.text[start]
        self.index += 1
        self._skip_ignored()
        char = self._peek()
        if sigil == "@" and char is not None and char.isascii() and char.isdigit():
            digits = []
            while True:
                self._skip_ignored()
                char = self._peek()
                if char is None or not (char.isascii() and char.isdigit()):
                    break
                digits.append(char)
                self.index += 1
            return Token(TokenKind.HISTORY_REF, start, self.text[start : self.index].strip(), int("".join(digits)))
        name_start = self.index
        name = self._read_name()
        if not name:
            raise UnexpectedCharacter(f"Expected a name after '{sigil}'", start)
        constant = self._match_prefix(name, CONSTANT_NAMES, name_start, start, sigil)
        return Token(TokenKind.CONSTANT, start, self.text[start : self.index], constant)


def tokenize(text: str, base: int) -> list[Token]:
    return Lexer(text, base).tokenize()
