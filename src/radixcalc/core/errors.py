"""
Error taxonomy

Все сбои ядра поднимаются как исключения одной иерархии:

CalculatorError
├── EvalError — сбой вычисления одной строки
│   ├── InvalidDigit
│   ├── UnexpectedCharacter
│   ├── UnexpectedToken
│   ├── DivisionByZero
│   ├── HistoryIndexOutOfRange
│   ├── ConvergenceFailure
│   └── DomainError
└── InvalidConfiguration — отклонённое изменение конфигурации

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ядро никогда не глотает ошибки: сбой подвыражения прерывает всю строку
2. Только REPL перехватывает CalculatorError и продолжает работу
"""

from typing import Optional


class CalculatorError(Exception):
    """Базовая ошибка калькулятора."""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class EvalError(CalculatorError):
    """Сбой разбора или вычисления выражения."""


class InvalidDigit(EvalError):
    """Литерал содержит символ, недопустимый в активном основании."""


class UnexpectedCharacter(EvalError):
    """Лексер встретил неизвестный символ."""


class UnexpectedToken(EvalError):
    """Структурная ошибка разбора: лишний оператор, пустое выражение, скобки."""


class DivisionByZero(EvalError):
    """Делитель в точности равен нулю."""


class HistoryIndexOutOfRange(EvalError):
    """Ссылка на несуществующий элемент истории."""


class ConvergenceFailure(EvalError):
    """Итерация превысила лимит, не достигнув требуемой точности."""


class DomainError(EvalError):
    """Операнд вне области определения функции (ln 0, факториал дроби)."""


class InvalidConfiguration(CalculatorError):
    """Недопустимое основание, точность или режим углов."""
