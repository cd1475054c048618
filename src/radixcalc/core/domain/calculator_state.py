"""
CalculatorState — конфигурация и история сессии

Явный объект состояния, передаваемый по ссылке в каждое вычисление:
- base: активное основание (2..36)
- digits: точность отображения в цифрах основания (>= 1, без верхней границы)
- angle_mode: радианы или градусы
- history: только дополняемая последовательность результатов

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Сеттеры либо применяют значение, либо поднимают InvalidConfiguration,
   оставляя состояние неизменным
2. Номера записей истории (1-based) после присвоения не меняются
"""

import logging
from enum import Enum
from typing import Final, Iterable, Optional, Union

from radixcalc.core.errors import HistoryIndexOutOfRange, InvalidConfiguration
from radixcalc.core.math.alphabet import base_name, validate_base
from radixcalc.core.math.bignum import working_precision
from radixcalc.core.math.complex_number import Complex

logger = logging.getLogger(__name__)


class AngleMode(str, Enum):
    """Единицы углов для тригонометрии"""

    RADIANS = "radians"
    DEGREES = "degrees"


# =============================================================================
# ЗНАЧЕНИЯ ПО УМОЛЧАНИЮ
# =============================================================================

DEFAULT_BASE: Final[int] = 10
DEFAULT_DIGITS: Final[int] = 12
DEFAULT_ANGLE_MODE: Final[AngleMode] = AngleMode.RADIANS


def validate_digits(digits: int) -> int:
    """
    Raises:
        InvalidConfiguration: Если digits не положительное целое
    """
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidConfiguration(f"Digits must be an integer, got {digits!r}")
    if digits < 1:
        raise InvalidConfiguration(f"Digits must be positive, got {digits}")
    return digits


def validate_angle_mode(angle_mode: Union[AngleMode, str]) -> AngleMode:
    try:
        return AngleMode(angle_mode)
    except ValueError as exc:
        raise InvalidConfiguration(f"Unknown angle mode: {angle_mode!r}") from exc


class CalculatorState:
    """
    Состояние калькулятора одной сессии.

    Изменяется только диспетчером команд (конфигурация) и вычислителем
    (добавление в историю после успешной строки).
    """

    def __init__(
        self,
        base: int = DEFAULT_BASE,
        digits: int = DEFAULT_DIGITS,
        angle_mode: Union[AngleMode, str] = DEFAULT_ANGLE_MODE,
        history: Optional[Iterable[Complex]] = None,
    ):
        self._base = validate_base(base)
        self._digits = validate_digits(digits)
        self._angle_mode = validate_angle_mode(angle_mode)
        self._history: list[Complex] = list(history or [])
        # Режим отладки не входит в снимок состояния
        self.debug = False

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    @property
    def base(self) -> int:
        return self._base

    @property
    def digits(self) -> int:
        return self._digits

    @property
    def angle_mode(self) -> AngleMode:
        return self._angle_mode

    @property
    def history(self) -> tuple[Complex, ...]:
        return tuple(self._history)

    @property
    def precision(self) -> int:
        """Рабочая точность в лимбах для текущих base и digits."""
        return working_precision(self._base, self._digits)

    # -------------------------------------------------------------------------
    # Конфигурация
    # -------------------------------------------------------------------------

    def set_base(self, base: int) -> None:
        self._base = validate_base(base)
        logger.info("Base set to %s (%d)", base_name(base), base)

    def set_digits(self, digits: int) -> None:
        self._digits = validate_digits(digits)
        logger.info("Precision set to %d digits", digits)

    def set_angle_mode(self, angle_mode: Union[AngleMode, str]) -> None:
        self._angle_mode = validate_angle_mode(angle_mode)
        logger.info("Angle units set to %s", self._angle_mode.value)

    # -------------------------------------------------------------------------
    # История
    # -------------------------------------------------------------------------

    def append_history(self, value: Complex) -> int:
        """Добавляет результат; возвращает его номер (1-based)."""
        self._history.append(value)
        return len(self._history)

    def resolve_history(self, index: Optional[int] = None) -> Complex:
        """
        Результат по номеру (1-based) или последний при index=None.

        Raises:
            HistoryIndexOutOfRange: Номер вне 1..len(history) или история пуста
        """
        if index is None:
            if not self._history:
                raise HistoryIndexOutOfRange("History is empty")
            return self._history[-1]
        if not 1 <= index <= len(self._history):
            raise HistoryIndexOutOfRange(
                f"History index {index} is out of range (1..{len(self._history)})"
            )
        return self._history[index - 1]

    def __repr__(self) -> str:
        return (
            f"CalculatorState(base={self._base}, digits={self._digits}, "
            f"angle_mode={self._angle_mode.value}, history={len(self._history)} entries)"
        )
