"""
BigNum — знаковое вещественное число произвольной точности

Представление:
- sign: -1, 0 или +1
- digits: лимбы основания LIMB_BASE (10**9), старший первым
- point: количество целых лимбов; значение = sign * int(digits) * B**(point - len(digits))
- precision: число лимбов, до которого значение считается достоверным

Операции add/sub/mul/div/mod/pow/compare/negate/round_to возвращают новые
значения; экземпляры неизменяемы и свободно разделяются между узлами дерева.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Нет ведущих и хвостовых нулевых лимбов
2. Ноль: sign=0, digits=(0,), point=1
3. Округление: половина от нуля, по первому отброшенному лимбу
4. Результат add/sub без значащих лимбов в пределах precision - GUARD_LIMBS
   относительно большего операнда есть точный ноль
"""

import math
from dataclasses import dataclass, replace
from typing import Final, Optional, Sequence, Union

from radixcalc.core.errors import DivisionByZero
from radixcalc.core.math import limbs as limb_ops
from radixcalc.core.math.limbs import LIMB_BASE, LIMB_DIGITS

# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Защитные лимбы сверх запрошенной точности отображения
GUARD_LIMBS: Final[int] = 2

_HALF_LIMB: Final[int] = LIMB_BASE // 2


def working_precision(base: int, digit_count: int) -> int:
    """
    Рабочая точность в лимбах для digit_count цифр основания base.

    ceil(digit_count * log(base) / log(LIMB_BASE)) + GUARD_LIMBS
    """
    if digit_count < 1:
        raise ValueError(f"digit_count must be positive, got {digit_count}")
    needed = math.ceil(digit_count * math.log(base) / math.log(LIMB_BASE))
    return max(needed, 1) + GUARD_LIMBS


# =============================================================================
# BIGNUM
# =============================================================================


@dataclass(frozen=True, eq=False)
class BigNum:
    """
    Неизменяемое знаковое число произвольной точности.

    Равенство и порядок сравнивают значения; поле precision в сравнении
    не участвует.
    """

    sign: int
    digits: tuple[int, ...]
    point: int
    precision: int

    # -------------------------------------------------------------------------
    # Конструирование
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls, precision: Optional[int] = None) -> "BigNum":
        return cls(sign=0, digits=(0,), point=1, precision=precision or 1)

    @classmethod
    def _build(
        cls,
        sign: int,
        digits: Sequence[int],
        exponent: int,
        precision: Optional[int] = None,
    ) -> "BigNum":
        """Нормализация без округления: значение = sign * int(digits) * B**exponent."""
        body = limb_ops.normalize(digits)
        if sign == 0 or limb_ops.is_zero(body):
            return cls.zero(precision)
        end = len(body)
        while body[end - 1] == 0:
            end -= 1
        exponent += len(body) - end
        body = body[:end]
        return cls(
            sign=1 if sign > 0 else -1,
            digits=tuple(body),
            point=exponent + len(body),
            precision=precision or len(body),
        )

    @classmethod
    def from_limbs(
        cls,
        sign: int,
        digits: Sequence[int],
        exponent: int = 0,
        precision: Optional[int] = None,
    ) -> "BigNum":
        """
        Значение sign * int(digits) * B**exponent.

        При заданной precision результат округляется до неё.
        """
        value = cls._build(sign, digits, exponent)
        if precision is not None:
            value = value.round_to(precision)
        return value

    @classmethod
    def from_int(cls, value: int, precision: Optional[int] = None) -> "BigNum":
        sign = (value > 0) - (value < 0)
        return cls.from_limbs(sign, limb_ops.from_int(abs(value)), 0, precision)

    @classmethod
    def from_float(cls, value: float, precision: int) -> "BigNum":
        """Точное двоичное значение float, округлённое до precision лимбов."""
        if not math.isfinite(value):
            raise ValueError(f"Cannot convert non-finite float: {value}")
        numerator, denominator = value.as_integer_ratio()
        return cls.from_int(numerator).div(cls.from_int(denominator), precision)

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def exponent(self) -> int:
        """Степень LIMB_BASE младшего лимба."""
        return self.point - len(self.digits)

    def is_zero(self) -> bool:
        return self.sign == 0

    def is_negative(self) -> bool:
        return self.sign < 0

    def is_integer(self) -> bool:
        return self.sign == 0 or self.exponent >= 0

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def _compare_magnitude(self, other: "BigNum") -> int:
        if self.sign == 0 or other.sign == 0:
            return (self.sign != 0) - (other.sign != 0)
        if self.point != other.point:
            return -1 if self.point < other.point else 1
        # без хвостовых нулей лексикографический порядок совпадает с порядком величин
        if self.digits == other.digits:
            return 0
        return -1 if self.digits < other.digits else 1

    def compare(self, other: "BigNum") -> int:
        """Полный порядок по знаковой величине: -1, 0 или 1."""
        if self.sign != other.sign:
            return -1 if self.sign < other.sign else 1
        return self._compare_magnitude(other) * self.sign if self.sign else 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigNum):
            return NotImplemented
        return self.sign == other.sign and self.digits == other.digits and self.point == other.point

    def __hash__(self) -> int:
        return hash((self.sign, self.digits, self.point))

    def __lt__(self, other: "BigNum") -> bool:
        return self.compare(other) < 0

    def __le__(self, other: "BigNum") -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: "BigNum") -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: "BigNum") -> bool:
        return self.compare(other) >= 0

    # -------------------------------------------------------------------------
    # Округление
    # -------------------------------------------------------------------------

    def round_to(self, precision: int) -> "BigNum":
        """Округление до precision значащих лимбов (половина от нуля)."""
        if precision < 1:
            raise ValueError(f"precision must be positive, got {precision}")
        if self.sign == 0 or len(self.digits) <= precision:
            return replace(self, precision=precision)
        kept = list(self.digits[:precision])
        if self.digits[precision] >= _HALF_LIMB:
            kept = limb_ops.add(kept, [1])
        return BigNum._build(self.sign, kept, self.point - precision, precision)

    def negate(self) -> "BigNum":
        return replace(self, sign=-self.sign)

    def abs(self) -> "BigNum":
        return replace(self, sign=abs(self.sign))

    def shift_limbs(self, count: int) -> "BigNum":
        """Точное умножение на LIMB_BASE**count."""
        if self.sign == 0:
            return self
        return replace(self, point=self.point + count)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: "BigNum", precision: Optional[int] = None) -> "BigNum":
        """
        Сумма; без precision — точная.

        При заданной precision операнд ниже половины единицы последнего
        лимба другого операнда пропускается, а результат, потерявший все
        значащие лимбы при сокращении, становится точным нулём.
        """
        if other.sign == 0:
            return self.round_to(precision) if precision else self
        if self.sign == 0:
            return other.round_to(precision) if precision else other
        if precision is not None:
            if other.point < self.point - precision - 1:
                return self.round_to(precision)
            if self.point < other.point - precision - 1:
                return other.round_to(precision)

        low = min(self.exponent, other.exponent)
        left = limb_ops.shift(self.digits, self.exponent - low)
        right = limb_ops.shift(other.digits, other.exponent - low)
        if self.sign == other.sign:
            body = limb_ops.add(left, right)
            sign = self.sign
        else:
            order = limb_ops.compare(left, right)
            if order == 0:
                return BigNum.zero(precision)
            if order > 0:
                body = limb_ops.subtract(left, right)
                sign = self.sign
            else:
                body = limb_ops.subtract(right, left)
                sign = other.sign

        result = BigNum._build(sign, body, low)
        if precision is None:
            return result
        window = max(precision - GUARD_LIMBS, 1)
        if result.point < max(self.point, other.point) - window:
            return BigNum.zero(precision)
        return result.round_to(precision)

    def sub(self, other: "BigNum", precision: Optional[int] = None) -> "BigNum":
        return self.add(other.negate(), precision)

    def mul(self, other: "BigNum", precision: Optional[int] = None) -> "BigNum":
        """Произведение; без precision — точное."""
        if self.sign == 0 or other.sign == 0:
            return BigNum.zero(precision)
        body = limb_ops.multiply(self.digits, other.digits)
        return BigNum.from_limbs(self.sign * other.sign, body, self.exponent + other.exponent, precision)

    def div(self, other: "BigNum", precision: int) -> "BigNum":
        """
        Частное с precision значащими лимбами.

        Делимое сдвигается так, чтобы частное имело не меньше precision + 1
        лимбов; лишний лимб определяет округление.

        Raises:
            DivisionByZero: Если делитель равен нулю
        """
        if other.sign == 0:
            raise DivisionByZero("Division by zero")
        if self.sign == 0:
            return BigNum.zero(precision)
        scale = max(0, precision + 1 + len(other.digits) - len(self.digits))
        numerator = limb_ops.shift(self.digits, scale)
        quotient, _ = limb_ops.divmod_limbs(numerator, other.digits)
        exponent = self.exponent - scale - other.exponent
        return BigNum.from_limbs(self.sign * other.sign, quotient, exponent, precision)

    def mod(self, other: "BigNum", precision: Optional[int] = None) -> "BigNum":
        """
        Остаток с округлением частного вниз: a - b * floor(a / b).

        Знак результата совпадает со знаком делителя. Вычисляется точно.

        Raises:
            DivisionByZero: Если делитель равен нулю
        """
        if other.sign == 0:
            raise DivisionByZero("Modulus by zero")
        if self.sign == 0:
            return BigNum.zero(precision)
        low = min(self.exponent, other.exponent)
        left = limb_ops.shift(self.digits, self.exponent - low)
        right = limb_ops.shift(other.digits, other.exponent - low)
        _, rest = limb_ops.divmod_limbs(left, right)
        if limb_ops.is_zero(rest):
            return BigNum.zero(precision)
        if self.sign != other.sign:
            rest = limb_ops.subtract(right, rest)
        return BigNum.from_limbs(other.sign, rest, low, precision)

    def pow(self, exponent: Union[int, "BigNum"], precision: int) -> "BigNum":
        """
        Целая степень двоичным возведением.

        Отрицательная степень — обратная величина положительной. Нецелые
        показатели обрабатывает transcendental.power.

        Raises:
            DivisionByZero: Ноль в отрицательной степени
            ValueError: Нецелый показатель
        """
        if isinstance(exponent, BigNum):
            if not exponent.is_integer():
                raise ValueError("BigNum.pow requires an integer exponent")
            exponent = exponent.to_int()
        if exponent == 0:
            return ONE.round_to(precision)
        if self.sign == 0:
            if exponent < 0:
                raise DivisionByZero("Zero raised to a negative power")
            return BigNum.zero(precision)

        work = precision + GUARD_LIMBS + abs(exponent).bit_length() // 16
        result = ONE
        base = self
        remaining = abs(exponent)
        while remaining:
            if remaining & 1:
                result = result.mul(base, work)
            remaining >>= 1
            if remaining:
                base = base.mul(base, work)
        if exponent < 0:
            result = ONE.div(result, work)
        return result.round_to(precision)

    # -------------------------------------------------------------------------
    # Целая и дробная части
    # -------------------------------------------------------------------------

    def _split(self) -> tuple[list[int], bool, bool]:
        """(лимбы целой части, есть ли дробная часть, дробная часть >= 1/2)."""
        if self.point <= 0:
            at_least_half = self.point == 0 and self.digits[0] >= _HALF_LIMB
            return [0], self.sign != 0, at_least_half
        whole = list(self.digits[: self.point]) + [0] * max(0, self.point - len(self.digits))
        fraction = self.digits[self.point :]
        return whole, bool(fraction), bool(fraction) and fraction[0] >= _HALF_LIMB

    def truncate(self) -> "BigNum":
        """Целая часть с отбрасыванием к нулю."""
        if self.is_integer():
            return self
        whole, _, _ = self._split()
        return BigNum.from_limbs(self.sign, whole, 0)

    def floor(self) -> "BigNum":
        if self.is_integer():
            return self
        whole, _, _ = self._split()
        if self.sign < 0:
            whole = limb_ops.add(whole, [1])
        return BigNum.from_limbs(self.sign, whole, 0)

    def ceil(self) -> "BigNum":
        if self.is_integer():
            return self
        whole, _, _ = self._split()
        if self.sign > 0:
            whole = limb_ops.add(whole, [1])
        return BigNum.from_limbs(self.sign, whole, 0)

    def round_integer(self) -> "BigNum":
        """Ближайшее целое, половина от нуля."""
        if self.is_integer():
            return self
        whole, _, at_least_half = self._split()
        if at_least_half:
            whole = limb_ops.add(whole, [1])
        return BigNum.from_limbs(self.sign, whole, 0)

    def fraction(self) -> "BigNum":
        """Дробная часть со знаком исходного числа: x - truncate(x)."""
        return self.sub(self.truncate())

    def to_int(self) -> int:
        """Целая часть как int Python (с отбрасыванием к нулю)."""
        if self.sign == 0:
            return 0
        whole, _, _ = self._split()
        return self.sign * limb_ops.to_int(whole)

    # -------------------------------------------------------------------------
    # Приближения float (начальные оценки итераций, тесты)
    # -------------------------------------------------------------------------

    def approximate_log10(self) -> float:
        """log10(|x|) по трём старшим лимбам."""
        if self.sign == 0:
            raise ValueError("log10 of zero")
        head = self.digits[:3]
        mantissa = 0
        for limb in head:
            mantissa = mantissa * LIMB_BASE + limb
        return math.log10(mantissa) + (self.point - len(head)) * LIMB_DIGITS

    def to_float(self) -> float:
        if self.sign == 0:
            return 0.0
        magnitude = self.approximate_log10()
        if magnitude > 308.25:
            return math.copysign(math.inf, self.sign)
        if magnitude < -323.3:
            return math.copysign(0.0, self.sign)
        head = self.digits[:3]
        mantissa = 0
        for limb in head:
            mantissa = mantissa * LIMB_BASE + limb
        scale = (self.point - len(head)) * LIMB_DIGITS
        return self.sign * float(mantissa * 10**scale if scale >= 0 else mantissa / 10**-scale)

    def __repr__(self) -> str:
        return f"BigNum(sign={self.sign}, digits={self.digits}, point={self.point}, precision={self.precision})"


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

ZERO: Final[BigNum] = BigNum.zero()
ONE: Final[BigNum] = BigNum.from_int(1)
TWO: Final[BigNum] = BigNum.from_int(2)
HALF: Final[BigNum] = BigNum.from_limbs(1, [_HALF_LIMB], -1)
