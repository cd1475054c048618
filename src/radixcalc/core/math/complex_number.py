"""
Complex — упорядоченная пара BigNum (re, im)

Арифметика поднята из BigNum стандартными формулами; каждое
подумножение проходит округление BigNum, поэтому погрешность не
накапливается сверх заданной точности на одну операцию.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Для чисто вещественного значения im — точный ноль
2. Значения неизменяемы
"""

from dataclasses import dataclass
from typing import Optional

from radixcalc.core.errors import DivisionByZero
from radixcalc.core.math.bignum import GUARD_LIMBS, ONE, ZERO, BigNum


@dataclass(frozen=True)
class Complex:
    re: BigNum
    im: BigNum = ZERO

    # -------------------------------------------------------------------------
    # Конструирование и свойства
    # -------------------------------------------------------------------------

    @classmethod
    def from_int(cls, value: int) -> "Complex":
        return cls(BigNum.from_int(value))

    def is_real(self) -> bool:
        return self.im.is_zero()

    def is_zero(self) -> bool:
        return self.re.is_zero() and self.im.is_zero()

    def round_to(self, precision: int) -> "Complex":
        return Complex(self.re.round_to(precision), self.im.round_to(precision))

    def __repr__(self) -> str:
        return f"Complex(re={self.re!r}, im={self.im!r})"

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def negate(self) -> "Complex":
        return Complex(self.re.negate(), self.im.negate())

    def conjugate(self) -> "Complex":
        return Complex(self.re, self.im.negate())

    def add(self, other: "Complex", precision: Optional[int] = None) -> "Complex":
        return Complex(self.re.add(other.re, precision), self.im.add(other.im, precision))

    def sub(self, other: "Complex", precision: Optional[int] = None) -> "Complex":
        return Complex(self.re.sub(other.re, precision), self.im.sub(other.im, precision))

    def mul(self, other: "Complex", precision: Optional[int] = None) -> "Complex":
        """(a+bi)(c+di) = (ac - bd) + (ad + bc)i"""
        if self.is_real() and other.is_real():
            return Complex(self.re.mul(other.re, precision))
        a, b, c, d = self.re, self.im, other.re, other.im
        return Complex(
            a.mul(c, precision).sub(b.mul(d, precision), precision),
            a.mul(d, precision).add(b.mul(c, precision), precision),
        )

    def scale(self, factor: BigNum, precision: Optional[int] = None) -> "Complex":
        """Умножение обеих компонент на вещественный множитель."""
        return Complex(self.re.mul(factor, precision), self.im.mul(factor, precision))

    def norm(self, precision: Optional[int] = None) -> BigNum:
        """Квадрат модуля re^2 + im^2."""
        return self.re.mul(self.re, precision).add(self.im.mul(self.im, precision), precision)

    def div(self, other: "Complex", precision: int) -> "Complex":
        """
        Деление через сопряжённое: (a+bi)/(c+di) = ((ac+bd) + (bc-ad)i) / (c^2+d^2)

        Raises:
            DivisionByZero: Если делитель равен нулю
        """
        if other.is_zero():
            raise DivisionByZero("Division by zero")
        if other.is_real():
            return Complex(self.re.div(other.re, precision), self.im.div(other.re, precision))
        work = precision + GUARD_LIMBS
        a, b, c, d = self.re, self.im, other.re, other.im
        denominator = other.norm(work)
        real = a.mul(c, work).add(b.mul(d, work), work)
        imag = b.mul(c, work).sub(a.mul(d, work), work)
        return Complex(real.div(denominator, precision), imag.div(denominator, precision))

    def mod(self, other: "Complex", precision: Optional[int] = None) -> "Complex":
        """
        Покомпонентный остаток a - b * floor(a / b).

        Компонента с нулевым делителем даёт ноль.

        Raises:
            DivisionByZero: Если делитель целиком равен нулю
        """
        if other.is_zero():
            raise DivisionByZero("Modulus by zero")
        real = self.re.mod(other.re, precision) if not other.re.is_zero() else BigNum.zero(precision)
        imag = self.im.mod(other.im, precision) if not other.im.is_zero() else BigNum.zero(precision)
        return Complex(real, imag)

    def reciprocal(self, precision: int) -> "Complex":
        return Complex(ONE).div(self, precision)

    # -------------------------------------------------------------------------
    # Покомпонентные функции
    # -------------------------------------------------------------------------

    def real_part(self) -> "Complex":
        return Complex(self.re)

    def imag_part(self) -> "Complex":
        return Complex(self.im)

    def floor(self) -> "Complex":
        return Complex(self.re.floor(), self.im.floor())

    def ceil(self) -> "Complex":
        return Complex(self.re.ceil(), self.im.ceil())

    def round_integer(self) -> "Complex":
        return Complex(self.re.round_integer(), self.im.round_integer())

    def truncate(self) -> "Complex":
        return Complex(self.re.truncate(), self.im.truncate())

    def fraction(self) -> "Complex":
        return Complex(self.re.fraction(), self.im.fraction())

    def to_complex(self) -> complex:
        """Приближение встроенным complex (для тестов и диагностики)."""
        return complex(self.re.to_float(), self.im.to_float())


I: Complex = Complex(ZERO, ONE)
