"""
Transcendental Library

Итерационные и рядные алгоритмы над BigNum/Complex до заданной точности
(в лимбах):
- sqrt: метод Ньютона; отрицательный вещественный аргумент -> мнимый корень
- exp: деление аргумента на 2**s, ряд Тейлора, s возведений в квадрат
- ln: нормировка x / 2**k, ряд 2*atanh((y-1)/(y+1)), плюс k*ln2
- log: ln(z) / ln(base)
- sin/cos/tan: редукция по pi/2 (или точно по 90 градусам), ряд Тейлора
- asin/acos/atan: вещественные формулы внутри [-1, 1], комплексное
  аналитическое продолжение вне его
- erf: положительный ряд exp(-z^2) * sum(2^n z^(2n+1) / (2n+1)!!)
- factorial, power, absolute, sign, angle

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ряды останавливаются, когда очередной член меньше единицы последнего
   лимба рабочей точности
2. Превышение лимита итераций -> ConvergenceFailure, бесконечных циклов нет
3. В режиме градусов тригонометрия редуцируется точно по 90 градусам,
   обратные функции переводят результат в градусы
"""

import logging
import math
from functools import lru_cache
from typing import Callable, Final

from radixcalc.core.errors import ConvergenceFailure, DivisionByZero, DomainError
from radixcalc.core.math.bignum import GUARD_LIMBS, HALF, ONE, TWO, ZERO, BigNum
from radixcalc.core.math.complex_number import I, Complex
from radixcalc.core.math.limbs import LIMB_BASE, LIMB_DIGITS

logger = logging.getLogger(__name__)

# =============================================================================
# ЛИМИТЫ ИТЕРАЦИЙ
# =============================================================================

MAX_SERIES_TERMS: Final[int] = 200_000
MAX_NEWTON_STEPS: Final[int] = 500
MAX_FACTORIAL_ARGUMENT: Final[int] = 100_000

RADIANS: Final[str] = "radians"
DEGREES: Final[str] = "degrees"

_LN_LIMB_BASE: Final[float] = math.log(LIMB_BASE)
_ONE_COMPLEX: Final[Complex] = Complex(ONE)


def _negligible(term: BigNum, total: BigNum, precision: int) -> bool:
    """Член ряда меньше единицы последнего лимба суммы."""
    if term.is_zero():
        return True
    if total.is_zero():
        return False
    return term.point < total.point - precision


def _sum_series(next_term: Callable[[int], BigNum], first: BigNum, precision: int, name: str) -> BigNum:
    """
    Суммирование ряда: next_term(n) возвращает n-й член (n >= 1).

    Raises:
        ConvergenceFailure: Ряд не сошёлся за MAX_SERIES_TERMS членов
    """
    total = first
    for n in range(1, MAX_SERIES_TERMS):
        term = next_term(n)
        if _negligible(term, total, precision):
            logger.debug("%s converged after %d terms", name, n)
            return total
        total = total.add(term, precision)
    raise ConvergenceFailure(f"{name} did not converge")


def _from_log10(value_log10: float, precision: int) -> BigNum:
    """Приближение 10**value_log10 без переполнения float."""
    limb_exponent = math.floor(value_log10 / LIMB_DIGITS)
    mantissa = 10 ** (value_log10 - limb_exponent * LIMB_DIGITS)
    return BigNum.from_float(mantissa, precision).shift_limbs(limb_exponent)


# =============================================================================
# КОНСТАНТЫ PI И LN2
# =============================================================================


def _atan_inverse(denominator: int, precision: int) -> BigNum:
    """atan(1/n) = sum (-1)^k / ((2k+1) n^(2k+1))"""
    square = BigNum.from_int(denominator * denominator)
    first = ONE.div(BigNum.from_int(denominator), precision)
    power = first

    def term(n: int) -> BigNum:
        nonlocal power
        power = power.div(square, precision)
        value = power.div(BigNum.from_int(2 * n + 1), precision)
        return value.negate() if n % 2 else value

    return _sum_series(term, first, precision, f"atan(1/{denominator})")


@lru_cache(maxsize=64)
def pi(precision: int) -> BigNum:
    """pi по формуле Мэчина: 16 atan(1/5) - 4 atan(1/239)."""
    work = precision + GUARD_LIMBS
    first = _atan_inverse(5, work).mul(BigNum.from_int(16), work)
    second = _atan_inverse(239, work).mul(BigNum.from_int(4), work)
    return first.sub(second, work).round_to(precision)


def _atanh_series(value: BigNum, precision: int) -> BigNum:
    """atanh(t) = sum t^(2n+1) / (2n+1), |t| < 1."""
    if value.is_zero():
        return ZERO
    square = value.mul(value, precision)
    power = value

    def term(n: int) -> BigNum:
        nonlocal power
        power = power.mul(square, precision)
        return power.div(BigNum.from_int(2 * n + 1), precision)

    return _sum_series(term, value, precision, "atanh")


@lru_cache(maxsize=64)
def ln2(precision: int) -> BigNum:
    """ln 2 = 2 atanh(1/3)."""
    work = precision + GUARD_LIMBS
    third = ONE.div(BigNum.from_int(3), work)
    return _atanh_series(third, work).mul(TWO, work).round_to(precision)


# =============================================================================
# ВЕЩЕСТВЕННЫЕ ЯДРА
# =============================================================================


def sqrt_real(value: BigNum, precision: int) -> BigNum:
    """
    Квадратный корень неотрицательного BigNum методом Ньютона.

    Начальное приближение берётся из float-оценки log10.

    Raises:
        DomainError: Отрицательный аргумент
        ConvergenceFailure: Итерации не сошлись
    """
    if value.is_zero():
        return BigNum.zero(precision)
    if value.is_negative():
        raise DomainError("Square root of a negative real")
    work = precision + GUARD_LIMBS
    guess = _from_log10(value.approximate_log10() / 2, work)
    for step in range(MAX_NEWTON_STEPS):
        refined = guess.add(value.div(guess, work), work).mul(HALF, work)
        delta = refined.sub(guess, work)
        guess = refined
        if _negligible(delta, refined, precision):
            logger.debug("sqrt converged after %d steps", step + 1)
            return guess.round_to(precision)
    raise ConvergenceFailure("sqrt did not converge")


def exp_real(value: BigNum, precision: int) -> BigNum:
    """Экспонента: x / 2**s, ряд Тейлора, затем s возведений в квадрат."""
    if value.is_zero():
        return ONE.round_to(precision)
    if value.is_negative():
        return ONE.div(exp_real(value.negate(), precision + 1), precision)
    log2_magnitude = value.approximate_log10() * math.log2(10)
    halvings = max(0, int(log2_magnitude) + 12)
    # абсолютная погрешность показателя становится относительной погрешностью результата
    work = precision + GUARD_LIMBS + max(0, value.point) + halvings // 25 + 1
    reduced = value
    if halvings:
        reduced = value.div(TWO.pow(halvings, work), work)
    current = ONE

    def term(n: int) -> BigNum:
        nonlocal current
        current = current.mul(reduced, work).div(BigNum.from_int(n), work)
        return current

    total = _sum_series(term, ONE, work, "exp")
    for _ in range(halvings):
        total = total.mul(total, work)
    return total.round_to(precision)


def ln_real(value: BigNum, precision: int) -> BigNum:
    """
    Натуральный логарифм положительного BigNum.

    x = 2**k * y, y около 1; ln x = k ln2 + 2 atanh((y - 1) / (y + 1)).

    Raises:
        DomainError: x <= 0
    """
    if value.sign <= 0:
        raise DomainError("Logarithm of zero" if value.is_zero() else "Logarithm of a negative real")
    if value == ONE:
        return BigNum.zero(precision)
    shift = round(value.approximate_log10() * math.log2(10))
    work = precision + GUARD_LIMBS + len(str(abs(shift))) // LIMB_DIGITS + 1
    reduced = value
    if shift > 0:
        reduced = value.div(TWO.pow(shift, work), work)
    elif shift < 0:
        reduced = value.mul(TWO.pow(-shift, work), work)
    ratio = reduced.sub(ONE, work).div(reduced.add(ONE, work), work)
    result = _atanh_series(ratio, work).mul(TWO, work)
    if shift:
        result = result.add(ln2(work).mul(BigNum.from_int(shift), work), work)
    return result.round_to(precision)


def atan_real(value: BigNum, precision: int) -> BigNum:
    """
    Арктангенс: atan x = pi/2 - atan(1/x) для x > 1, затем деления
    пополам x -> x / (1 + sqrt(1 + x^2)) до |x| < 1/8 и ряд Тейлора.
    """
    if value.is_zero():
        return BigNum.zero(precision)
    if value.is_negative():
        return atan_real(value.negate(), precision).negate()
    work = precision + GUARD_LIMBS
    if value > ONE:
        half_pi = pi(work).mul(HALF, work)
        return half_pi.sub(atan_real(ONE.div(value, work), work), precision)
    eighth = BigNum.from_limbs(1, [125_000_000], -1)
    doublings = 0
    reduced = value
    while reduced > eighth:
        root = sqrt_real(ONE.add(reduced.mul(reduced, work), work), work)
        reduced = reduced.div(ONE.add(root, work), work)
        doublings += 1
    square = reduced.mul(reduced, work)
    power = reduced

    def term(n: int) -> BigNum:
        nonlocal power
        power = power.mul(square, work)
        item = power.div(BigNum.from_int(2 * n + 1), work)
        return item.negate() if n % 2 else item

    result = _sum_series(term, reduced, work, "atan")
    if doublings:
        result = result.mul(BigNum.from_int(2**doublings), work)
    return result.round_to(precision)


def atan2_real(y: BigNum, x: BigNum, precision: int) -> BigNum:
    """Угол точки (x, y) в (-pi, pi]; atan2(0, 0) = 0."""
    work = precision + GUARD_LIMBS
    if x.is_zero():
        if y.is_zero():
            return BigNum.zero(precision)
        half_pi = pi(work).mul(HALF, work).round_to(precision)
        return half_pi if y.sign > 0 else half_pi.negate()
    if y.is_zero():
        return BigNum.zero(precision) if x.sign > 0 else pi(precision)
    base = atan_real(y.div(x, work), work)
    if x.sign > 0:
        return base.round_to(precision)
    if y.sign > 0:
        return base.add(pi(work), precision)
    return base.sub(pi(work), precision)


def _sin_cos_series(value: BigNum, precision: int) -> tuple[BigNum, BigNum]:
    """Ряды Тейлора sin и cos для |x| <= pi/4."""
    if value.is_zero():
        return BigNum.zero(precision), ONE.round_to(precision)
    square = value.mul(value, precision)
    sine_term = value
    cosine_term = ONE

    def sin_term(n: int) -> BigNum:
        nonlocal sine_term
        divisor = BigNum.from_int((2 * n) * (2 * n + 1))
        sine_term = sine_term.mul(square, precision).div(divisor, precision).negate()
        return sine_term

    def cos_term(n: int) -> BigNum:
        nonlocal cosine_term
        divisor = BigNum.from_int((2 * n - 1) * (2 * n))
        cosine_term = cosine_term.mul(square, precision).div(divisor, precision).negate()
        return cosine_term

    return (
        _sum_series(sin_term, value, precision, "sin"),
        _sum_series(cos_term, ONE, precision, "cos"),
    )


def sin_cos_real(value: BigNum, precision: int, angle_mode: str = RADIANS) -> tuple[BigNum, BigNum]:
    """
    (sin x, cos x) с редукцией к |r| <= pi/4 и выбором квадранта.

    Остаток редукции вычисляется с точностью аргумента, поэтому x,
    совпадающий с кратным pi/2 во всех значащих лимбах, даёт точные 0 и 1.
    """
    if value.is_zero():
        return BigNum.zero(precision), ONE.round_to(precision)
    work = precision + GUARD_LIMBS + max(0, value.point) + 1
    if angle_mode == DEGREES:
        ninety = BigNum.from_int(90)
        quadrant = value.div(ninety, work).round_integer()
        remainder = value.sub(quadrant.mul(ninety), precision)
        reduced = remainder.mul(pi(work), work).div(BigNum.from_int(180), work)
    else:
        half_pi = pi(work).mul(HALF, work)
        quadrant = value.div(half_pi, work).round_integer()
        reduced = value.sub(quadrant.mul(half_pi, work), precision)
    sine, cosine = _sin_cos_series(reduced, work)
    turn = quadrant.to_int() % 4
    if turn == 1:
        sine, cosine = cosine, sine.negate()
    elif turn == 2:
        sine, cosine = sine.negate(), cosine.negate()
    elif turn == 3:
        sine, cosine = cosine.negate(), sine
    return sine.round_to(precision), cosine.round_to(precision)


def sinh_cosh_real(value: BigNum, precision: int) -> tuple[BigNum, BigNum]:
    """(sinh x, cosh x); при |x| < 1 через ряды, иначе через exp."""
    if value.is_zero():
        return BigNum.zero(precision), ONE.round_to(precision)
    work = precision + GUARD_LIMBS
    if value.abs() < ONE:
        square = value.mul(value, work)
        odd = value
        even = ONE

        def sinh_term(n: int) -> BigNum:
            nonlocal odd
            odd = odd.mul(square, work).div(BigNum.from_int((2 * n) * (2 * n + 1)), work)
            return odd

        def cosh_term(n: int) -> BigNum:
            nonlocal even
            even = even.mul(square, work).div(BigNum.from_int((2 * n - 1) * (2 * n)), work)
            return even

        sinh = _sum_series(sinh_term, value, work, "sinh")
        cosh = _sum_series(cosh_term, ONE, work, "cosh")
        return sinh.round_to(precision), cosh.round_to(precision)
    growth = exp_real(value, work)
    decay = ONE.div(growth, work)
    sinh = growth.sub(decay, work).mul(HALF, precision)
    cosh = growth.add(decay, work).mul(HALF, precision)
    return sinh, cosh


# =============================================================================
# КОМПЛЕКСНЫЕ ФУНКЦИИ
# =============================================================================


def sqrt(z: Complex, precision: int) -> Complex:
    """
    Главная ветвь квадратного корня.

    Для z = a + bi: r = |z|, re = sqrt((r + |a|) / 2), im = b / (2 re),
    компоненты меняются местами при a < 0.
    """
    if z.is_real():
        if z.re.is_negative():
            return Complex(ZERO, sqrt_real(z.re.negate(), precision))
        return Complex(sqrt_real(z.re, precision))
    work = precision + GUARD_LIMBS
    radius = sqrt_real(z.norm(work), work)
    major = sqrt_real(radius.add(z.re.abs(), work).mul(HALF, work), work)
    minor = z.im.abs().div(major.mul(TWO, work), work)
    if not z.re.is_negative():
        real, imag = major, minor
    else:
        real, imag = minor, major
    if z.im.is_negative():
        imag = imag.negate()
    return Complex(real.round_to(precision), imag.round_to(precision))


def absolute(z: Complex, precision: int) -> Complex:
    """|z| как вещественное Complex."""
    if z.is_real():
        return Complex(z.re.abs())
    if z.re.is_zero():
        return Complex(z.im.abs())
    return Complex(sqrt_real(z.norm(precision + GUARD_LIMBS), precision))


def sign(z: Complex, precision: int) -> Complex:
    """z / |z|; ноль для нуля."""
    if z.is_zero():
        return z
    if z.is_real():
        return Complex(BigNum.from_int(z.re.sign))
    return z.div(absolute(z, precision + GUARD_LIMBS), precision)


def _to_radians(z: Complex, precision: int) -> Complex:
    factor = pi(precision).div(BigNum.from_int(180), precision)
    return z.scale(factor, precision)


def _from_radians(z: Complex, precision: int, angle_mode: str) -> Complex:
    if angle_mode != DEGREES:
        return z.round_to(precision)
    work = precision + GUARD_LIMBS
    factor = BigNum.from_int(180).div(pi(work), work)
    return z.scale(factor, precision)


def angle(z: Complex, precision: int, angle_mode: str = RADIANS) -> Complex:
    """Аргумент комплексного числа atan2(im, re)."""
    work = precision + GUARD_LIMBS
    return _from_radians(Complex(atan2_real(z.im, z.re, work)), precision, angle_mode)


def exp(z: Complex, precision: int) -> Complex:
    """e^(a+bi) = e^a (cos b + i sin b)"""
    magnitude = exp_real(z.re, precision + GUARD_LIMBS)
    if z.is_real():
        return Complex(magnitude.round_to(precision))
    sine, cosine = sin_cos_real(z.im, precision)
    return Complex(magnitude.mul(cosine, precision), magnitude.mul(sine, precision))


def ln(z: Complex, precision: int) -> Complex:
    """
    Главная ветвь: ln|z| + i arg z.

    Raises:
        DomainError: z = 0
    """
    if z.is_zero():
        raise DomainError("Logarithm of zero")
    if z.is_real() and z.re.sign > 0:
        return Complex(ln_real(z.re, precision))
    work = precision + GUARD_LIMBS
    if z.is_real():
        return Complex(ln_real(z.re.negate(), precision), pi(precision))
    magnitude = ln_real(z.norm(work), work).mul(HALF, precision)
    return Complex(magnitude, atan2_real(z.im, z.re, precision))


def log(z: Complex, base: int, precision: int) -> Complex:
    """Логарифм по активному основанию: ln(z) / ln(base)."""
    work = precision + GUARD_LIMBS
    return ln(z, work).div(Complex(ln_real(BigNum.from_int(base), work)), precision)


def sin(z: Complex, precision: int, angle_mode: str = RADIANS) -> Complex:
    """sin(a+bi) = sin a cosh b + i cos a sinh b"""
    if z.is_real():
        sine, _ = sin_cos_real(z.re, precision, angle_mode)
        return Complex(sine)
    work = precision + GUARD_LIMBS
    if angle_mode == DEGREES:
        z = _to_radians(z, work)
    sine, cosine = sin_cos_real(z.re, work)
    sinh, cosh = sinh_cosh_real(z.im, work)
    return Complex(sine.mul(cosh, precision), cosine.mul(sinh, precision))


def cos(z: Complex, precision: int, angle_mode: str = RADIANS) -> Complex:
    """cos(a+bi) = cos a cosh b - i sin a sinh b"""
    if z.is_real():
        _, cosine = sin_cos_real(z.re, precision, angle_mode)
        return Complex(cosine)
    work = precision + GUARD_LIMBS
    if angle_mode == DEGREES:
        z = _to_radians(z, work)
    sine, cosine = sin_cos_real(z.re, work)
    sinh, cosh = sinh_cosh_real(z.im, work)
    return Complex(cosine.mul(cosh, precision), sine.mul(sinh, precision).negate())


def tan(z: Complex, precision: int, angle_mode: str = RADIANS) -> Complex:
    """
    tan = sin / cos.

    Raises:
        DivisionByZero: cos округлился до точного нуля
    """
    cosine = cos(z, precision, angle_mode)
    if cosine.is_zero():
        raise DivisionByZero("Tangent is undefined where cosine is zero")
    return sin(z, precision, angle_mode).div(cosine, precision)


def asin(z: Complex, precision: int, angle_mode: str = RADIANS) -> Complex:
    """
    Арксинус: atan2(x, sqrt(1 - x^2)) при вещественном |x| <= 1,
    иначе -i ln(iz + sqrt(1 - z^2)).
    """
    work = precision + GUARD_LIMBS
    if z.is_real() and z.re.abs() <= ONE:
        root = sqrt_real(ONE.sub(z.re.mul(z.re, work), work), work)
        return _from_radians(Complex(atan2_real(z.re, root, work)), precision, angle_mode)
    rotated = I.mul(z, work)
    root = sqrt(_ONE_COMPLEX.sub(z.mul(z, work), work), work)
    logarithm = ln(rotated.add(root, work), work)
    return _from_radians(Complex(logarithm.im, logarithm.re.negate()), precision, angle_mode)


def acos(z: Complex, precision: int, angle_mode: str = RADIANS) -> Complex:
    """Арккосинус: pi/2 - asin z."""
    work = precision + GUARD_LIMBS
    half_pi = Complex(pi(work).mul(HALF, work))
    return _from_radians(half_pi.sub(asin(z, work), work), precision, angle_mode)


def atan(z: Complex, precision: int, angle_mode: str = RADIANS) -> Complex:
    """
    Арктангенс: вещественный ряд, либо (i/2) (ln(1 - iz) - ln(1 + iz)).

    Raises:
        DomainError: z = +-i
    """
    work = precision + GUARD_LIMBS
    if z.is_real():
        return _from_radians(Complex(atan_real(z.re, work)), precision, angle_mode)
    rotated = I.mul(z, work)
    difference = ln(_ONE_COMPLEX.sub(rotated, work), work).sub(ln(_ONE_COMPLEX.add(rotated, work), work), work)
    result = Complex(difference.im.negate().mul(HALF, work), difference.re.mul(HALF, work))
    return _from_radians(result, precision, angle_mode)


def erf(z: Complex, precision: int) -> Complex:
    """
    Функция ошибок: erf z = 2/sqrt(pi) e^(-z^2) sum 2^n z^(2n+1) / (2n+1)!!

    Для вещественных x с e^(-x^2) ниже точности результат равен sign(x).
    """
    if z.is_zero():
        return z
    saturation = (precision + 1) * _LN_LIMB_BASE
    if z.is_real() and z.re.abs().approximate_log10() * 2 > math.log10(saturation):
        return Complex(BigNum.from_int(z.re.sign))
    size = abs(z.to_complex())
    if not math.isfinite(size) or size * size > MAX_SERIES_TERMS / 4:
        raise ConvergenceFailure("erf argument is too large for the series")
    extra = int(size * size / _LN_LIMB_BASE) + 1
    work = precision + GUARD_LIMBS + extra
    square = z.mul(z, work)
    doubled = square.scale(TWO, work)
    term = z
    total = z
    for n in range(1, MAX_SERIES_TERMS):
        term = term.mul(doubled, work).div(Complex.from_int(2 * n + 1), work)
        largest = total.re if total.re.abs() >= total.im.abs() else total.im
        if _negligible(term.re, largest, work) and _negligible(term.im, largest, work):
            logger.debug("erf converged after %d terms", n)
            break
        total = total.add(term, work)
    else:
        raise ConvergenceFailure("erf did not converge")
    scale = TWO.div(sqrt_real(pi(work), work), work)
    damping = exp(square.negate(), work)
    return total.mul(damping, work).scale(scale, precision)


def factorial(z: Complex, precision: int) -> Complex:
    """
    n! для целого 0 <= n <= MAX_FACTORIAL_ARGUMENT.

    Raises:
        DomainError: Нецелый, отрицательный, комплексный или слишком большой аргумент
    """
    if not z.is_real() or not z.re.is_integer() or z.re.is_negative():
        raise DomainError("Factorial requires a non-negative integer")
    count = z.re.to_int()
    if count > MAX_FACTORIAL_ARGUMENT:
        raise DomainError(f"Factorial argument exceeds {MAX_FACTORIAL_ARGUMENT}")
    work = precision + GUARD_LIMBS
    result = ONE
    for factor in range(2, count + 1):
        result = result.mul(BigNum.from_int(factor), work)
    return Complex(result.round_to(precision))


def _integer_power(z: Complex, exponent: int, precision: int) -> Complex:
    if exponent == 0:
        return _ONE_COMPLEX
    if z.is_zero():
        if exponent < 0:
            raise DivisionByZero("Zero raised to a negative power")
        return z
    if z.is_real():
        return Complex(z.re.pow(exponent, precision))
    work = precision + GUARD_LIMBS + abs(exponent).bit_length() // 16
    result = _ONE_COMPLEX
    base = z
    remaining = abs(exponent)
    while remaining:
        if remaining & 1:
            result = result.mul(base, work)
        remaining >>= 1
        if remaining:
            base = base.mul(base, work)
    if exponent < 0:
        result = result.reciprocal(work)
    return result.round_to(precision)


def power(z: Complex, w: Complex, precision: int) -> Complex:
    """
    z^w: точное двоичное возведение для целого w, иначе exp(w ln z).

    Raises:
        DivisionByZero: 0 в неположительной степени
    """
    if w.is_real() and w.re.is_integer():
        return _integer_power(z, w.re.to_int(), precision)
    if z.is_zero():
        if w.re.sign > 0:
            return z
        raise DivisionByZero("Zero raised to a non-positive power")
    work = precision + GUARD_LIMBS + 1
    exponent = w.mul(ln(z, work), work)
    # большой показатель съедает лимбы точности ln z
    extra = max(exponent.re.point, exponent.im.point)
    if extra > 1:
        work += extra
        exponent = w.mul(ln(z, work), work)
    return exp(exponent, precision)
