"""
Mathematical Constants — pi, e, gamma, phi, rand, grand

Детерминированные константы кэшируются по точности (lru_cache), случайные
вычисляются при каждом обращении из общего генератора процесса либо из
переданного random.Random.
"""

import math
import random
from functools import lru_cache
from typing import Final, Optional

from radixcalc.core.errors import ConvergenceFailure
from radixcalc.core.math.bignum import GUARD_LIMBS, HALF, ONE, TWO, BigNum
from radixcalc.core.math.complex_number import Complex
from radixcalc.core.math.limbs import LIMB_BASE, LIMB_DIGITS
from radixcalc.core.math.transcendental import cos, exp_real, ln_real, pi, sqrt_real

# Общий генератор процесса; сид берётся из энтропии ОС
_PROCESS_RNG: Final[random.Random] = random.Random()


def euler_e(precision: int) -> BigNum:
    return exp_real(ONE, precision)


@lru_cache(maxsize=32)
def golden_ratio(precision: int) -> BigNum:
    """phi = (1 + sqrt 5) / 2"""
    work = precision + GUARD_LIMBS
    root = sqrt_real(BigNum.from_int(5), work)
    return ONE.add(root, work).mul(HALF, precision)


@lru_cache(maxsize=32)
def euler_gamma(precision: int) -> BigNum:
    """
    Постоянная Эйлера-Маскерони по алгоритму Брента-Макмиллана.

    A_0 = -ln n, B_0 = 1, U_0 = A_0, V_0 = 1
    B_k = B_{k-1} n^2 / k^2
    A_k = (A_{k-1} n^2 / k + B_k) / k
    gamma ~ U / V, погрешность порядка e^(-4n).
    """
    work = precision + GUARD_LIMBS + 1
    order = math.ceil(work * LIMB_DIGITS * math.log(10) / 4) + 1
    square = BigNum.from_int(order * order)
    a_term = ln_real(BigNum.from_int(order), work).negate()
    b_term = ONE
    numerator = a_term
    denominator = ONE
    for k in range(1, 10 * order + 100):
        index = BigNum.from_int(k)
        b_term = b_term.mul(square, work).div(BigNum.from_int(k * k), work)
        a_term = a_term.mul(square, work).div(index, work).add(b_term, work).div(index, work)
        if k > order and _below(a_term, numerator, work) and _below(b_term, denominator, work):
            return numerator.div(denominator, precision)
        numerator = numerator.add(a_term, work)
        denominator = denominator.add(b_term, work)
    raise ConvergenceFailure("Euler-Mascheroni constant did not converge")


def _below(term: BigNum, total: BigNum, precision: int) -> bool:
    return term.is_zero() or term.point < total.point - precision


def random_uniform(precision: int, rng: Optional[random.Random] = None) -> BigNum:
    """Равномерное значение из [0, 1) с precision случайными лимбами."""
    source = rng or _PROCESS_RNG
    limbs = [source.randrange(LIMB_BASE) for _ in range(precision)]
    return BigNum.from_limbs(1, limbs, -precision)


def random_gaussian(precision: int, rng: Optional[random.Random] = None) -> BigNum:
    """
    Стандартное нормальное значение преобразованием Бокса-Мюллера:
    sqrt(-2 ln u1) cos(2 pi u2), u1 из (0, 1].
    """
    work = precision + GUARD_LIMBS
    first = ONE.sub(random_uniform(work, rng), work)
    second = random_uniform(work, rng)
    radius = sqrt_real(ln_real(first, work).mul(TWO, work).negate(), work)
    turn = Complex(second.mul(pi(work), work).mul(TWO, work))
    return radius.mul(cos(turn, work).re, precision)
