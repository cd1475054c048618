"""
Тесты трансцендентной библиотеки

Значения сверяются с math / cmath (pytest.approx), точные случаи —
с BigNum напрямую.
"""

import cmath
import math
import random

import pytest

from radixcalc.core.errors import ConvergenceFailure, DivisionByZero, DomainError
from radixcalc.core.math import transcendental as tr
from radixcalc.core.math.bignum import HALF, ONE, TWO, ZERO, BigNum
from radixcalc.core.math.complex_number import I, Complex
from radixcalc.core.math.constants import (
    euler_e,
    euler_gamma,
    golden_ratio,
    random_gaussian,
    random_uniform,
)

PRECISION = 4


def real(value: float) -> Complex:
    return Complex(BigNum.from_float(value, PRECISION))


def c(re: int, im: int = 0) -> Complex:
    return Complex(BigNum.from_int(re), BigNum.from_int(im))


class TestConstants:
    def test_pi_limbs(self) -> None:
        value = tr.pi(3)
        assert value.digits == (3, 141_592_653, 589_793_238)
        assert value.point == 1

    def test_pi_high_precision(self) -> None:
        # 3.141592653 589793238 462643383 279502884 197169399
        assert tr.pi(5).digits == (3, 141_592_653, 589_793_238, 462_643_383, 279_502_884)

    def test_ln2(self) -> None:
        assert tr.ln2(PRECISION).to_float() == pytest.approx(math.log(2), rel=1e-15)

    def test_euler_e(self) -> None:
        assert euler_e(PRECISION).to_float() == pytest.approx(math.e, rel=1e-15)

    def test_golden_ratio(self) -> None:
        assert golden_ratio(PRECISION).to_float() == pytest.approx((1 + math.sqrt(5)) / 2, rel=1e-15)

    def test_euler_gamma(self) -> None:
        # 0.577215664 901532860 606512090
        value = euler_gamma(3)
        assert value.to_float() == pytest.approx(0.5772156649015329, rel=1e-15)
        assert value.digits[:2] == (577_215_664, 901_532_860)


class TestRandom:
    def test_uniform_range(self) -> None:
        rng = random.Random(42)
        for _ in range(50):
            value = random_uniform(PRECISION, rng)
            assert ZERO <= value < ONE

    def test_injected_generator_is_reproducible(self) -> None:
        assert random_uniform(3, random.Random(7)) == random_uniform(3, random.Random(7))

    def test_gaussian_statistics(self) -> None:
        rng = random.Random(2024)
        samples = [random_gaussian(2, rng).to_float() for _ in range(200)]
        mean = sum(samples) / len(samples)
        variance = sum((x - mean) ** 2 for x in samples) / len(samples)
        assert abs(mean) < 0.3
        assert 0.6 < variance < 1.5


class TestRealKernels:
    def test_sqrt_exact(self) -> None:
        assert tr.sqrt_real(BigNum.from_int(4), 3) == TWO
        assert tr.sqrt_real(ZERO, 3).is_zero()

    def test_sqrt_two_limbs(self) -> None:
        # 1.414213562 373095048 801688724
        assert tr.sqrt_real(TWO, 3).digits == (1, 414_213_562, 373_095_049)

    def test_sqrt_negative_real(self) -> None:
        with pytest.raises(DomainError):
            tr.sqrt_real(BigNum.from_int(-1), 3)

    @pytest.mark.parametrize("x", [0.001, 0.5, 1.0, 2.5, 10.0, 100.0, -3.0])
    def test_exp(self, x: float) -> None:
        value = tr.exp_real(BigNum.from_float(x, PRECISION), PRECISION)
        assert value.to_float() == pytest.approx(math.exp(x), rel=1e-14)

    @pytest.mark.parametrize("x", [1e-6, 0.3, 2.0, 10.0, 12345.678])
    def test_ln(self, x: float) -> None:
        value = tr.ln_real(BigNum.from_float(x, PRECISION), PRECISION)
        assert value.to_float() == pytest.approx(math.log(x), rel=1e-14)

    def test_ln_one_is_exact_zero(self) -> None:
        assert tr.ln_real(ONE, PRECISION).is_zero()

    def test_ln_domain(self) -> None:
        with pytest.raises(DomainError, match="Logarithm of zero"):
            tr.ln_real(ZERO, PRECISION)
        with pytest.raises(DomainError, match="negative"):
            tr.ln_real(BigNum.from_int(-2), PRECISION)

    @pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 3.0, -7.5, 1000.0])
    def test_atan(self, x: float) -> None:
        value = tr.atan_real(BigNum.from_float(x, PRECISION), PRECISION)
        assert value.to_float() == pytest.approx(math.atan(x), rel=1e-14)

    def test_atan2_quadrants(self) -> None:
        for y, x in [(1, 1), (1, -1), (-1, -1), (-1, 1), (0, -1), (1, 0), (-1, 0)]:
            value = tr.atan2_real(BigNum.from_int(y), BigNum.from_int(x), PRECISION)
            assert value.to_float() == pytest.approx(math.atan2(y, x), rel=1e-14)
        assert tr.atan2_real(ZERO, ZERO, PRECISION).is_zero()

    @pytest.mark.parametrize("x", [0.25, 1.0, 2.0, 4.0, -5.5, 100.0])
    def test_sin_cos(self, x: float) -> None:
        sine, cosine = tr.sin_cos_real(BigNum.from_float(x, PRECISION), PRECISION)
        assert sine.to_float() == pytest.approx(math.sin(x), rel=1e-13, abs=1e-30)
        assert cosine.to_float() == pytest.approx(math.cos(x), rel=1e-13, abs=1e-30)

    def test_multiples_of_pi_are_exact(self) -> None:
        sine, cosine = tr.sin_cos_real(tr.pi(PRECISION), PRECISION)
        assert sine.is_zero()
        assert cosine == BigNum.from_int(-1)

    def test_degrees_reduce_exactly(self) -> None:
        sine, cosine = tr.sin_cos_real(BigNum.from_int(90), PRECISION, tr.DEGREES)
        assert sine == ONE
        assert cosine.is_zero()
        sine, cosine = tr.sin_cos_real(BigNum.from_int(-180), PRECISION, tr.DEGREES)
        assert sine.is_zero()
        assert cosine == BigNum.from_int(-1)

    def test_sinh_cosh(self) -> None:
        for x in (0.5, 3.0):
            sinh, cosh = tr.sinh_cosh_real(BigNum.from_float(x, PRECISION), PRECISION)
            assert sinh.to_float() == pytest.approx(math.sinh(x), rel=1e-14)
            assert cosh.to_float() == pytest.approx(math.cosh(x), rel=1e-14)


class TestComplexFunctions:
    def test_sqrt_of_negative_real_is_imaginary(self) -> None:
        assert tr.sqrt(c(-4), PRECISION) == c(0, 2)

    def test_sqrt_complex(self) -> None:
        value = tr.sqrt(c(3, 4), PRECISION)
        assert value == c(2, 1)
        root = tr.sqrt(c(-3, -4), PRECISION)
        assert root.to_complex() == pytest.approx(cmath.sqrt(complex(-3, -4)))

    def test_absolute_and_sign(self) -> None:
        assert tr.absolute(c(3, 4), PRECISION) == c(5)
        assert tr.absolute(c(-7), PRECISION) == c(7)
        assert tr.sign(c(-7), PRECISION) == c(-1)
        assert tr.sign(c(3, 4), PRECISION).to_complex() == pytest.approx(complex(0.6, 0.8))
        assert tr.sign(Complex(ZERO), PRECISION).is_zero()

    def test_angle(self) -> None:
        assert tr.angle(I, PRECISION).re.to_float() == pytest.approx(math.pi / 2)
        assert tr.angle(c(-1, -1), PRECISION, tr.DEGREES).re.to_float() == pytest.approx(-135.0)

    def test_exp_euler_identity(self) -> None:
        value = tr.exp(Complex(ZERO, tr.pi(PRECISION)), PRECISION)
        assert value.re == BigNum.from_int(-1)
        assert value.im.is_zero()

    def test_ln_negative_real(self) -> None:
        value = tr.ln(c(-1), PRECISION)
        assert value.re.is_zero()
        assert value.im == tr.pi(PRECISION)

    def test_ln_complex(self) -> None:
        value = tr.ln(c(3, 4), PRECISION)
        assert value.to_complex() == pytest.approx(cmath.log(complex(3, 4)), rel=1e-14)

    def test_ln_zero(self) -> None:
        with pytest.raises(DomainError, match="Logarithm of zero"):
            tr.ln(Complex(ZERO), PRECISION)

    def test_log_uses_given_base(self) -> None:
        assert tr.log(c(8), 2, PRECISION).re.to_float() == pytest.approx(3.0)
        assert tr.log(c(100), 10, PRECISION).re.to_float() == pytest.approx(2.0)

    def test_trig_of_complex_argument(self) -> None:
        z = complex(1, 2)
        operand = c(1, 2)
        assert tr.sin(operand, PRECISION).to_complex() == pytest.approx(cmath.sin(z), rel=1e-13)
        assert tr.cos(operand, PRECISION).to_complex() == pytest.approx(cmath.cos(z), rel=1e-13)
        assert tr.tan(operand, PRECISION).to_complex() == pytest.approx(cmath.tan(z), rel=1e-13)

    def test_tan_at_pole(self) -> None:
        half_pi = Complex(tr.pi(PRECISION).mul(HALF, PRECISION))
        with pytest.raises(DivisionByZero, match="cosine is zero"):
            tr.tan(half_pi, PRECISION)

    def test_inverse_trig_real(self) -> None:
        assert tr.asin(real(0.5), PRECISION).re.to_float() == pytest.approx(math.asin(0.5))
        assert tr.acos(real(0.5), PRECISION).re.to_float() == pytest.approx(math.acos(0.5))
        assert tr.atan(c(1), PRECISION).re.to_float() == pytest.approx(math.pi / 4)
        assert tr.asin(real(0.5), PRECISION, tr.DEGREES).re.to_float() == pytest.approx(30.0)

    def test_asin_outside_unit_interval(self) -> None:
        value = tr.asin(c(2), PRECISION).to_complex()
        assert value.real == pytest.approx(math.pi / 2)
        assert value.imag == pytest.approx(-math.log(2 + math.sqrt(3)))

    def test_atan_complex(self) -> None:
        value = tr.atan(c(1, 1), PRECISION)
        assert value.to_complex() == pytest.approx(cmath.atan(complex(1, 1)), rel=1e-13)

    def test_erf(self) -> None:
        for x in (0.1, 0.5, 1.0, 2.5, -1.5):
            assert tr.erf(real(x), PRECISION).re.to_float() == pytest.approx(math.erf(x), rel=1e-13)

    def test_erf_saturates(self) -> None:
        assert tr.erf(c(100), PRECISION) == c(1)
        assert tr.erf(c(-100), PRECISION) == c(-1)

    def test_erf_rejects_huge_complex_argument(self) -> None:
        with pytest.raises(ConvergenceFailure):
            tr.erf(c(0, 1000), PRECISION)

    def test_factorial(self) -> None:
        assert tr.factorial(c(0), PRECISION) == c(1)
        assert tr.factorial(c(20), PRECISION) == c(2432902008176640000)

    @pytest.mark.parametrize("operand", [c(-1), c(1, 1), Complex(HALF)])
    def test_factorial_domain(self, operand: Complex) -> None:
        with pytest.raises(DomainError, match="non-negative integer"):
            tr.factorial(operand, PRECISION)

    def test_factorial_limit(self) -> None:
        with pytest.raises(DomainError, match="exceeds"):
            tr.factorial(c(tr.MAX_FACTORIAL_ARGUMENT + 1), PRECISION)


class TestPower:
    def test_integer_exponent_is_exact(self) -> None:
        assert tr.power(c(2), c(10), PRECISION) == c(1024)
        assert tr.power(I, c(2), PRECISION) == c(-1)
        assert tr.power(c(1, 1), c(4), PRECISION) == c(-4)
        assert tr.power(c(2), c(-2), PRECISION) == Complex(BigNum.from_limbs(1, [250_000_000], -1))

    def test_fractional_exponent(self) -> None:
        assert tr.power(c(2), Complex(HALF), PRECISION).re.to_float() == pytest.approx(math.sqrt(2))

    def test_complex_exponent(self) -> None:
        value = tr.power(c(2), c(1, 1), PRECISION)
        assert value.to_complex() == pytest.approx(2 ** complex(1, 1), rel=1e-13)

    def test_zero_base(self) -> None:
        assert tr.power(Complex(ZERO), Complex(HALF), PRECISION).is_zero()
        with pytest.raises(DivisionByZero):
            tr.power(Complex(ZERO), c(-1), PRECISION)
        with pytest.raises(DivisionByZero):
            tr.power(Complex(ZERO), Complex(HALF.negate()), PRECISION)
