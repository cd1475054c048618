"""
Тесты Complex — пары BigNum
"""

import pytest

from radixcalc.core.errors import DivisionByZero
from radixcalc.core.math.bignum import HALF, ONE, ZERO, BigNum
from radixcalc.core.math.complex_number import I, Complex

PRECISION = 4


def c(re: int, im: int = 0) -> Complex:
    return Complex(BigNum.from_int(re), BigNum.from_int(im))


class TestBasics:
    def test_real_values_have_exact_zero_imaginary_part(self) -> None:
        value = Complex.from_int(5)
        assert value.is_real()
        assert value.im.is_zero()
        assert not I.is_real()

    def test_zero(self) -> None:
        assert Complex(ZERO).is_zero()
        assert not I.is_zero()

    def test_negate_and_conjugate(self) -> None:
        assert c(3, -4).negate() == c(-3, 4)
        assert c(3, -4).conjugate() == c(3, 4)

    def test_to_complex(self) -> None:
        assert c(3, -4).to_complex() == complex(3, -4)


class TestArithmetic:
    def test_add_sub(self) -> None:
        assert c(1, 2).add(c(3, -5)) == c(4, -3)
        assert c(1, 2).sub(c(1, 2)).is_zero()

    def test_multiply(self) -> None:
        assert c(3, 4).mul(c(1, -1)) == c(7, 1)
        assert I.mul(I) == c(-1)

    def test_scale_and_norm(self) -> None:
        assert c(3, 4).scale(HALF) == Complex(BigNum.from_limbs(1, [1, 500_000_000], -1), BigNum.from_int(2))
        assert c(3, 4).norm() == BigNum.from_int(25)

    def test_divide(self) -> None:
        assert c(7, 1).div(c(1, -1), PRECISION) == c(3, 4)
        assert c(6, 8).div(c(2), PRECISION) == c(3, 4)

    def test_reciprocal_of_i(self) -> None:
        assert I.reciprocal(PRECISION) == c(0, -1)

    def test_divide_by_zero(self) -> None:
        with pytest.raises(DivisionByZero, match="Division by zero"):
            c(1, 1).div(Complex(ZERO), PRECISION)


class TestModulus:
    def test_component_wise(self) -> None:
        assert c(7, 5).mod(c(3, 2)) == c(1, 1)
        assert c(-7, 5).mod(c(3, -2)) == c(2, -1)

    def test_zero_divisor_component_yields_zero(self) -> None:
        assert c(7, 5).mod(c(3)) == c(1)
        assert c(7, 5).mod(c(0, 3)) == c(0, 2)

    def test_modulus_by_zero(self) -> None:
        with pytest.raises(DivisionByZero, match="Modulus by zero"):
            c(7, 5).mod(Complex(ZERO))


class TestComponentFunctions:
    def test_parts(self) -> None:
        assert c(3, 4).real_part() == c(3)
        assert c(3, 4).imag_part() == c(4)

    def test_integer_parts(self) -> None:
        half = Complex(HALF, HALF.negate())
        assert half.floor() == c(0, -1)
        assert half.ceil() == c(1, 0)
        assert half.round_integer() == c(1, -1)
        assert half.truncate().is_zero()
        assert half.fraction() == half

    def test_round_to(self) -> None:
        third = Complex(ONE.div(BigNum.from_int(3), 3))
        assert third.round_to(1).re.digits == (333_333_333,)
