"""
Тесты лимбовых ядер (основание 10**9)

Результаты сверяются с целыми Python через from_int / to_int.
"""

import pytest

from radixcalc.core.math import limbs
from radixcalc.core.math.limbs import LIMB_BASE

SAMPLES = [
    0,
    1,
    999_999_999,
    10**9,
    123_456_789_012_345_678_901,
    2**200 + 12345,
    7**90,
]


def test_int_conversion_round_trip() -> None:
    for value in SAMPLES:
        assert limbs.to_int(limbs.from_int(value)) == value
    assert limbs.from_int(10**9) == [1, 0]
    with pytest.raises(ValueError):
        limbs.from_int(-1)


def test_normalize() -> None:
    assert limbs.normalize([0, 0, 5, 0]) == [5, 0]
    assert limbs.normalize([0, 0]) == [0]
    assert limbs.normalize([]) == [0]


def test_compare() -> None:
    assert limbs.compare([1, 0], [999_999_999]) == 1
    assert limbs.compare([0, 7], [7]) == 0
    assert limbs.compare([3], [4]) == -1


class TestAddSubtract:
    def test_carry_propagates(self) -> None:
        assert limbs.add([999_999_999], [1]) == [1, 0]
        assert limbs.add([999_999_999, 999_999_999], [1]) == [1, 0, 0]

    def test_borrow_propagates(self) -> None:
        assert limbs.subtract([1, 0], [1]) == [999_999_999]
        assert limbs.subtract([5], [5]) == [0]

    def test_subtract_requires_larger_minuend(self) -> None:
        with pytest.raises(ValueError, match="exceeds"):
            limbs.subtract([1], [2])
        with pytest.raises(ValueError, match="exceeds"):
            limbs.subtract([1], [1, 0])

    def test_against_python_ints(self) -> None:
        for a in SAMPLES:
            for b in SAMPLES:
                total = limbs.add(limbs.from_int(a), limbs.from_int(b))
                assert limbs.to_int(total) == a + b
                if a >= b:
                    difference = limbs.subtract(limbs.from_int(a), limbs.from_int(b))
                    assert limbs.to_int(difference) == a - b


class TestMultiply:
    def test_against_python_ints(self) -> None:
        for a in SAMPLES:
            for b in SAMPLES:
                product = limbs.multiply(limbs.from_int(a), limbs.from_int(b))
                assert limbs.to_int(product) == a * b

    def test_multiply_small(self) -> None:
        assert limbs.to_int(limbs.multiply_small(limbs.from_int(7**90), 36)) == 7**90 * 36
        assert limbs.multiply_small([5], 0) == [0]
        with pytest.raises(ValueError):
            limbs.multiply_small([5], -1)

    def test_shift_and_power(self) -> None:
        assert limbs.shift([12], 2) == [12, 0, 0]
        assert limbs.shift([0], 3) == [0]
        assert limbs.to_int(limbs.power([2], 100)) == 2**100
        assert limbs.power([36], 0) == [1]


class TestDivision:
    def test_divmod_small(self) -> None:
        quotient, remainder = limbs.divmod_small(limbs.from_int(10**20 + 7), 36)
        assert limbs.to_int(quotient) == (10**20 + 7) // 36
        assert remainder == (10**20 + 7) % 36

    def test_divmod_limbs_against_python_ints(self) -> None:
        divisors = [3, LIMB_BASE - 1, LIMB_BASE + 1, 10**18 + 3, 3**70, 2**150 - 1]
        for a in SAMPLES:
            for b in divisors:
                quotient, remainder = limbs.divmod_limbs(limbs.from_int(a), limbs.from_int(b))
                assert limbs.to_int(quotient) == a // b
                assert limbs.to_int(remainder) == a % b

    def test_quotient_estimate_correction(self) -> None:
        # делитель с малым вторым лимбом провоцирует завышенную оценку
        a = (10**9 - 1) * 10**36 + 5
        b = 10**18 + 1
        quotient, remainder = limbs.divmod_limbs(limbs.from_int(a), limbs.from_int(b))
        assert limbs.to_int(quotient) == a // b
        assert limbs.to_int(remainder) == a % b

    def test_division_by_zero(self) -> None:
        with pytest.raises(ZeroDivisionError):
            limbs.divmod_limbs([5], [0])
        with pytest.raises(ZeroDivisionError):
            limbs.divmod_small([5], 0)
