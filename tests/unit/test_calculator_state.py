"""
Тесты CalculatorState: значения по умолчанию, сеттеры и история
"""

import logging

import pytest

from radixcalc.core.domain.calculator_state import (
    DEFAULT_BASE,
    DEFAULT_DIGITS,
    AngleMode,
    CalculatorState,
    validate_angle_mode,
    validate_digits,
)
from radixcalc.core.errors import HistoryIndexOutOfRange, InvalidConfiguration
from radixcalc.core.math.bignum import BigNum
from radixcalc.core.math.complex_number import Complex


def c(value: int) -> Complex:
    return Complex(BigNum.from_int(value))


def test_defaults() -> None:
    state = CalculatorState()
    assert state.base == DEFAULT_BASE == 10
    assert state.digits == DEFAULT_DIGITS == 12
    assert state.angle_mode is AngleMode.RADIANS
    assert state.history == ()
    assert state.precision == 4
    assert state.debug is False


def test_precision_follows_configuration() -> None:
    state = CalculatorState()
    state.set_digits(100)
    assert state.precision == 14
    state.set_base(2)
    assert state.precision == 6


class TestSetters:
    @pytest.mark.parametrize("base", [1, 37, 0])
    def test_invalid_base_leaves_state(self, base: int) -> None:
        state = CalculatorState(base=16)
        with pytest.raises(InvalidConfiguration):
            state.set_base(base)
        assert state.base == 16

    @pytest.mark.parametrize("digits", [0, -5, True, 2.5])
    def test_invalid_digits_leave_state(self, digits) -> None:
        state = CalculatorState(digits=20)
        with pytest.raises(InvalidConfiguration):
            state.set_digits(digits)
        assert state.digits == 20

    def test_invalid_angle_mode(self) -> None:
        state = CalculatorState(angle_mode="degrees")
        with pytest.raises(InvalidConfiguration, match="Unknown angle mode"):
            state.set_angle_mode("gradians")
        assert state.angle_mode is AngleMode.DEGREES

    def test_constructor_validates(self) -> None:
        with pytest.raises(InvalidConfiguration):
            CalculatorState(base=40)
        with pytest.raises(InvalidConfiguration):
            CalculatorState(digits=0)

    def test_validators(self) -> None:
        assert validate_digits(1) == 1
        assert validate_angle_mode("radians") is AngleMode.RADIANS

    def test_setters_log_changes(self, caplog: pytest.LogCaptureFixture) -> None:
        state = CalculatorState()
        with caplog.at_level(logging.INFO, logger="radixcalc"):
            state.set_base(12)
            state.set_angle_mode(AngleMode.DEGREES)
        assert "Base set to Dozenal (12)" in caplog.text
        assert "Angle units set to degrees" in caplog.text


class TestHistory:
    def test_append_returns_one_based_index(self) -> None:
        state = CalculatorState()
        assert state.append_history(c(5)) == 1
        assert state.append_history(c(7)) == 2
        assert state.resolve_history(1) == c(5)
        assert state.resolve_history() == c(7)

    def test_out_of_range(self) -> None:
        state = CalculatorState(history=[c(1)])
        with pytest.raises(HistoryIndexOutOfRange, match="out of range \\(1..1\\)"):
            state.resolve_history(2)
        with pytest.raises(HistoryIndexOutOfRange):
            state.resolve_history(0)

    def test_empty(self) -> None:
        with pytest.raises(HistoryIndexOutOfRange, match="History is empty"):
            CalculatorState().resolve_history()

    def test_history_view_is_immutable(self) -> None:
        state = CalculatorState(history=[c(1)])
        view = state.history
        state.append_history(c(2))
        assert len(view) == 1
        assert len(state.history) == 2

    def test_configuration_does_not_touch_history(self) -> None:
        state = CalculatorState(history=[c(3)])
        state.set_base(2)
        state.set_digits(5)
        assert state.resolve_history(1) == c(3)
