"""
Тесты алфавита цифр и имён оснований
"""

import pytest

from radixcalc.core.errors import InvalidConfiguration
from radixcalc.core.math.alphabet import (
    BASE_NAMES,
    base_name,
    base_symbol,
    digit_alphabet,
    digit_char,
    digit_value,
    is_digit_symbol,
    validate_base,
)


class TestValidateBase:
    """Допустимы только целые основания 2..36"""

    @pytest.mark.parametrize("base", [2, 10, 16, 36])
    def test_accepts_supported_bases(self, base: int) -> None:
        assert validate_base(base) == base

    @pytest.mark.parametrize("base", [0, 1, 37, -10])
    def test_rejects_out_of_range(self, base: int) -> None:
        with pytest.raises(InvalidConfiguration, match="between 2 and 36"):
            validate_base(base)

    def test_rejects_non_integers(self) -> None:
        with pytest.raises(InvalidConfiguration, match="integer"):
            validate_base(10.0)
        with pytest.raises(InvalidConfiguration, match="integer"):
            validate_base(True)


class TestDigits:
    def test_alphabet_prefix(self) -> None:
        assert digit_alphabet(2) == "01"
        assert digit_alphabet(16) == "0123456789ABCDEF"
        assert len(digit_alphabet(36)) == 36

    def test_digit_value_is_case_insensitive(self) -> None:
        assert digit_value("b", 12) == 11
        assert digit_value("B", 12) == 11
        assert digit_value("z") == 35

    def test_digit_value_respects_base(self) -> None:
        assert digit_value("C", 12) is None
        assert digit_value("2", 2) is None
        assert digit_value("1", 2) == 1

    def test_non_alphabet_characters(self) -> None:
        assert digit_value("+") is None
        assert digit_value("ß") is None
        assert digit_value("") is None
        assert not is_digit_symbol("ß")
        assert not is_digit_symbol(".")
        assert is_digit_symbol("q")

    def test_digit_char(self) -> None:
        assert digit_char(0) == "0"
        assert digit_char(35) == "Z"
        with pytest.raises(ValueError):
            digit_char(36)


class TestBaseNames:
    def test_every_base_has_a_name(self) -> None:
        assert sorted(BASE_NAMES) == list(range(2, 37))

    def test_well_known_names(self) -> None:
        assert base_name(2) == "Binary"
        assert base_name(10) == "Decimal"
        assert base_name(12) == "Dozenal"
        assert base_name(16) == "Hexadecimal"
        assert base_name(36) == "Hexatrigesimal"

    def test_base_symbol(self) -> None:
        assert base_symbol(10) == "A"
        assert base_symbol(12) == "C"
        assert base_symbol(2) == "2"
        assert base_symbol(36) == "Z+1"
