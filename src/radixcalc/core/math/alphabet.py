"""
Digit Alphabet & Base Config

Чистые функции без состояния:
- Алфавит цифр основания (0-9, A-Z), регистр при разборе не важен
- Значение символа-цифры в основании и обратно
- Имена оснований (Binary ... Hexatrigesimal) и их однозначный символ

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Поддерживаются только основания 2..36
2. Символ допустим в основании b, только если его значение < b
"""

from typing import Final, Optional

from radixcalc.core.errors import InvalidConfiguration

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

DIGIT_ALPHABET: Final[str] = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

MIN_BASE: Final[int] = 2
MAX_BASE: Final[int] = 36

BASE_NAMES: Final[dict[int, str]] = {
    2: "Binary",
    3: "Ternary",
    4: "Quaternary",
    5: "Quinary",
    6: "Senary",
    7: "Septenary",
    8: "Octal",
    9: "Nonary",
    10: "Decimal",
    11: "Undecimal",
    12: "Dozenal",
    13: "Tridecimal",
    14: "Tetradecimal",
    15: "Pentadecimal",
    16: "Hexadecimal",
    17: "Heptadecimal",
    18: "Octodecimal",
    19: "Enneadecimal",
    20: "Vigesimal",
    21: "Unvigesimal",
    22: "Duovigesimal",
    23: "Trivigesimal",
    24: "Tetravigesimal",
    25: "Pentavigesimal",
    26: "Hexavigesimal",
    27: "Heptavigesimal",
    28: "Octovigesimal",
    29: "Enneavigesimal",
    30: "Trigesimal",
    31: "Untrigesimal",
    32: "Duotrigesimal",
    33: "Tritrigesimal",
    34: "Tetratrigesimal",
    35: "Pentatrigesimal",
    36: "Hexatrigesimal",
}


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_base(base: int) -> int:
    """
    Проверка основания системы счисления.

    Raises:
        InvalidConfiguration: Если base не целое число в диапазоне 2..36
    """
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidConfiguration(f"Base must be an integer, got {base!r}")
    if not MIN_BASE <= base <= MAX_BASE:
        raise InvalidConfiguration(f"Base must be between {MIN_BASE} and {MAX_BASE}, got {base}")
    return base


# =============================================================================
# ЦИФРЫ
# =============================================================================


def digit_alphabet(base: int) -> str:
    """Упорядоченный алфавит цифр основания."""
    return DIGIT_ALPHABET[: validate_base(base)]


def digit_value(char: str, base: int = MAX_BASE) -> Optional[int]:
    """
    Значение символа-цифры в основании base.

    Returns:
        Значение 0..base-1 или None, если символ не цифра этого основания

    Examples:
        >>> digit_value("b", 12)
        11
        >>> digit_value("C", 12) is None
        True
    """
    if len(char) != 1 or not char.isascii():
        return None
    value = DIGIT_ALPHABET.find(char.upper())
    if value < 0 or value >= base:
        return None
    return value


def digit_char(value: int) -> str:
    """Символ цифры со значением value (0..35)."""
    if not 0 <= value < MAX_BASE:
        raise ValueError(f"Digit value out of range: {value}")
    return DIGIT_ALPHABET[value]


def is_digit_symbol(char: str) -> bool:
    """Символ из полного алфавита 0-9A-Z (без учёта регистра)."""
    return len(char) == 1 and char.isascii() and char.upper() in DIGIT_ALPHABET


# =============================================================================
# ИМЕНА ОСНОВАНИЙ
# =============================================================================


def base_symbol(base: int) -> str:
    """
    Основание, записанное одной цифрой: 10 -> "A", 12 -> "C", 36 -> "Z+1".

    Так основание вводится командой ':base'.
    """
    validate_base(base)
    if base == MAX_BASE:
        return "Z+1"
    return DIGIT_ALPHABET[base]


def base_name(base: int) -> str:
    """Человекочитаемое имя основания, например 'Dozenal'."""
    return BASE_NAMES[validate_base(base)]
