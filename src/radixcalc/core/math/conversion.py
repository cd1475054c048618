"""
Base Converter & Formatter

Преобразование между текстом в основании 2..36 и BigNum в обе стороны.

Разбор (parse_literal, bignum_from_digits):
- Игнорируемые символы (пробел, табуляция, подчёркивание) удаляются
- Цифры накапливаются повторным умножением со сложением в лимбах
- Дробная часть: одно деление мантиссы на base**k с заданной точностью

Вывод (format_number, format_complex):
- Масштабированное целое round(|x| * base**(n - 1 - dp)) с ограниченной
  точностью, цифры — повторным делением на base
- Группы по 3 цифры от точки, '~' при усечении
- Вне окна -1 <= dp < n: мантисса с точкой после первой цифры и ' :<dp>'
  (порядок — степень основания, записанная цифрами того же основания)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. parse_literal принимает собственный вывод format_number
2. '~' ставится, только если отброшенный остаток больше 2**-17 / base
   единицы последней цифры; меньший остаток считается погрешностью округления
"""

import math
from typing import Final, Optional, Sequence

from radixcalc.core.errors import InvalidConfiguration, InvalidDigit
from radixcalc.core.math import limbs as limb_ops
from radixcalc.core.math.alphabet import digit_char, digit_value, validate_base
from radixcalc.core.math.bignum import GUARD_LIMBS, ONE, BigNum
from radixcalc.core.math.complex_number import Complex
from radixcalc.core.math.limbs import LIMB_BASE

# =============================================================================
# СИНТАКСИС
# =============================================================================

IGNORED_CHARACTERS: Final[frozenset[str]] = frozenset(" \t_")
RADIX_POINT: Final[str] = "."
TRUNCATION_MARK: Final[str] = "~"
EXPONENT_MARK: Final[str] = ":"
GROUP_WIDTH: Final[int] = 3
TRUNCATION_TOLERANCE_BITS: Final[int] = 17


# =============================================================================
# РАЗБОР
# =============================================================================


def literal_precision(significant_digits: int, base: int) -> int:
    """Точность (в лимбах), достаточная для significant_digits цифр основания."""
    needed = math.ceil(max(significant_digits, 1) * math.log(base) / math.log(LIMB_BASE))
    return max(needed, 1) + GUARD_LIMBS


def bignum_from_digits(
    integer_digits: Sequence[int],
    fraction_digits: Sequence[int],
    base: int,
    precision: Optional[int] = None,
    negative: bool = False,
    exponent: int = 0,
) -> BigNum:
    """
    Значение (integer.fraction)_base * base**exponent.

    Без precision точность выводится из числа значащих позиций, так что
    целые литералы переводятся точно.
    """
    values = list(integer_digits) + list(fraction_digits)
    scale = exponent - len(fraction_digits)
    while values and values[-1] == 0:
        values.pop()
        scale += 1
    start = 0
    while start < len(values) and values[start] == 0:
        start += 1
    values = values[start:]
    if not values:
        return BigNum.zero(precision)
    if precision is None:
        precision = literal_precision(len(values) + max(scale, 0), base)

    mantissa = [0]
    for value in values:
        mantissa = limb_ops.add(limb_ops.multiply_small(mantissa, base), [value])
    sign = -1 if negative else 1
    if scale >= 0:
        body = limb_ops.multiply(mantissa, limb_ops.power([base], scale))
        return BigNum.from_limbs(sign, body, 0, precision)
    denominator = BigNum.from_limbs(1, limb_ops.power([base], -scale))
    return BigNum.from_limbs(sign, mantissa).div(denominator, precision)


def _parse_exponent(text: str, base: int) -> int:
    """Порядок ':<dp>' — степень основания, записанная цифрами основания."""
    negative = text.startswith("-")
    body = text[1:] if text[:1] in ("-", "+") else text
    if not body:
        raise InvalidDigit("Missing exponent digits")
    value = 0
    for char in body:
        digit = digit_value(char, base)
        if digit is None:
            raise InvalidDigit(f"Invalid exponent digit '{char}' for base {base}")
        value = value * base + digit
    return -value if negative else value


def parse_literal(text: str, base: int, precision: Optional[int] = None) -> BigNum:
    """
    Разбор вещественного литерала в основании base.

    Допускаются ведущие знаки, одна точка, игнорируемые символы, а также
    суффиксы вывода форматтера ('~' и ':<порядок>').

    Raises:
        InvalidDigit: Недопустимый символ, вторая точка или нет ни одной цифры
    """
    base = validate_base(base)
    cleaned = "".join(char for char in text if char not in IGNORED_CHARACTERS)

    negative = False
    index = 0
    while index < len(cleaned) and cleaned[index] in "+-":
        negative ^= cleaned[index] == "-"
        index += 1
    body = cleaned[index:]

    exponent = 0
    if EXPONENT_MARK in body:
        body, exponent_text = body.split(EXPONENT_MARK, 1)
        exponent = _parse_exponent(exponent_text, base)
    if body.endswith(TRUNCATION_MARK):
        body = body[: -len(TRUNCATION_MARK)]

    integer_digits: list[int] = []
    fraction_digits: list[int] = []
    seen_point = False
    for char in body:
        if char == RADIX_POINT:
            if seen_point:
                raise InvalidDigit("Multiple radix points")
            seen_point = True
            continue
        digit = digit_value(char, base)
        if digit is None:
            raise InvalidDigit(f"Invalid digit '{char}' for base {base}")
        (fraction_digits if seen_point else integer_digits).append(digit)

    if not integer_digits and not fraction_digits:
        raise InvalidDigit("Literal has no digits")
    return bignum_from_digits(integer_digits, fraction_digits, base, precision, negative, exponent)


# =============================================================================
# ВЫВОД
# =============================================================================


def format_integer(value: int, base: int) -> str:
    """Целое Python в основании base (для порядков и сообщений)."""
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    chars = []
    while value:
        value, digit = divmod(value, base)
        chars.append(digit_char(digit))
    return sign + "".join(reversed(chars))


def _base_digits(quotient: Sequence[int], base: int, count: int) -> str:
    """count младших цифр лимбового целого в основании base."""
    chars = []
    rest = list(quotient)
    for _ in range(count):
        rest, digit = limb_ops.divmod_small(rest, base)
        chars.append(digit_char(digit))
    return "".join(reversed(chars))


def _significant_digits(magnitude: BigNum, base: int, count: int) -> tuple[str, int, bool]:
    """
    Первые count цифр |x| в основании base.

    |x| масштабируется на base**(count - 1 - dp) с ограниченной точностью,
    так что стоимость не зависит от величины порядка.

    Returns:
        (цифры, позиция старшей цифры dp, признак усечения)
    """
    precision = len(magnitude.digits) + literal_precision(count, base) + 1
    radix = BigNum.from_int(base)
    log_base = math.log10(base)
    leading = math.floor(magnitude.approximate_log10() / log_base)
    upper = limb_ops.power([base], count)
    lower = limb_ops.power([base], count - 1)
    for _ in range(8):
        shift = count - 1 - leading
        if shift >= 0:
            scaled = magnitude.mul(radix.pow(shift, precision), precision)
        else:
            scaled = magnitude.div(radix.pow(-shift, precision), precision)

        # оценка dp по float грубая для огромных порядков
        drift = math.floor(scaled.approximate_log10() / log_base) - (count - 1)
        if abs(drift) > 1:
            leading += drift
            continue

        rounded = scaled.round_integer()
        quotient = limb_ops.shift(list(rounded.digits), rounded.exponent)
        if limb_ops.compare(quotient, upper) >= 0:
            leading += 1
            continue
        if limb_ops.compare(quotient, lower) < 0:
            leading -= 1
            continue
        residue = scaled.sub(rounded).abs()
        truncated = residue.mul(BigNum.from_int(base << TRUNCATION_TOLERANCE_BITS)) > ONE
        return _base_digits(quotient, base, count), leading, truncated
    raise ArithmeticError("Leading digit position did not settle")


def _layout(digits: str, leading: int, truncated: bool, base: int) -> str:
    """Группировка, точка, '~' и порядок."""
    whole: list[str] = []
    fraction: list[str] = []
    for place, char in enumerate(digits, start=1):
        offset = place - leading
        if offset <= 1:
            whole.append(char)
            if offset % GROUP_WIDTH == 1 and offset != 1:
                whole.append(" ")
        else:
            fraction.append(char)
            if offset % GROUP_WIDTH == 1:
                fraction.append(" ")
    mark = TRUNCATION_MARK if truncated else ""

    if -1 <= leading < len(digits):
        integer_text = "".join(whole) or "0"
        fraction_text = "".join(fraction).rstrip("0 ")
        if fraction_text:
            return f"{integer_text}{RADIX_POINT}{fraction_text}{mark}"
        return f"{integer_text}{mark}"

    # мантисса группируется от первой цифры: '1.86 BA3 547'
    significant = digits.rstrip("0")
    grouped = " ".join(
        significant[start : start + GROUP_WIDTH] for start in range(0, len(significant), GROUP_WIDTH)
    )
    mantissa = grouped[0]
    if len(grouped) > 1:
        mantissa = f"{mantissa}{RADIX_POINT}{grouped[1:]}"
    return f"{mantissa}{mark} {EXPONENT_MARK}{format_integer(leading, base)}"


def format_number(value: BigNum, base: int, digit_count: int) -> str:
    """
    Каноническое представление BigNum с digit_count значащими цифрами.

    Examples:
        >>> format_number(BigNum.from_int(14), 10, 12)
        '14'
        >>> format_number(BigNum.from_int(1024), 10, 12)
        '1 024'
    """
    base = validate_base(base)
    if digit_count < 1:
        raise InvalidConfiguration(f"digit_count must be positive, got {digit_count}")
    if value.is_zero():
        return "0"
    digits, leading, truncated = _significant_digits(value.abs(), base, digit_count)
    text = _layout(digits, leading, truncated, base)
    return f"-{text}" if value.is_negative() else text


def format_complex(value: Complex, base: int, digit_count: int) -> str:
    """'[re, im]' либо вещественная часть, если im в точности ноль."""
    real = format_number(value.re, base, digit_count)
    if value.is_real():
        return real
    return f"[{real}, {format_number(value.im, base, digit_count)}]"
