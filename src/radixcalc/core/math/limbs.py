"""
Limb Arithmetic — беззнаковые целые в основании LIMB_BASE

Низкоуровневые ядра BigNum. Число представлено списком лимбов (цифр
основания 10**9), старший лимб первым. Все функции чистые: входные списки
не изменяются, результат всегда нормализован (без ведущих нулевых лимбов,
ноль = [0]).

Операции:
- add / subtract: перенос и заём справа налево
- multiply: свёртка лимбовых массивов с последующим распространением переноса
- divmod_small / divmod_limbs: длинное деление (на один лимб и общее)
- shift, power, from_int, to_int: вспомогательные преобразования

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждый лимб в диапазоне [0, LIMB_BASE)
2. subtract требует a >= b
3. Деление на ноль поднимает ZeroDivisionError (ловится уровнем BigNum)
"""

from typing import Final, Sequence

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

LIMB_BASE: Final[int] = 10**9
LIMB_DIGITS: Final[int] = 9

Limbs = list[int]


# =============================================================================
# НОРМАЛИЗАЦИЯ И СРАВНЕНИЕ
# =============================================================================


def normalize(limbs: Sequence[int]) -> Limbs:
    """Удаляет ведущие нулевые лимбы; пустой или нулевой массив -> [0]."""
    start = 0
    while start < len(limbs) - 1 and limbs[start] == 0:
        start += 1
    result = list(limbs[start:])
    return result if result else [0]


def is_zero(limbs: Sequence[int]) -> bool:
    return all(limb == 0 for limb in limbs)


def compare(a: Sequence[int], b: Sequence[int]) -> int:
    """Сравнение величин: -1, 0 или 1."""
    a = normalize(a)
    b = normalize(b)
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    if a == b:
        return 0
    return -1 if a < b else 1


# =============================================================================
# СЛОЖЕНИЕ И ВЫЧИТАНИЕ
# =============================================================================


def add(a: Sequence[int], b: Sequence[int]) -> Limbs:
    result = []
    carry = 0
    i = len(a) - 1
    j = len(b) - 1
    while i >= 0 or j >= 0 or carry:
        total = carry
        if i >= 0:
            total += a[i]
        if j >= 0:
            total += b[j]
        carry, limb = divmod(total, LIMB_BASE)
        result.append(limb)
        i -= 1
        j -= 1
    result.reverse()
    return normalize(result)


def subtract(a: Sequence[int], b: Sequence[int]) -> Limbs:
    """
    Разность a - b для a >= b.

    Raises:
        ValueError: Если b > a
    """
    a = normalize(a)
    b = normalize(b)
    if len(b) > len(a):
        raise ValueError("Subtrahend exceeds minuend")
    result = []
    borrow = 0
    j = len(b) - 1
    for i in range(len(a) - 1, -1, -1):
        diff = a[i] - borrow
        if j >= 0:
            diff -= b[j]
            j -= 1
        if diff < 0:
            diff += LIMB_BASE
            borrow = 1
        else:
            borrow = 0
        result.append(diff)
    if borrow:
        raise ValueError("Subtrahend exceeds minuend")
    result.reverse()
    return normalize(result)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def multiply(a: Sequence[int], b: Sequence[int]) -> Limbs:
    """
    Произведение: свёртка лимбов и один проход распространения переноса.

    Накопитель свёртки — целые Python, поэтому суммы произведений
    не переполняются до прохода переноса.
    """
    if is_zero(a) or is_zero(b):
        return [0]
    low_a = a[::-1]
    low_b = b[::-1]
    acc = [0] * (len(a) + len(b))
    for i, x in enumerate(low_a):
        if x == 0:
            continue
        for j, y in enumerate(low_b):
            acc[i + j] += x * y
    carry = 0
    for k in range(len(acc)):
        carry, acc[k] = divmod(acc[k] + carry, LIMB_BASE)
    while carry:
        carry, limb = divmod(carry, LIMB_BASE)
        acc.append(limb)
    acc.reverse()
    return normalize(acc)


def multiply_small(a: Sequence[int], factor: int) -> Limbs:
    """Умножение на неотрицательное целое Python."""
    if factor < 0:
        raise ValueError(f"factor must be non-negative, got {factor}")
    if factor == 0 or is_zero(a):
        return [0]
    result = []
    carry = 0
    for limb in reversed(a):
        carry, low = divmod(limb * factor + carry, LIMB_BASE)
        result.append(low)
    while carry:
        carry, low = divmod(carry, LIMB_BASE)
        result.append(low)
    result.reverse()
    return normalize(result)


def shift(a: Sequence[int], count: int) -> Limbs:
    """Умножение на LIMB_BASE**count (count >= 0)."""
    if is_zero(a):
        return [0]
    return normalize(a) + [0] * count


def power(a: Sequence[int], exponent: int) -> Limbs:
    """Возведение в неотрицательную степень двоичным методом."""
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")
    result = [1]
    base = normalize(a)
    while exponent:
        if exponent & 1:
            result = multiply(result, base)
        exponent >>= 1
        if exponent:
            base = multiply(base, base)
    return result


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def divmod_small(a: Sequence[int], divisor: int) -> tuple[Limbs, int]:
    """Длинное деление на положительное целое Python: (частное, остаток)."""
    if divisor <= 0:
        raise ZeroDivisionError("division by zero")
    quotient = []
    remainder = 0
    for limb in a:
        remainder = remainder * LIMB_BASE + limb
        digit, remainder = divmod(remainder, divisor)
        quotient.append(digit)
    return normalize(quotient), remainder


def divmod_limbs(a: Sequence[int], b: Sequence[int]) -> tuple[Limbs, Limbs]:
    """
    Школьное длинное деление лимбовых массивов.

    Очередной лимб частного оценивается по трём старшим лимбам остатка
    и двум старшим лимбам делителя, затем уточняется циклами коррекции.

    Returns:
        (частное, остаток), остаток < b
    """
    a = normalize(a)
    b = normalize(b)
    if is_zero(b):
        raise ZeroDivisionError("division by zero")
    if len(b) == 1:
        quotient, rest = divmod_small(a, b[0])
        return quotient, from_int(rest)
    if compare(a, b) < 0:
        return [0], a

    width = len(b)
    divisor_top = b[0] * LIMB_BASE + b[1]
    quotient = []
    remainder = [0]
    for limb in a:
        remainder = normalize(remainder + [limb])
        if compare(remainder, b) < 0:
            quotient.append(0)
            continue
        # остаток < b * LIMB_BASE, значит лимб частного < LIMB_BASE
        top = 0
        for head in remainder[: len(remainder) - width + 2]:
            top = top * LIMB_BASE + head
        estimate = min(top // divisor_top, LIMB_BASE - 1)
        product = multiply_small(b, estimate)
        while compare(product, remainder) > 0:
            estimate -= 1
            product = subtract(product, b)
        remainder = subtract(remainder, product)
        while compare(remainder, b) >= 0:
            estimate += 1
            remainder = subtract(remainder, b)
        quotient.append(estimate)
    return normalize(quotient), normalize(remainder)


# =============================================================================
# ПРЕОБРАЗОВАНИЯ
# =============================================================================


def from_int(value: int) -> Limbs:
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    if value == 0:
        return [0]
    result = []
    while value:
        value, limb = divmod(value, LIMB_BASE)
        result.append(limb)
    result.reverse()
    return result


def to_int(limbs: Sequence[int]) -> int:
    value = 0
    for limb in limbs:
        value = value * LIMB_BASE + limb
    return value
