"""
Core math modules для radixcalc

Численное ядро произвольной точности: лимбы, BigNum, Complex,
трансцендентные функции, константы и перевод между основаниями.
"""

# Digit Alphabet & Base Config
from radixcalc.core.math.alphabet import (
    BASE_NAMES,
    DIGIT_ALPHABET,
    MAX_BASE,
    MIN_BASE,
    base_name,
    base_symbol,
    digit_alphabet,
    digit_char,
    digit_value,
    validate_base,
)

# BigNum
from radixcalc.core.math.bignum import (
    GUARD_LIMBS,
    HALF,
    ONE,
    TWO,
    ZERO,
    BigNum,
    working_precision,
)

# Complex
from radixcalc.core.math.complex_number import I, Complex

# Constants
from radixcalc.core.math.constants import (
    euler_e,
    euler_gamma,
    golden_ratio,
    random_gaussian,
    random_uniform,
)

# Base Converter & Formatter
from radixcalc.core.math.conversion import (
    format_complex,
    format_integer,
    format_number,
    parse_literal,
)

__all__ = [
    # Alphabet
    "BASE_NAMES",
    "DIGIT_ALPHABET",
    "MAX_BASE",
    "MIN_BASE",
    "base_name",
    "base_symbol",
    "digit_alphabet",
    "digit_char",
    "digit_value",
    "validate_base",
    # BigNum
    "GUARD_LIMBS",
    "HALF",
    "ONE",
    "TWO",
    "ZERO",
    "BigNum",
    "working_precision",
    # Complex
    "I",
    "Complex",
    # Constants
    "euler_e",
    "euler_gamma",
    "golden_ratio",
    "random_gaussian",
    "random_uniform",
    # Formatter
    "format_complex",
    "format_integer",
    "format_number",
    "parse_literal",
]
