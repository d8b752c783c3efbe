"""
Core math modules для boundint

Ограниченная 256-битная целочисленная арифметика и форматирование.
"""

# Errors
from boundint.core.math.errors import (
    BoundedIntError,
    DivideByZeroError,
    EmptyInputError,
    FormatError,
    IntOutOfRangeError,
    IntOverflowError,
    IntParseError,
    InvariantViolation,
    NonDigitError,
)

# BoundedInt
from boundint.core.math.bounded_int import (
    CANONICAL_DECIMAL_PATTERN,
    INT64_MAX,
    INT64_MIN,
    MAX_BIT_LEN,
    MAX_DECIMAL_DIGITS,
    MAX_WORD_LEN,
    UINT64_MAX,
    WORD_SIZE,
    BoundedInt,
    CheckedResult,
    bit_len_overflows,
    int_eq,
    is_nil,
    max_int,
    min_int,
)

# Formatting
from boundint.core.math.formatting import THOUSAND_SEPARATOR, format_int

__all__ = [
    # Errors
    "BoundedIntError",
    "DivideByZeroError",
    "EmptyInputError",
    "FormatError",
    "IntOutOfRangeError",
    "IntOverflowError",
    "IntParseError",
    "InvariantViolation",
    "NonDigitError",
    # BoundedInt: Constants
    "CANONICAL_DECIMAL_PATTERN",
    "INT64_MAX",
    "INT64_MIN",
    "MAX_BIT_LEN",
    "MAX_DECIMAL_DIGITS",
    "MAX_WORD_LEN",
    "UINT64_MAX",
    "WORD_SIZE",
    # BoundedInt: Types
    "BoundedInt",
    "CheckedResult",
    # BoundedInt: Functions
    "bit_len_overflows",
    "int_eq",
    "is_nil",
    "max_int",
    "min_int",
    # Formatting
    "THOUSAND_SEPARATOR",
    "format_int",
]
