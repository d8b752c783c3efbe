"""
boundint — 256-bit bounded signed integer for ledger arithmetic.
"""

from boundint.core.codec import (
    marshal_amino,
    marshal_json,
    marshal_text,
    marshal_wire,
    marshal_yaml,
    unmarshal_amino,
    unmarshal_json,
    unmarshal_text,
    unmarshal_wire,
)
from boundint.core.math import (
    MAX_BIT_LEN,
    BoundedInt,
    BoundedIntError,
    CheckedResult,
    DivideByZeroError,
    EmptyInputError,
    IntOutOfRangeError,
    IntOverflowError,
    IntParseError,
    InvariantViolation,
    NonDigitError,
    format_int,
    is_nil,
    max_int,
    min_int,
)

__version__ = "0.1.0"

__all__ = [
    "MAX_BIT_LEN",
    "BoundedInt",
    "CheckedResult",
    "is_nil",
    "min_int",
    "max_int",
    "format_int",
    # Errors
    "BoundedIntError",
    "DivideByZeroError",
    "EmptyInputError",
    "IntOutOfRangeError",
    "IntOverflowError",
    "IntParseError",
    "InvariantViolation",
    "NonDigitError",
    # Codecs
    "marshal_text",
    "unmarshal_text",
    "marshal_json",
    "unmarshal_json",
    "marshal_wire",
    "unmarshal_wire",
    "marshal_amino",
    "unmarshal_amino",
    "marshal_yaml",
]
