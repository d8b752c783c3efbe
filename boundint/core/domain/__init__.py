"""
Domain models carrying BoundedInt values.
"""

from boundint.core.domain.coin import DENOM_PATTERN, Coin, is_valid_denom

__all__ = [
    "DENOM_PATTERN",
    "Coin",
    "is_valid_denom",
]
