"""
Contract Validation Module

Модуль для валидации JSON контрактов BoundedInt.
"""

from .validators import (
    BoundedIntValidator,
    CoinValidator,
    ContractValidator,
    SchemaLoader,
    validate_bounded_int,
    validate_coin,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BoundedIntValidator",
    "CoinValidator",
    # Functions
    "validate_bounded_int",
    "validate_coin",
]
