"""
Coin — Номинированная сумма

Immutable Pydantic модель: denom + неотрицательная сумма BoundedInt.
В JSON сумма всегда строка (см. contracts/schema/coin.json).
"""

import re
from typing import Final

from pydantic import BaseModel, Field, field_validator

from boundint.core.math.bounded_int import BoundedInt

DENOM_PATTERN: Final[str] = r"^[a-zA-Z][a-zA-Z0-9/:._-]{2,127}$"

_DENOM_RE = re.compile(DENOM_PATTERN)


# =============================================================================
# COIN MODEL
# =============================================================================


class Coin(BaseModel):
    """
    Модель номинированной суммы.

    Immutable модель (frozen=True). Арифметика возвращает новый экземпляр
    и использует unchecked операции BoundedInt: переполнение суммы двух
    валидных Coin — нарушение инварианта учёта, а не ошибка данных.
    """

    denom: str = Field(..., pattern=DENOM_PATTERN, description="Деноминация (например, 'uatom')")
    amount: BoundedInt = Field(..., description="Сумма (неотрицательная)")

    model_config = {"frozen": True}

    @field_validator("amount")
    @classmethod
    def validate_amount_non_negative(cls, v: BoundedInt) -> BoundedInt:
        if v.is_negative():
            raise ValueError(f"negative coin amount: {v}")
        return v

    def add(self, other: "Coin") -> "Coin":
        self._require_same_denom(other, "add")
        return Coin(denom=self.denom, amount=self.amount.add(other.amount))

    def sub(self, other: "Coin") -> "Coin":
        """
        Raises:
            ValueError: Если результат отрицательный или denom различается
        """
        self._require_same_denom(other, "subtract")
        return Coin(denom=self.denom, amount=self.amount.sub(other.amount))

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def _require_same_denom(self, other: "Coin", verb: str) -> None:
        if self.denom != other.denom:
            raise ValueError(f"Cannot {verb} {other.denom} and {self.denom}")

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


def is_valid_denom(denom: str) -> bool:
    return _DENOM_RE.fullmatch(denom) is not None
