"""
BoundedInt — Целое со знаком, ограниченное 256 битами

Канонический числовой примитив для учёта (ledger):
- Диапазон: [-(2^256 - 1), 2^256 - 1]
- Двойной API: checked_* (возвращает CheckedResult) и unchecked (InvariantViolation)
- Immutable: каждая арифметическая операция создаёт новый экземпляр
- Пустое (uninitialized) состояние моделируется как Optional[BoundedInt] = None,
  отличное от BoundedInt.zero()

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Для любого экземпляра abs(value).bit_length() <= MAX_BIT_LEN
2. Переполнение никогда не усекается и не заворачивается
3. Деление на ноль никогда не происходит (DivideByZeroError / InvariantViolation)
4. Unchecked операции реализованы поверх checked (арифметика не дублируется)
"""

import logging
import operator
import re
import sys
from decimal import Decimal
from typing import Any, Final, NamedTuple, Optional, SupportsIndex, Tuple, Union

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic_core import core_schema

from boundint.core.math.errors import (
    BoundedIntError,
    DivideByZeroError,
    IntOverflowError,
    InvariantViolation,
)

logger = logging.getLogger(__name__)

# =============================================================================
# RANGE CONSTANTS
# =============================================================================

# Максимальная битовая длина модуля значения
MAX_BIT_LEN: Final[int] = 256

# Ширина машинного слова (64 на 64-битных платформах)
WORD_SIZE: Final[int] = sys.maxsize.bit_length() + 1

# Порог быстрой проверки по количеству слов.
# Если MAX_BIT_LEN не кратен WORD_SIZE, точная проверка bit_length обязательна.
MAX_WORD_LEN: Final[int] = MAX_BIT_LEN // WORD_SIZE

# Максимальное количество десятичных цифр у значения в диапазоне
MAX_DECIMAL_DIGITS: Final[int] = len(str(2**MAX_BIT_LEN - 1))

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1
UINT64_MAX: Final[int] = 2**64 - 1

# Каноническая десятичная запись: ["-"] digit+, без ведущих нулей
CANONICAL_DECIMAL_PATTERN: Final[str] = r"^(0|-?[1-9][0-9]*)$"

# Литерал с префиксом системы счисления (0x / 0o / 0b / ведущий 0 = octal)
_LITERAL_RE = re.compile(
    r"(?P<sign>[+-]?)(?:"
    r"0[xX](?P<hex>[0-9a-fA-F]+)"
    r"|0[oO](?P<oct>[0-7]+)"
    r"|0[bB](?P<bin>[01]+)"
    r"|0(?P<legacy_oct>[0-7]+)"
    r"|(?P<dec>[1-9][0-9]*|0)"
    r")"
)

_LITERAL_BASES: Final[Tuple[Tuple[str, int], ...]] = (
    ("hex", 16),
    ("oct", 8),
    ("bin", 2),
    ("legacy_oct", 8),
    ("dec", 10),
)


# =============================================================================
# RANGE CHECK
# =============================================================================


def bit_len_overflows(i: int) -> bool:
    """
    Проверка нарушения диапазона (bit length модуля > MAX_BIT_LEN).

    Двухуровневая проверка: сначала дешёвое сравнение количества машинных
    слов с MAX_WORD_LEN, и только если оно срабатывает — точное сравнение
    bit_length с MAX_BIT_LEN.

    Args:
        i: Проверяемое значение

    Returns:
        True если значение вне диапазона
    """
    bit_len = i.bit_length()
    if (bit_len + WORD_SIZE - 1) // WORD_SIZE > MAX_WORD_LEN:
        return bit_len > MAX_BIT_LEN
    return False


def _require_int(value: Any, operation: str) -> int:
    # bool является подклассом int, но как число для учёта не принимается
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{operation}: expected int, got {type(value).__name__}")
    return value


# =============================================================================
# CHECKED RESULT
# =============================================================================


class CheckedResult(NamedTuple):
    """
    Результат checked операции.

    Ровно одно из полей заполнено: value при успехе, error при ошибке
    (IntOverflowError или DivideByZeroError).
    """

    value: Optional["BoundedInt"]
    error: Optional[BoundedIntError]

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: "BoundedInt") -> "CheckedResult":
        return cls(value, None)

    @classmethod
    def failure(cls, error: BoundedIntError) -> "CheckedResult":
        return cls(None, error)


def _unwrap(result: CheckedResult, operation: str) -> "BoundedInt":
    """Unchecked обёртка: ошибка checked операции → InvariantViolation."""
    if result.error is not None:
        logger.error(
            "%s aborted: %s", operation, result.error, extra={"operation": operation}
        )
        raise InvariantViolation(operation, str(result.error)) from result.error
    return result.value


# =============================================================================
# BOUNDED INT
# =============================================================================


class BoundedInt:
    """
    Целое со знаком в диапазоне [-(2^256 - 1), 2^256 - 1].

    Immutable value type: все операции возвращают новый экземпляр,
    атрибуты не изменяются после создания.

    Конструкторы:
    - BoundedInt(n), from_big_int, from_big_int_mut, from_scaled_int64:
      InvariantViolation при переполнении (вызов с заведомо валидными данными)
    - from_string: не выбрасывает, возвращает (value, ok)
    - from_int64, from_uint64: значение всегда в диапазоне
    """

    __slots__ = ("_i",)

    _i: int

    def __init__(self, value: int = 0):
        i = _require_int(value, "BoundedInt()")
        if bit_len_overflows(i):
            raise InvariantViolation("BoundedInt()", "out of bound")
        object.__setattr__(self, "_i", i)

    @classmethod
    def _new(cls, i: int) -> "BoundedInt":
        # Без проверок: вызывающий код уже проверил диапазон
        obj = object.__new__(cls)
        object.__setattr__(obj, "_i", i)
        return obj

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_int64(cls, n: int) -> "BoundedInt":
        """
        Конструктор из int64.

        Raises:
            TypeError: Если n не int
            InvariantViolation: Если n вне диапазона int64
        """
        n = _require_int(n, "from_int64()")
        if not INT64_MIN <= n <= INT64_MAX:
            raise InvariantViolation("from_int64()", f"{n} does not fit int64")
        return cls._new(n)

    @classmethod
    def from_uint64(cls, n: int) -> "BoundedInt":
        """
        Конструктор из uint64.

        Raises:
            TypeError: Если n не int
            InvariantViolation: Если n вне диапазона uint64
        """
        n = _require_int(n, "from_uint64()")
        if not 0 <= n <= UINT64_MAX:
            raise InvariantViolation("from_uint64()", f"{n} does not fit uint64")
        return cls._new(n)

    @classmethod
    def from_big_int(cls, v: Optional[SupportsIndex]) -> Optional["BoundedInt"]:
        """
        Конструктор из произвольного целого (копирующий, безопасный вариант).

        Принимает любой объект с __index__ и нормализует его в точный int,
        поэтому вызывающий код может свободно использовать v после вызова.

        Args:
            v: Целое значение или None

        Returns:
            None для None (пустое состояние), иначе BoundedInt

        Raises:
            InvariantViolation: Если значение вне диапазона
        """
        if v is None:
            return None
        if isinstance(v, bool):
            raise TypeError("from_big_int(): expected int, got bool")
        i = int(operator.index(v))
        if bit_len_overflows(i):
            raise InvariantViolation("from_big_int()", "out of bound")
        return cls._new(i)

    @classmethod
    def from_big_int_mut(cls, v: Optional[int]) -> Optional["BoundedInt"]:
        """
        Конструктор из произвольного целого, забирающий владение v.

        В отличие от from_big_int не выполняет нормализующую копию, если v
        уже точный int. Вызывающий код не должен повторно использовать v.

        Raises:
            InvariantViolation: Если значение вне диапазона
        """
        if v is None:
            return None
        if isinstance(v, bool):
            raise TypeError("from_big_int_mut(): expected int, got bool")
        i = v if type(v) is int else int(operator.index(v))
        if bit_len_overflows(i):
            raise InvariantViolation("from_big_int_mut()", "out of bound")
        return cls._new(i)

    @classmethod
    def from_string(cls, s: str) -> Tuple[Optional["BoundedInt"], bool]:
        """
        Конструктор из строки — единственный валидирующий конструктор без abort.

        Принимает десятичную запись или литерал с префиксом:
        0x/0X (hex), 0o/0O (octal), 0b/0B (binary), ведущий 0 (octal).
        Допускается знак '+' или '-'.

        Args:
            s: Строка

        Returns:
            (value, True) при успехе, (None, False) при ошибке разбора
            или переполнении

        Examples:
            >>> BoundedInt.from_string("0x10")
            (BoundedInt(16), True)
            >>> BoundedInt.from_string(str(2**256))
            (None, False)
        """
        if not isinstance(s, str):
            return None, False

        match = _LITERAL_RE.fullmatch(s)
        if match is None:
            return None, False

        for group, base in _LITERAL_BASES:
            digits = match.group(group)
            if digits is not None:
                break

        # Длинные десятичные строки заведомо вне диапазона
        if base == 10 and len(digits) > MAX_DECIMAL_DIGITS:
            return None, False
        if base != 10 and len(digits.lstrip("0")) > MAX_BIT_LEN:
            return None, False

        i = int(digits, base)
        if match.group("sign") == "-":
            i = -i

        if bit_len_overflows(i):
            return None, False
        return cls._new(i), True

    @classmethod
    def from_scaled_int64(cls, n: int, dec: int) -> "BoundedInt":
        """
        Конструктор n * 10^dec.

        Args:
            n: Мантисса (int64)
            dec: Количество десятичных знаков (>= 0)

        Raises:
            InvariantViolation: Если dec < 0 или результат вне диапазона
        """
        n = cls.from_int64(n)._i
        dec = _require_int(dec, "from_scaled_int64()")
        if dec < 0:
            raise InvariantViolation("from_scaled_int64()", "decimal is negative")

        # 10^dec при dec > MAX_DECIMAL_DIGITS гарантированно переполнит ненулевой n
        if n != 0 and dec > MAX_DECIMAL_DIGITS:
            raise InvariantViolation("from_scaled_int64()", "out of bound")

        i = n * 10**dec if n != 0 else 0
        if bit_len_overflows(i):
            raise InvariantViolation("from_scaled_int64()", "out of bound")
        return cls._new(i)

    @classmethod
    def zero(cls) -> "BoundedInt":
        return cls._new(0)

    @classmethod
    def one(cls) -> "BoundedInt":
        return cls._new(1)

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def big_int(self) -> int:
        """Исходное произвольное целое (Python int)."""
        return self._i

    def to_legacy_dec(self) -> Decimal:
        """
        Конверсия в десятичную дробь (односторонняя).

        Decimal из int строится точно, независимо от precision контекста.
        """
        return Decimal(self._i)

    def to_int64(self) -> int:
        """
        Raises:
            InvariantViolation: Если значение не помещается в int64
        """
        if not self.is_int64():
            raise InvariantViolation("to_int64()", "out of bound")
        return self._i

    def is_int64(self) -> bool:
        return INT64_MIN <= self._i <= INT64_MAX

    def to_uint64(self) -> int:
        """
        Raises:
            InvariantViolation: Если значение не помещается в uint64
        """
        if not self.is_uint64():
            raise InvariantViolation("to_uint64()", "out of bounds")
        return self._i

    def is_uint64(self) -> bool:
        return 0 <= self._i <= UINT64_MAX

    def string(self) -> str:
        """Каноническая десятичная строка."""
        return str(self._i)

    def bit_len(self) -> int:
        return self._i.bit_length()

    # -------------------------------------------------------------------------
    # Знак
    # -------------------------------------------------------------------------

    def sign(self) -> int:
        """-1, 0 или 1."""
        return (self._i > 0) - (self._i < 0)

    def is_zero(self) -> bool:
        return self._i == 0

    def is_negative(self) -> bool:
        return self._i < 0

    def is_positive(self) -> bool:
        return self._i > 0

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def equal(self, other: "BoundedInt") -> bool:
        return self._i == other._i

    def gt(self, other: "BoundedInt") -> bool:
        return self._i > other._i

    def gte(self, other: "BoundedInt") -> bool:
        return self._i >= other._i

    def lt(self, other: "BoundedInt") -> bool:
        return self._i < other._i

    def lte(self, other: "BoundedInt") -> bool:
        return self._i <= other._i

    # -------------------------------------------------------------------------
    # Арифметика: checked
    # -------------------------------------------------------------------------

    def checked_add(self, other: "BoundedInt") -> CheckedResult:
        """Сумма; IntOverflowError если результат вне диапазона."""
        i = self._i + other._i
        if bit_len_overflows(i):
            return CheckedResult.failure(IntOverflowError())
        return CheckedResult.success(BoundedInt._new(i))

    def checked_sub(self, other: "BoundedInt") -> CheckedResult:
        """
        Разность; IntOverflowError если результат вне диапазона.

        Покрывает и переполнение, и выход за нижнюю границу -(2^256 - 1).
        """
        i = self._i - other._i
        if bit_len_overflows(i):
            return CheckedResult.failure(IntOverflowError())
        return CheckedResult.success(BoundedInt._new(i))

    def checked_mul(self, other: "BoundedInt") -> CheckedResult:
        """Произведение; IntOverflowError если результат вне диапазона."""
        i = self._i * other._i
        if bit_len_overflows(i):
            return CheckedResult.failure(IntOverflowError())
        return CheckedResult.success(BoundedInt._new(i))

    def checked_quo(self, other: "BoundedInt") -> CheckedResult:
        """
        Частное с усечением к нулю.

        Переполнение невозможно: |a / b| <= |a| для любого ненулевого b.

        Returns:
            CheckedResult с DivideByZeroError если other == 0
        """
        if other._i == 0:
            return CheckedResult.failure(DivideByZeroError())
        q = abs(self._i) // abs(other._i)
        if (self._i < 0) != (other._i < 0):
            q = -q
        return CheckedResult.success(BoundedInt._new(q))

    def checked_mod(self, other: "BoundedInt") -> CheckedResult:
        """
        Евклидов остаток: результат в [0, |other|) независимо от знаков.

        Returns:
            CheckedResult с DivideByZeroError если other == 0
        """
        if other._i == 0:
            return CheckedResult.failure(DivideByZeroError())
        return CheckedResult.success(BoundedInt._new(self._i % abs(other._i)))

    # -------------------------------------------------------------------------
    # Арифметика: unchecked
    # -------------------------------------------------------------------------

    def add(self, other: "BoundedInt") -> "BoundedInt":
        return _unwrap(self.checked_add(other), "add()")

    def add_raw(self, n: int) -> "BoundedInt":
        return self.add(BoundedInt.from_int64(n))

    def sub(self, other: "BoundedInt") -> "BoundedInt":
        return _unwrap(self.checked_sub(other), "sub()")

    def sub_raw(self, n: int) -> "BoundedInt":
        return self.sub(BoundedInt.from_int64(n))

    def mul(self, other: "BoundedInt") -> "BoundedInt":
        return _unwrap(self.checked_mul(other), "mul()")

    def mul_raw(self, n: int) -> "BoundedInt":
        return self.mul(BoundedInt.from_int64(n))

    def quo(self, other: "BoundedInt") -> "BoundedInt":
        return _unwrap(self.checked_quo(other), "quo()")

    def quo_raw(self, n: int) -> "BoundedInt":
        return self.quo(BoundedInt.from_int64(n))

    def mod(self, other: "BoundedInt") -> "BoundedInt":
        return _unwrap(self.checked_mod(other), "mod()")

    def mod_raw(self, n: int) -> "BoundedInt":
        return self.mod(BoundedInt.from_int64(n))

    def neg(self) -> "BoundedInt":
        # Диапазон симметричен, проверка не нужна
        return BoundedInt._new(-self._i)

    def abs(self) -> "BoundedInt":
        return BoundedInt._new(abs(self._i))

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    @staticmethod
    def _coerce(other: Any) -> Optional["BoundedInt"]:
        if isinstance(other, BoundedInt):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return BoundedInt.from_big_int(other)
        return None

    def __add__(self, other: Union["BoundedInt", int]) -> "BoundedInt":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self.add(rhs)

    __radd__ = __add__

    def __sub__(self, other: Union["BoundedInt", int]) -> "BoundedInt":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self.sub(rhs)

    def __rsub__(self, other: int) -> "BoundedInt":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs.sub(self)

    def __mul__(self, other: Union["BoundedInt", int]) -> "BoundedInt":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self.mul(rhs)

    __rmul__ = __mul__

    def __neg__(self) -> "BoundedInt":
        return self.neg()

    def __pos__(self) -> "BoundedInt":
        return self

    def __abs__(self) -> "BoundedInt":
        return self.abs()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundedInt):
            return NotImplemented
        return self._i == other._i

    def __lt__(self, other: "BoundedInt") -> bool:
        if not isinstance(other, BoundedInt):
            return NotImplemented
        return self._i < other._i

    def __le__(self, other: "BoundedInt") -> bool:
        if not isinstance(other, BoundedInt):
            return NotImplemented
        return self._i <= other._i

    def __gt__(self, other: "BoundedInt") -> bool:
        if not isinstance(other, BoundedInt):
            return NotImplemented
        return self._i > other._i

    def __ge__(self, other: "BoundedInt") -> bool:
        if not isinstance(other, BoundedInt):
            return NotImplemented
        return self._i >= other._i

    def __hash__(self) -> int:
        return hash(self._i)

    def __bool__(self) -> bool:
        return self._i != 0

    def __int__(self) -> int:
        return self._i

    def __index__(self) -> int:
        return self._i

    def __str__(self) -> str:
        return str(self._i)

    def __repr__(self) -> str:
        return f"BoundedInt({self._i})"

    def __copy__(self) -> "BoundedInt":
        return self

    def __deepcopy__(self, memo: dict) -> "BoundedInt":
        return self

    def __reduce__(self):
        return (BoundedInt, (self._i,))

    # -------------------------------------------------------------------------
    # Pydantic integration
    # -------------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Pydantic схема: BoundedInt как JSON string.

        Python режим: BoundedInt, int (с проверкой диапазона) или десятичная
        строка. JSON режим: только JSON string, bare number отклоняется.
        Сериализация: всегда каноническая десятичная строка.
        """
        from boundint.core.codec.text import unmarshal_text

        def validate(value: Any) -> BoundedInt:
            if isinstance(value, BoundedInt):
                return value
            if isinstance(value, int) and not isinstance(value, bool):
                return unmarshal_text(str(value))
            if isinstance(value, str):
                return unmarshal_text(value)
            raise ValueError(f"expected integer string, got {type(value).__name__}")

        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(strict=True),
                    core_schema.no_info_plain_validator_function(unmarshal_text),
                ]
            ),
            python_schema=core_schema.no_info_plain_validator_function(validate),
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize, return_schema=core_schema.str_schema()
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> dict:
        return {"type": "string", "pattern": CANONICAL_DECIMAL_PATTERN}


def _serialize(value: BoundedInt) -> str:
    return value.string()


# =============================================================================
# HELPERS
# =============================================================================


def is_nil(value: Optional[BoundedInt]) -> bool:
    """True если значение в пустом (uninitialized) состоянии."""
    return value is None


def min_int(a: BoundedInt, b: BoundedInt) -> BoundedInt:
    """Минимум; всегда новый экземпляр, не совпадающий ни с a, ни с b."""
    return BoundedInt._new(b._i if a._i > b._i else a._i)


def max_int(a: BoundedInt, b: BoundedInt) -> BoundedInt:
    """Максимум; всегда новый экземпляр, не совпадающий ни с a, ни с b."""
    return BoundedInt._new(b._i if a._i < b._i else a._i)


def int_eq(expected: BoundedInt, got: BoundedInt) -> Tuple[bool, str, str, str]:
    """
    Сравнение для assert-сообщений в тестах.

    Usage:
        ok, template, exp, got = int_eq(expected, actual)
        assert ok, template % (exp, got)
    """
    return expected.equal(got), "expected:\t%s\ngot:\t\t%s", expected.string(), got.string()
