"""
Тесты для BoundedInt: конструкторы, конверсии, знак, сравнения

Проверяет:
1. Инвариант диапазона во всех конструкторах
2. Пустое состояние (None) отличается от нуля
3. from_string: префиксы, переполнение без исключений
4. from_scaled_int64: abort на отрицательном dec и переполнении
5. Конверсии int64/uint64 и fit-проверки
6. Сравнения, знак, min/max без алиасинга
7. Immutability
"""

import copy
import pickle
from decimal import Decimal

import pytest

from boundint.core.math import (
    INT64_MAX,
    INT64_MIN,
    MAX_BIT_LEN,
    MAX_WORD_LEN,
    UINT64_MAX,
    WORD_SIZE,
    BoundedInt,
    InvariantViolation,
    bit_len_overflows,
    int_eq,
    is_nil,
    max_int,
    min_int,
)

MAX_VALUE = 2**MAX_BIT_LEN - 1


# =============================================================================
# ТЕСТЫ ПРОВЕРКИ ДИАПАЗОНА
# =============================================================================


class TestRangeCheck:
    """Тесты для bit_len_overflows"""

    def test_constants(self) -> None:
        """Константы диапазона согласованы"""
        assert MAX_BIT_LEN == 256
        assert MAX_WORD_LEN == MAX_BIT_LEN // WORD_SIZE
        assert MAX_WORD_LEN >= 1

    def test_boundary_values(self) -> None:
        """Граница ровно на 2^256 - 1"""
        assert not bit_len_overflows(0)
        assert not bit_len_overflows(MAX_VALUE)
        assert not bit_len_overflows(-MAX_VALUE)
        assert bit_len_overflows(MAX_VALUE + 1)
        assert bit_len_overflows(-(MAX_VALUE + 1))

    def test_small_values_short_circuit(self) -> None:
        """Значения в пределах MAX_WORD_LEN слов не переполняются"""
        assert not bit_len_overflows(2 ** (WORD_SIZE * MAX_WORD_LEN) - 1)
        assert not bit_len_overflows(-1)


# =============================================================================
# ТЕСТЫ КОНСТРУКТОРОВ
# =============================================================================


class TestConstructors:
    """Тесты для конструкторов BoundedInt"""

    def test_direct_constructor(self) -> None:
        """BoundedInt(n) проверяет диапазон"""
        assert BoundedInt(42).big_int() == 42
        assert BoundedInt().is_zero()
        assert BoundedInt(MAX_VALUE).big_int() == MAX_VALUE

        with pytest.raises(InvariantViolation, match="out of bound"):
            BoundedInt(MAX_VALUE + 1)

    def test_direct_constructor_rejects_non_int(self) -> None:
        """Не-int типы отклоняются"""
        with pytest.raises(TypeError):
            BoundedInt(1.5)
        with pytest.raises(TypeError):
            BoundedInt(True)
        with pytest.raises(TypeError):
            BoundedInt("1")

    def test_from_int64(self) -> None:
        """from_int64 принимает весь диапазон int64"""
        assert BoundedInt.from_int64(INT64_MAX).big_int() == INT64_MAX
        assert BoundedInt.from_int64(INT64_MIN).big_int() == INT64_MIN
        assert BoundedInt.from_int64(-7).big_int() == -7

    def test_from_int64_out_of_width(self) -> None:
        """Значение шире int64 — нарушение контракта"""
        with pytest.raises(InvariantViolation, match="from_int64"):
            BoundedInt.from_int64(INT64_MAX + 1)

    def test_from_uint64(self) -> None:
        """from_uint64 принимает весь диапазон uint64"""
        assert BoundedInt.from_uint64(UINT64_MAX).big_int() == UINT64_MAX
        assert BoundedInt.from_uint64(0).is_zero()

        with pytest.raises(InvariantViolation):
            BoundedInt.from_uint64(-1)
        with pytest.raises(InvariantViolation):
            BoundedInt.from_uint64(UINT64_MAX + 1)

    def test_from_big_int_none_is_empty(self) -> None:
        """None → пустое состояние, не ноль"""
        value = BoundedInt.from_big_int(None)
        assert value is None
        assert is_nil(value)
        assert not is_nil(BoundedInt.zero())

    def test_from_big_int(self) -> None:
        """from_big_int копирует и проверяет диапазон"""
        assert BoundedInt.from_big_int(MAX_VALUE).big_int() == MAX_VALUE
        assert BoundedInt.from_big_int(-MAX_VALUE).big_int() == -MAX_VALUE

    def test_from_big_int_overflow_aborts(self) -> None:
        """Переполнение в from_big_int — InvariantViolation"""
        with pytest.raises(InvariantViolation, match="from_big_int"):
            BoundedInt.from_big_int(MAX_VALUE + 1)
        with pytest.raises(InvariantViolation):
            BoundedInt.from_big_int(-(2**300))

    def test_from_big_int_accepts_index_types(self) -> None:
        """Объекты с __index__ нормализуются в int"""

        class Index:
            def __index__(self) -> int:
                return 12

        value = BoundedInt.from_big_int(Index())
        assert value.big_int() == 12
        assert type(value.big_int()) is int

    def test_from_big_int_mut(self) -> None:
        """from_big_int_mut: тот же контракт, без копии"""
        source = 2**200
        value = BoundedInt.from_big_int_mut(source)
        assert value.big_int() is source
        assert BoundedInt.from_big_int_mut(None) is None

        with pytest.raises(InvariantViolation, match="from_big_int_mut"):
            BoundedInt.from_big_int_mut(MAX_VALUE + 1)

    def test_from_big_int_mut_accepts_index_types(self) -> None:
        """from_big_int_mut нормализует __index__ объекты как from_big_int"""

        class Index:
            def __index__(self) -> int:
                return -9

        value = BoundedInt.from_big_int_mut(Index())
        assert value == BoundedInt.from_big_int(Index())
        assert type(value.big_int()) is int

        with pytest.raises(TypeError):
            BoundedInt.from_big_int_mut(True)

    def test_zero_and_one(self) -> None:
        """Константы zero/one"""
        assert BoundedInt.zero().big_int() == 0
        assert BoundedInt.one().big_int() == 1
        assert BoundedInt.zero() == BoundedInt.from_int64(0)


# =============================================================================
# ТЕСТЫ FROM_STRING
# =============================================================================


class TestFromString:
    """Тесты для from_string"""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("0", 0),
            ("123", 123),
            ("-123", -123),
            ("+5", 5),
            ("0x10", 16),
            ("0XfF", 255),
            ("-0x10", -16),
            ("0o17", 15),
            ("017", 15),
            ("0b101", 5),
            ("0B11", 3),
        ],
    )
    def test_valid_literals(self, text: str, expected: int) -> None:
        """Десятичные и префиксные литералы"""
        value, ok = BoundedInt.from_string(text)
        assert ok
        assert value.big_int() == expected

    @pytest.mark.parametrize(
        "text",
        ["", " 1", "1 ", "1_000", "abc", "0x", "09", "--1", "1e3", "1.0", "٣"],
    )
    def test_invalid_literals(self, text: str) -> None:
        """Мусор → (None, False), без исключений"""
        value, ok = BoundedInt.from_string(text)
        assert not ok
        assert value is None

    def test_max_value(self) -> None:
        """2^256 - 1 в диапазоне"""
        value, ok = BoundedInt.from_string(str(MAX_VALUE))
        assert ok
        assert value.big_int() == MAX_VALUE

        value, ok = BoundedInt.from_string(hex(MAX_VALUE))
        assert ok
        assert value.big_int() == MAX_VALUE

    def test_one_bit_beyond_range_is_not_ok(self) -> None:
        """2^256 → not ok, не исключение"""
        assert BoundedInt.from_string(str(2**256)) == (None, False)
        assert BoundedInt.from_string(str(-(2**256))) == (None, False)
        assert BoundedInt.from_string(hex(2**256)) == (None, False)

    def test_very_long_string_is_not_ok(self) -> None:
        """Очень длинная строка не строит огромный int"""
        assert BoundedInt.from_string("9" * 10_000) == (None, False)
        assert BoundedInt.from_string("0x" + "f" * 10_000) == (None, False)

    def test_non_string_input(self) -> None:
        """Не-строка → not ok"""
        assert BoundedInt.from_string(123) == (None, False)


# =============================================================================
# ТЕСТЫ FROM_SCALED_INT64
# =============================================================================


class TestFromScaledInt64:
    """Тесты для from_scaled_int64"""

    def test_scaling(self) -> None:
        """n * 10^dec"""
        assert BoundedInt.from_scaled_int64(3, 0).big_int() == 3
        assert BoundedInt.from_scaled_int64(3, 2).big_int() == 300
        assert BoundedInt.from_scaled_int64(-3, 18).big_int() == -3 * 10**18
        assert BoundedInt.from_scaled_int64(0, 10_000).is_zero()

    def test_negative_decimal_aborts(self) -> None:
        """dec < 0 — ошибка программиста"""
        with pytest.raises(InvariantViolation, match="decimal is negative"):
            BoundedInt.from_scaled_int64(1, -1)

    def test_overflow_aborts(self) -> None:
        """Переполнение результата — InvariantViolation"""
        # 10^77 < 2^256 < 10^78
        assert BoundedInt.from_scaled_int64(1, 77).big_int() == 10**77
        with pytest.raises(InvariantViolation, match="out of bound"):
            BoundedInt.from_scaled_int64(1, 78)
        with pytest.raises(InvariantViolation, match="out of bound"):
            BoundedInt.from_scaled_int64(2, 10_000)


# =============================================================================
# ТЕСТЫ КОНВЕРСИЙ
# =============================================================================


class TestConversions:
    """Тесты для to_int64/to_uint64/to_legacy_dec"""

    def test_to_int64(self) -> None:
        """Значения в int64 конвертируются"""
        assert BoundedInt.from_int64(INT64_MIN).to_int64() == INT64_MIN
        assert BoundedInt(INT64_MAX).is_int64()
        assert not BoundedInt(INT64_MAX + 1).is_int64()

    def test_to_int64_out_of_bound_aborts(self) -> None:
        """to_int64 вне int64 — InvariantViolation"""
        with pytest.raises(InvariantViolation, match="to_int64"):
            BoundedInt(INT64_MAX + 1).to_int64()

    def test_to_uint64(self) -> None:
        """Значения в uint64 конвертируются"""
        assert BoundedInt(UINT64_MAX).to_uint64() == UINT64_MAX
        assert not BoundedInt(-1).is_uint64()
        assert not BoundedInt(UINT64_MAX + 1).is_uint64()

        with pytest.raises(InvariantViolation, match="to_uint64"):
            BoundedInt(-1).to_uint64()

    def test_to_legacy_dec_is_exact(self) -> None:
        """Decimal строится точно даже для 78-значных чисел"""
        dec = BoundedInt(MAX_VALUE).to_legacy_dec()
        assert isinstance(dec, Decimal)
        assert dec == Decimal(str(MAX_VALUE))
        assert int(dec) == MAX_VALUE

    def test_python_int_protocol(self) -> None:
        """__int__ / __index__ / str / repr"""
        value = BoundedInt(-255)
        assert int(value) == -255
        assert hex(value) == "-0xff"
        assert str(value) == "-255"
        assert value.string() == "-255"
        assert repr(value) == "BoundedInt(-255)"


# =============================================================================
# ТЕСТЫ ЗНАКА И СРАВНЕНИЙ
# =============================================================================


class TestSignAndComparison:
    """Тесты знака и сравнений"""

    def test_sign(self) -> None:
        """sign() → -1/0/1"""
        assert BoundedInt(-5).sign() == -1
        assert BoundedInt(0).sign() == 0
        assert BoundedInt(5).sign() == 1

    def test_sign_queries(self) -> None:
        """is_zero/is_negative/is_positive"""
        assert BoundedInt(0).is_zero()
        assert not BoundedInt(0).is_positive()
        assert not BoundedInt(0).is_negative()
        assert BoundedInt(-1).is_negative()
        assert BoundedInt(1).is_positive()
        assert not BoundedInt(0)
        assert BoundedInt(1)

    def test_named_comparisons(self) -> None:
        """equal/gt/gte/lt/lte"""
        a, b = BoundedInt(1), BoundedInt(2)
        assert a.lt(b) and a.lte(b) and not a.gt(b) and not a.gte(b)
        assert b.gt(a) and b.gte(a)
        assert a.equal(BoundedInt(1))
        assert a.lte(BoundedInt(1)) and a.gte(BoundedInt(1))

    def test_operators(self) -> None:
        """Rich comparison операторы"""
        big = BoundedInt(MAX_VALUE)
        small = BoundedInt(-MAX_VALUE)
        assert small < big
        assert big > small
        assert big >= big
        assert small <= small
        assert big == BoundedInt(MAX_VALUE)
        assert big != small

    def test_not_equal_to_plain_int(self) -> None:
        """BoundedInt не равен plain int"""
        assert BoundedInt(1) != 1
        with pytest.raises(TypeError):
            BoundedInt(1) < 2

    def test_hashable(self) -> None:
        """Равные значения — равные хэши"""
        assert hash(BoundedInt(7)) == hash(BoundedInt.from_int64(7))
        assert len({BoundedInt(7), BoundedInt(7), BoundedInt(8)}) == 2


# =============================================================================
# ТЕСТЫ MIN/MAX
# =============================================================================


class TestMinMax:
    """Тесты для min_int/max_int"""

    def test_min_max_values(self) -> None:
        """Корректный выбор"""
        a, b = BoundedInt(-3), BoundedInt(10)
        assert min_int(a, b) == a
        assert min_int(b, a) == a
        assert max_int(a, b) == b
        assert max_int(b, a) == b

    def test_min_max_never_alias(self) -> None:
        """Результат — новый экземпляр, входы не изменяются"""
        a, b = BoundedInt(-3), BoundedInt(10)
        lo, hi = min_int(a, b), max_int(a, b)
        assert lo is not a and lo is not b
        assert hi is not a and hi is not b
        assert a.big_int() == -3
        assert b.big_int() == 10

    def test_min_of_same_value(self) -> None:
        """min(a, a) == a"""
        a = BoundedInt(42)
        assert min_int(a, a) == a
        assert max_int(a, a) == a
        assert min_int(a, a) is not a


# =============================================================================
# ТЕСТЫ IMMUTABILITY
# =============================================================================


class TestImmutability:
    """BoundedInt — immutable value type"""

    def test_cannot_set_attribute(self) -> None:
        """Присваивание атрибутов запрещено"""
        value = BoundedInt(1)
        with pytest.raises(AttributeError):
            value._i = 2
        with pytest.raises(AttributeError):
            value.other = 2
        assert value.big_int() == 1

    def test_copy_and_pickle(self) -> None:
        """copy/deepcopy/pickle сохраняют значение"""
        value = BoundedInt(MAX_VALUE)
        assert copy.copy(value) == value
        assert copy.deepcopy(value) == value
        assert pickle.loads(pickle.dumps(value)) == value


# =============================================================================
# ТЕСТЫ INT_EQ
# =============================================================================


def test_int_eq_helper() -> None:
    """int_eq возвращает флаг и аргументы сообщения"""
    ok, template, exp, got = int_eq(BoundedInt(1), BoundedInt(1))
    assert ok
    assert exp == got == "1"

    ok, template, exp, got = int_eq(BoundedInt(1), BoundedInt(2))
    assert not ok
    assert template % (exp, got) == "expected:\t1\ngot:\t\t2"
