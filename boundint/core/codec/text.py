"""
Text Codec — Десятичная текстовая запись BoundedInt

Общий формат всех wire-кодеков: "0" | ["-"] nonzero-digit digit* (ASCII цифры).
Декодер различает две ошибки:
- IntParseError: текст не является десятичным целым
- IntOutOfRangeError: текст корректен, но значение шире MAX_BIT_LEN
"""

import logging
import math
import re
import sys
from typing import Optional

from boundint.core.math.bounded_int import (
    MAX_BIT_LEN,
    MAX_DECIMAL_DIGITS,
    BoundedInt,
    bit_len_overflows,
)
from boundint.core.math.errors import IntOutOfRangeError, IntParseError

logger = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"0|(-?)([1-9][0-9]*)")
_ANY_DIGITS_RE = re.compile(r"-?[0-9]+")

_LOG2_10 = math.log2(10)


def parse_decimal(text: str) -> int:
    """
    Разбор канонической десятичной записи без проверки диапазона.

    Ведущие нули и "-0" не допускаются: одна строка имеет одно значение
    на всех путях декодирования. Пробелы, '_', '+', не-ASCII цифры тоже нет.

    Raises:
        IntParseError: Если текст не является канонической десятичной записью
        IntOutOfRangeError: Если цифр заведомо больше, чем у MAX_BIT_LEN значения
    """
    match = _DECIMAL_RE.fullmatch(text)
    if match is None:
        if _ANY_DIGITS_RE.fullmatch(text):
            raise IntParseError(text, "non-canonical decimal")
        raise IntParseError(text)

    sign, digits = match.groups()
    if digits is None:
        return 0

    if len(digits) > MAX_DECIMAL_DIGITS:
        raise _too_many_digits(text, digits)

    i = int(digits)
    return -i if sign else i


def _too_many_digits(text: str, digits: str) -> IntOutOfRangeError:
    limit = sys.get_int_max_str_digits()
    if limit == 0 or len(digits) <= limit:
        bit_len = int(digits).bit_length()
        lower_bound = False
    else:
        # Выше лимита интерпретатора int(digits) не строится
        bit_len = int((len(digits) - 1) * _LOG2_10) + 1
        lower_bound = True
    return IntOutOfRangeError(
        f"integer out of range: {text}", text, bit_len, MAX_BIT_LEN, lower_bound
    )


def marshal_text(value: Optional[BoundedInt]) -> str:
    """
    Каноническая десятичная строка.

    Пустое состояние (None) кодируется как "0".
    """
    if value is None:
        return "0"
    return value.string()


def unmarshal_text(text: str) -> BoundedInt:
    """
    Декодирование десятичной строки с проверкой диапазона.

    Args:
        text: Десятичная строка

    Returns:
        Новый BoundedInt (всегда инициализированный)

    Raises:
        IntParseError: Некорректный текст
        IntOutOfRangeError: "integer out of range: <text>"
    """
    try:
        i = parse_decimal(text)
    except IntParseError:
        logger.debug("rejected malformed integer text %r", text)
        raise

    if bit_len_overflows(i):
        logger.debug("rejected out-of-range integer text (%d bits)", i.bit_length())
        raise IntOutOfRangeError(
            f"integer out of range: {text}", text, i.bit_length(), MAX_BIT_LEN
        )

    return BoundedInt.from_big_int_mut(i)
