"""
Wire Codec — Length-prefixed (protobuf custom type) кодирование BoundedInt

Формат: UTF-8 байты канонической десятичной строки. Длину поля пишет
внешний structured-wire энкодер, этот модуль отвечает только за payload.

Особые случаи:
- Значение 0 кодируется одним байтом 0x30 (явный fast path)
- Пустой payload декодируется в пустое состояние (None), это не ошибка
- Пустое состояние при кодировании трактуется как 0

Legacy (amino) кодирование байт-в-байт делегирует этому формату.
"""

import logging
from typing import Final, Optional

from boundint.core.codec.text import marshal_text, parse_decimal
from boundint.core.math.bounded_int import MAX_BIT_LEN, BoundedInt, bit_len_overflows
from boundint.core.math.errors import IntOutOfRangeError, IntParseError

logger = logging.getLogger(__name__)

ZERO_BYTES: Final[bytes] = b"0"


# =============================================================================
# STRUCTURED WIRE
# =============================================================================


def marshal_wire(value: Optional[BoundedInt]) -> bytes:
    """Payload: UTF-8 десятичная строка; None и 0 → b"0"."""
    if value is None or value.is_zero():
        return ZERO_BYTES
    return marshal_text(value).encode("ascii")


def marshal_wire_to(value: Optional[BoundedInt], buf: bytearray) -> int:
    """
    Запись payload в буфер вызывающего кода.

    Args:
        value: Значение (None трактуется как 0)
        buf: Буфер, len(buf) >= wire_size(value)

    Returns:
        Количество записанных байт

    Raises:
        ValueError: Если буфер слишком мал
    """
    payload = marshal_wire(value)
    if len(buf) < len(payload):
        raise ValueError(
            f"buffer too small: need {len(payload)} bytes, got {len(buf)}"
        )
    buf[: len(payload)] = payload
    return len(payload)


def wire_size(value: Optional[BoundedInt]) -> int:
    return len(marshal_wire(value))


def unmarshal_wire(data: bytes) -> Optional[BoundedInt]:
    """
    Декодирование payload.

    Args:
        data: Payload поля

    Returns:
        None для пустого payload, иначе новый BoundedInt

    Raises:
        IntParseError: Payload не является десятичным целым (или не UTF-8)
        IntOutOfRangeError: "integer out of range; got: <bits>, max: 256"
    """
    if len(data) == 0:
        return None

    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise IntParseError(bytes(data).decode("utf-8", errors="replace"), "not UTF-8") from e

    try:
        i = parse_decimal(text)
    except IntOutOfRangeError as e:
        raise _out_of_range(text, e.bit_len, e.bit_len_is_lower_bound) from e

    if bit_len_overflows(i):
        raise _out_of_range(text, i.bit_length())

    return BoundedInt.from_big_int_mut(i)


def _out_of_range(
    text: str, bit_len: int, lower_bound: bool = False
) -> IntOutOfRangeError:
    got = f"at least {bit_len}" if lower_bound else str(bit_len)
    logger.debug("rejected out-of-range wire integer (%s bits)", got)
    return IntOutOfRangeError(
        f"integer out of range; got: {got}, max: {MAX_BIT_LEN}",
        text,
        bit_len,
        MAX_BIT_LEN,
        lower_bound,
    )


# =============================================================================
# LEGACY (AMINO): proxy to structured wire
# =============================================================================


def marshal_amino(value: Optional[BoundedInt]) -> bytes:
    return marshal_wire(value)


def unmarshal_amino(data: bytes) -> Optional[BoundedInt]:
    return unmarshal_wire(data)


# =============================================================================
# HUMAN READABLE
# =============================================================================


def marshal_yaml(value: Optional[BoundedInt]) -> str:
    """Line-oriented (YAML/config) представление: каноническая строка."""
    return marshal_text(value)
