"""
JSON Codec — BoundedInt как JSON string

Значение всегда оборачивается в JSON строку ("12345"), никогда не bare
number: JSON декодеры общего назначения не представляют 256-битные
целые без потерь.
"""

import json
import logging
from typing import Optional, Union

from boundint.core.codec.text import marshal_text, unmarshal_text
from boundint.core.math.bounded_int import BoundedInt
from boundint.core.math.errors import IntParseError

logger = logging.getLogger(__name__)


def marshal_json(value: Optional[BoundedInt]) -> str:
    """
    JSON представление: '"<decimal>"'.

    Пустое состояние нормализуется в ноль перед кодированием.
    """
    return json.dumps(marshal_text(value))


def unmarshal_json(data: Union[str, bytes, bytearray]) -> BoundedInt:
    """
    Декодирование JSON строки.

    Args:
        data: JSON документ, содержащий одну строку

    Returns:
        Новый BoundedInt

    Raises:
        IntParseError: Невалидный JSON или JSON не-строка (в т.ч. bare number)
        IntOutOfRangeError: Значение вне диапазона
    """
    try:
        text = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise IntParseError(_preview(data), f"invalid JSON: {e}") from e

    if not isinstance(text, str):
        logger.debug("rejected non-string JSON integer %r", text)
        raise IntParseError(_preview(data), "integer must be encoded as a JSON string")

    return unmarshal_text(text)


def _preview(data: Union[str, bytes, bytearray]) -> str:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8", errors="replace")
    return data
