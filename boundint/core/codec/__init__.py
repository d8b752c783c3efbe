"""
Serialization codecs для BoundedInt

Все кодеки используют каноническую десятичную строку как wire форму и
повторно проверяют диапазон при декодировании.
"""

# Text
from boundint.core.codec.text import marshal_text, parse_decimal, unmarshal_text

# JSON
from boundint.core.codec.json_codec import marshal_json, unmarshal_json

# Structured wire / legacy / human readable
from boundint.core.codec.wire import (
    ZERO_BYTES,
    marshal_amino,
    marshal_wire,
    marshal_wire_to,
    marshal_yaml,
    unmarshal_amino,
    unmarshal_wire,
    wire_size,
)

__all__ = [
    # Text
    "marshal_text",
    "parse_decimal",
    "unmarshal_text",
    # JSON
    "marshal_json",
    "unmarshal_json",
    # Structured wire
    "ZERO_BYTES",
    "marshal_wire",
    "marshal_wire_to",
    "unmarshal_wire",
    "wire_size",
    # Legacy
    "marshal_amino",
    "unmarshal_amino",
    # Human readable
    "marshal_yaml",
]
