#!/usr/bin/env python3
"""
Minimal JSON encoder for flat records.

Turns an ordered set of scalar fields into a compact JSON object string. The
output does not depend on locale or on any hidden state, so the same input
always produces the same line in the message log.
"""

from __future__ import annotations

import math
from typing import Iterable, Mapping, Tuple, Union

Scalar = Union[str, int, float, bool]
Fields = Union[Mapping[str, Scalar], Iterable[Tuple[str, Scalar]]]

_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}


def escape_string(value: str) -> str:
    """Escape a string for use between JSON double quotes.

    Control characters and lone surrogates are written as \\uXXXX so the
    result can always be encoded as UTF-8.
    """
    out = []
    for ch in value:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ord(ch) < 0x20 or 0xD800 <= ord(ch) <= 0xDFFF:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return ''.join(out)


def encode_value(value: Scalar) -> str:
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, str):
        return f'"{escape_string(value)}"'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError(f"Cannot encode non-finite number: {value!r}")
        return repr(value)
    raise TypeError(f"Unsupported value type for JSON encoding: {type(value).__name__}")


def encode(fields: Fields) -> str:
    """Encode ordered (key, value) fields as a compact JSON object.

    Args:
        fields: Mapping or sequence of (key, value) pairs. Keys must be unique
            strings; values must be str, int, float or bool.

    Returns:
        str: JSON text such as '{"a":1,"b":"x"}' with no surrounding whitespace.
    """
    items = fields.items() if isinstance(fields, Mapping) else fields
    seen = set()
    parts = []
    for key, value in items:
        if not isinstance(key, str):
            raise TypeError(f"JSON object keys must be strings, got {type(key).__name__}")
        if key in seen:
            raise ValueError(f"Duplicate key: {key}")
        seen.add(key)
        parts.append(f'"{escape_string(key)}":{encode_value(value)}')
    return '{' + ','.join(parts) + '}'
