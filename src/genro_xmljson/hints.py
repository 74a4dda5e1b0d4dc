# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Type and class hint codec.

Hints are the attributes that record the JSON kind of an element:

    type="boolean|number|integer|float|string|function|object|array"
    class="object|array"

Scalars written by the converter carry a ``type`` hint, containers a
``class`` hint. On read, ``class`` wins over ``type``; ``type`` (or the
inherited default) selects how the text of the element is decoded.

Example:
    >>> decode_number('3', NUMBER)
    3
    >>> decode_number('3.14', NUMBER)
    3.14
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from genro_toolbox import smartsplit

from .exceptions import ConversionError
from .values import JsonFunction, JsonKind, kind_of

if TYPE_CHECKING:
    from .tree import XmlElement

TYPE_ATTR = 'type'
CLASS_ATTR = 'class'
PARAMS_ATTR = 'params'
NULL_ATTR = 'null'

TEXT_KEY = '#text'
XMLNS_KEY = '@xmlns'

BOOLEAN = 'boolean'
NUMBER = 'number'
INTEGER = 'integer'
FLOAT = 'float'
STRING = 'string'
FUNCTION = 'function'
OBJECT = 'object'
ARRAY = 'array'

TYPE_HINTS = (BOOLEAN, NUMBER, INTEGER, FLOAT, STRING, FUNCTION, OBJECT, ARRAY)
CLASS_HINTS = (OBJECT, ARRAY)
HINT_ATTRS = (CLASS_ATTR, TYPE_ATTR)

_INTEGER_RE = re.compile(r'[+-]?\d+')
_FLOAT_RE = re.compile(
    r'[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|nan|inf|infinity)',
    re.IGNORECASE,
)
_PARAM_RE = re.compile(r'[A-Za-z_$][\w$]*')


def _match_hint(raw: str | None, vocabulary: tuple[str, ...]) -> str | None:
    if raw is None:
        return None
    text = raw.strip().lower()
    return text if text in vocabulary else None


def get_class(element: XmlElement) -> str | None:
    """Return 'object' or 'array' from the class attribute, else None."""
    return _match_hint(element.get_attribute(CLASS_ATTR), CLASS_HINTS)


def get_type(element: XmlElement, default: str | None = None) -> str | None:
    """Return the type hint of the element, or default when absent or unknown."""
    return _match_hint(element.get_attribute(TYPE_ATTR), TYPE_HINTS) or default


def decode_boolean(text: str) -> bool:
    value = text.strip().lower()
    if value == 'true':
        return True
    if value == 'false':
        return False
    raise ConversionError(f"Not a boolean: {text!r}")


def decode_integer(text: str) -> int:
    value = text.strip()
    if not _INTEGER_RE.fullmatch(value):
        raise ConversionError(f"Not an integer: {text!r}")
    return int(value)


def decode_float(text: str) -> float:
    value = text.strip()
    if not _FLOAT_RE.fullmatch(value):
        raise ConversionError(f"Not a float: {text!r}")
    return float(value)


def decode_number(text: str, hint: str = NUMBER) -> int | float:
    """Decode numeric text according to its hint.

    'integer' and 'float' force one parse; plain 'number' tries integer
    first and falls back to float.
    """
    if hint == INTEGER:
        return decode_integer(text)
    if hint == FLOAT:
        return decode_float(text)
    try:
        return decode_integer(text)
    except ConversionError:
        return decode_float(text)


def decode_params(raw: str | None) -> tuple[str, ...]:
    """Split a comma separated ``params`` attribute into parameter names."""
    if not raw or not raw.strip():
        return ()
    params = tuple(part.strip() for part in smartsplit(raw, ',') if part.strip())
    for param in params:
        if not _PARAM_RE.fullmatch(param):
            raise ConversionError(f"Malformed function params: {raw!r}")
    return params


def decode_function(element: XmlElement) -> JsonFunction:
    return JsonFunction(
        params=decode_params(element.get_attribute(PARAMS_ATTR)),
        body=element.text_value,
    )


def encode_params(params: tuple[str, ...]) -> str:
    return ','.join(params)


def encode_hint(value: Any) -> tuple[str, str]:
    """Return the (attribute, hint) pair describing a value.

    Null is written as an object container carrying ``null="true"``.
    """
    match kind_of(value):
        case JsonKind.BOOLEAN:
            return TYPE_ATTR, BOOLEAN
        case JsonKind.NUMBER:
            return TYPE_ATTR, NUMBER
        case JsonKind.STRING:
            return TYPE_ATTR, STRING
        case JsonKind.FUNCTION:
            return TYPE_ATTR, FUNCTION
        case JsonKind.ARRAY:
            return CLASS_ATTR, ARRAY
        case JsonKind.OBJECT | JsonKind.NULL:
            return CLASS_ATTR, OBJECT
