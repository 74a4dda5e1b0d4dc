# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""JSON value model used by the XML converter.

JSON values are plain Python objects, with two additions:

    None            null
    bool            boolean
    int, float      number (bool is never a number)
    str             string
    JsonFunction    function(params){body}
    list            array (reading always yields JsonArray)
    dict            object, insertion ordered

JsonArray is a list that remembers whether it was built by accumulating
repeated sibling elements. Writing such an array produces the siblings again
instead of a single wrapper element.

Every conversion step dispatches through kind_of(), the one closed switch
over the value kinds.

Example:
    >>> from genro_xmljson.values import parse_json, dump_json
    >>> value = parse_json('{"a": [1, 2], "f": null}')
    >>> dump_json(value)
    '{"a":[1,2],"f":null}'
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from .exceptions import ConversionError, MalformedInputError


class JsonKind(Enum):
    """Closed set of JSON value kinds."""

    NULL = 'null'
    BOOLEAN = 'boolean'
    NUMBER = 'number'
    STRING = 'string'
    FUNCTION = 'function'
    ARRAY = 'array'
    OBJECT = 'object'


class JsonArray(list):
    """JSON array with the expand-on-write flag.

    Attributes:
        expand_elements: If True, the array is written as repeated sibling
            elements named after the owning object member.
    """

    __slots__ = ('expand_elements',)

    def __init__(self, iterable: Any = (), expand_elements: bool = False):
        super().__init__(iterable)
        self.expand_elements = expand_elements

    def __repr__(self) -> str:
        if self.expand_elements:
            return f'JsonArray({list.__repr__(self)}, expand_elements=True)'
        return f'JsonArray({list.__repr__(self)})'


@dataclass(frozen=True)
class JsonFunction:
    """JSON function literal: ``function(a,b){body}``."""

    params: tuple[str, ...] = ()
    body: str = ''

    def __post_init__(self) -> None:
        if not isinstance(self.params, tuple):
            object.__setattr__(self, 'params', tuple(self.params))

    def __str__(self) -> str:
        return f"function({','.join(self.params)}){{{self.body}}}"


def kind_of(value: Any) -> JsonKind:
    """Return the JSON kind of a Python value.

    Raises:
        ConversionError: If the value has no JSON counterpart.
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float, Decimal)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, JsonFunction):
        return JsonKind.FUNCTION
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, Mapping):
        return JsonKind.OBJECT
    raise ConversionError(f"Unsupported value type: {type(value).__name__}")


def number_to_text(value: int | float | Decimal) -> str:
    if isinstance(value, float):
        return repr(value)
    return str(value)


def value_to_text(value: Any) -> str:
    """Textual form of a value, as written in attributes and text content."""
    match kind_of(value):
        case JsonKind.NULL:
            return 'null'
        case JsonKind.BOOLEAN:
            return 'true' if value else 'false'
        case JsonKind.NUMBER:
            return number_to_text(value)
        case JsonKind.STRING:
            return value
        case JsonKind.FUNCTION:
            return str(value)
        case JsonKind.ARRAY | JsonKind.OBJECT:
            return dump_json(value)


def dump_json(value: Any) -> str:
    """Serialize a value to compact JSON text.

    Functions are emitted as raw ``function(...){...}`` literals.
    """
    match kind_of(value):
        case JsonKind.NULL | JsonKind.BOOLEAN:
            return value_to_text(value)
        case JsonKind.NUMBER:
            if isinstance(value, Decimal):
                return str(value)
            return json.dumps(value)
        case JsonKind.STRING:
            return json.dumps(value, ensure_ascii=False)
        case JsonKind.FUNCTION:
            return str(value)
        case JsonKind.ARRAY:
            return '[' + ','.join(dump_json(item) for item in value) + ']'
        case JsonKind.OBJECT:
            members = [
                f'{json.dumps(str(key), ensure_ascii=False)}:{dump_json(item)}'
                for key, item in value.items()
            ]
            return '{' + ','.join(members) + '}'


def parse_json(text: str | bytes) -> Any:
    """Parse literal JSON text into the value model.

    Only arrays, objects and ``null`` are accepted at the top level.

    Returns:
        JsonArray, dict or None.

    Raises:
        MalformedInputError: If the text is not a JSON array, object or null.
    """
    if isinstance(text, bytes):
        text = text.decode()
    stripped = text.strip()
    if stripped.lower() == 'null':
        return None
    if not stripped.startswith(('[', '{')):
        raise MalformedInputError("Invalid JSON String")
    try:
        value = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Invalid JSON String: {e}") from e
    return _adopt(value)


def _adopt(value: Any) -> Any:
    """Turn decoded lists into JsonArray, recursively."""
    if isinstance(value, list):
        return JsonArray(_adopt(item) for item in value)
    if isinstance(value, dict):
        return {key: _adopt(item) for key, item in value.items()}
    return value
