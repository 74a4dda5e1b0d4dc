# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""XML to JSON reader.

Walks an XmlElement tree top-down and builds the JSON value:

- the root is null, an array or an object (class hint first, then the
  heuristic classifier);
- every child element is decoded by its class hint, else its type hint
  (or the type inherited from the root), else the classifier;
- object members are ``@xmlns[:prefix]`` for namespace declarations,
  ``@name`` for attributes, ``#text`` for direct text and the qualified
  name for child elements.

A key assigned twice accumulates every value into a JsonArray flagged
expand_elements, so that writing the object back yields the repeated
siblings again.
"""

from __future__ import annotations

import logging
from typing import Any

from .classifier import is_array, is_null, is_object
from .config import XmlJsonConfig
from .exceptions import DepthLimitError
from .hints import (
    ARRAY,
    BOOLEAN,
    FLOAT,
    FUNCTION,
    HINT_ATTRS,
    INTEGER,
    NUMBER,
    OBJECT,
    PARAMS_ATTR,
    STRING,
    TEXT_KEY,
    XMLNS_KEY,
    decode_boolean,
    decode_function,
    decode_number,
    get_class,
    get_type,
)
from .tree import XmlElement, parse_tree
from .values import JsonArray

logger = logging.getLogger(__name__)


class XmlJsonReader:
    """Convert XML text or an XmlElement tree into a JSON value."""

    def __init__(self, config: XmlJsonConfig | None = None):
        self.config = config or XmlJsonConfig()

    def read(self, source: str | bytes) -> Any:
        """Parse XML text and convert it.

        Returns:
            None, a JsonArray or a dict.

        Raises:
            MalformedInputError: If the XML is not well-formed.
            ConversionError: If a hinted value cannot be decoded.
        """
        return self.read_tree(parse_tree(source))

    def read_tree(self, root: XmlElement) -> Any:
        if is_null(root):
            return None
        default_type = get_type(root, STRING)
        if default_type in (ARRAY, OBJECT):
            default_type = STRING
        if get_class(root) == OBJECT:
            return self._decode_object(root, default_type, 1)
        if is_array(root, is_top_level=True):
            logger.debug("Reading root <%s> as array", root.qname)
            return self._decode_array(root, default_type, 1)
        logger.debug("Reading root <%s> as object", root.qname)
        return self._decode_object(root, default_type, 1)

    # ==================== Private Helpers ====================

    def _check_depth(self, depth: int) -> None:
        if depth > self.config.max_depth:
            raise DepthLimitError(self.config.max_depth)

    def _trim(self, value: str) -> str:
        return value.strip() if self.config.trim_spaces else value

    def _key(self, name: str) -> str:
        if self.config.remove_namespace_prefix_from_elements:
            return name.rpartition(':')[2]
        return name

    def _decode_array(self, element: XmlElement, default_type: str, depth: int) -> JsonArray:
        self._check_depth(depth)
        result = JsonArray()
        for child in element.children:
            if isinstance(child, XmlElement):
                result.append(self._decode_value(child, default_type, depth + 1))
            elif child.strip():
                result.append(child)
        return result

    def _decode_object(self, element: XmlElement, default_type: str, depth: int) -> dict | None:
        self._check_depth(depth)
        if is_null(element):
            return None
        members: dict[str, Any] = {}

        if not self.config.skip_namespaces:
            for prefix, uri in element.namespaces.items():
                if not uri.strip():
                    continue
                key = f'{XMLNS_KEY}:{prefix}' if prefix.strip() else XMLNS_KEY
                _set_or_accumulate(members, key, self._trim(uri))

        for name, value in element.attributes.items():
            if name.lower() in HINT_ATTRS:
                continue
            _set_or_accumulate(members, '@' + self._key(name), self._trim(value))

        for child in element.children:
            if isinstance(child, XmlElement):
                value = self._decode_value(child, default_type, depth + 1)
                _set_or_accumulate(members, self._key(child.qname), value)
            elif child.strip():
                _set_or_accumulate(members, TEXT_KEY, self._trim(child))

        return members

    def _decode_value(self, element: XmlElement, default_type: str, depth: int) -> Any:
        """Decode a child element by class hint, type hint or shape."""
        element_class = get_class(element)
        explicit_type = get_type(element)
        hint = explicit_type or default_type
        if explicit_type is None and element_class is None:
            logger.debug("Using default type %s for <%s>", hint, element.qname)

        # a container passes its scalar type down, never a container type
        child_type = default_type if hint in (ARRAY, OBJECT) else hint
        if element_class == ARRAY or (element_class is None and hint == ARRAY):
            return self._decode_array(element, child_type, depth)
        if element_class == OBJECT or (element_class is None and hint == OBJECT):
            return self._decode_object(element, child_type, depth)

        # scalar text spans the whole subtree
        if depth + element.height - 1 > self.config.max_depth:
            raise DepthLimitError(self.config.max_depth)

        if hint == BOOLEAN:
            return decode_boolean(element.text_value)
        if hint in (NUMBER, INTEGER, FLOAT):
            return decode_number(element.text_value, hint)
        if hint == FUNCTION:
            return decode_function(element)

        # string: literal when hinted explicitly, else infer the shape
        if explicit_type == STRING:
            return self._trim(element.text_value)
        if element.get_attribute(PARAMS_ATTR) is not None:
            return decode_function(element)
        if is_array(element, is_top_level=False):
            return self._decode_array(element, default_type, depth)
        if is_object(element, is_top_level=False):
            return self._decode_object(element, default_type, depth)
        return self._trim(element.text_value)


def _set_or_accumulate(members: dict[str, Any], key: str, value: Any) -> None:
    """Assign a member, accumulating repeated keys into an expandable array."""
    if key not in members:
        members[key] = value
        return
    current = members[key]
    if isinstance(current, JsonArray) and current.expand_elements:
        current.append(value)
    else:
        members[key] = JsonArray([current, value], expand_elements=True)
