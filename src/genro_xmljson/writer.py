# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""JSON to XML tree writer.

Builds an XmlElement tree from a JSON value. Text serialization is left
to XmlTreeSerializer.

Object members are written in sorted name order, so the output is
canonical rather than a copy of the original member order:

- ``@xmlns`` / ``@xmlns:prefix`` become namespace declarations (the first
  declaration of a prefix on an element wins);
- ``@name`` becomes an attribute;
- ``#text`` becomes direct text (array values are joined with no separator);
- an array flagged expand_elements, or named in expandable_properties,
  becomes one sibling element per item;
- anything else becomes one child element named after the member.
"""

from __future__ import annotations

import logging
from operator import itemgetter
from typing import Any

from .config import XmlJsonConfig
from .exceptions import ConversionError, DepthLimitError
from .hints import (
    ARRAY,
    CLASS_ATTR,
    NULL_ATTR,
    OBJECT,
    PARAMS_ATTR,
    TEXT_KEY,
    XMLNS_KEY,
    encode_hint,
    encode_params,
)
from .tree import CData, XmlElement
from .values import JsonKind, kind_of, value_to_text

logger = logging.getLogger(__name__)


class XmlJsonWriter:
    """Convert a JSON value into an XmlElement tree."""

    # ==================== Internal Context ====================

    class _Context:
        """Per call state: leniency can only be switched on during a call."""

        __slots__ = ('lenient',)

        def __init__(self, lenient: bool):
            self.lenient = lenient

        def enable_lenient(self, reason: str) -> None:
            if not self.lenient:
                logger.debug("Namespace lenient mode enabled by %s", reason)
                self.lenient = True

    def __init__(self, config: XmlJsonConfig | None = None):
        self.config = config or XmlJsonConfig()

    # ==================== Public API ====================

    def build(self, value: Any) -> tuple[XmlElement, bool]:
        """Build the document tree for a value.

        Args:
            value: None, a list or a mapping.

        Returns:
            (root element, lenient) where lenient tells the serializer
            whether prefixed names may be written without a binding.

        Raises:
            ConversionError: If the value is a bare scalar or contains
                values with no JSON counterpart.
        """
        config = self.config
        ctx = self._Context(config.is_lenient)

        match kind_of(value):
            case JsonKind.NULL:
                root = self._new_element(config.root_name or config.object_name, ctx, declare=False)
                root.set_attribute(NULL_ATTR, 'true')
            case JsonKind.ARRAY:
                root = self._new_element(config.root_name or config.array_name, ctx, declare=False)
                if config.type_hints_enabled:
                    root.set_attribute(CLASS_ATTR, ARRAY)
                self._encode_array(value, root, ctx, 1)
            case JsonKind.OBJECT:
                root = self._new_element(config.root_name or config.object_name, ctx)
                if config.type_hints_enabled:
                    root.set_attribute(CLASS_ATTR, OBJECT)
                self._encode_object(value, root, ctx, 1, is_root=True)
            case kind:
                raise ConversionError(f"Cannot write a bare {kind.value} as an XML document")

        return root, ctx.lenient

    # ==================== Private Helpers ====================

    def _check_depth(self, depth: int) -> None:
        if depth > self.config.max_depth:
            raise DepthLimitError(self.config.max_depth)

    def _new_element(self, name: str, ctx: _Context, declare: bool = True) -> XmlElement:
        if ':' in name:
            ctx.enable_lenient(f"prefixed name {name!r}")
        element = XmlElement(name)
        if declare:
            namespaces = self.config.namespaces.element_namespaces(name)
            if namespaces:
                ctx.enable_lenient(f"namespaces declared for <{name}>")
                element.namespaces.update(namespaces)
        return element

    def _encode_value(self, value: Any, target: XmlElement, ctx: _Context, depth: int) -> XmlElement:
        if self.config.type_hints_enabled:
            target.set_attribute(*encode_hint(value))

        match kind_of(value):
            case JsonKind.NULL:
                target.set_attribute(NULL_ATTR, 'true')
            case JsonKind.FUNCTION:
                target.set_attribute(PARAMS_ATTR, encode_params(value.params))
                target.append(CData(value.body))
            case JsonKind.ARRAY:
                self._encode_array(value, target, ctx, depth)
            case JsonKind.OBJECT:
                self._encode_object(value, target, ctx, depth)
            case _:
                text = value_to_text(value)
                if text:
                    target.append_text(text)
        return target

    def _encode_array(self, array: list | tuple, target: XmlElement, ctx: _Context, depth: int) -> None:
        self._check_depth(depth)
        for item in array:
            element = self._new_element(self.config.element_name, ctx)
            target.append(self._encode_value(item, element, ctx, depth + 1))

    def _encode_object(
        self,
        obj: Any,
        target: XmlElement,
        ctx: _Context,
        depth: int,
        is_root: bool = False,
    ) -> None:
        self._check_depth(depth)
        if not obj:
            return

        if is_root:
            root_namespaces = self.config.namespaces.root_namespaces()
            if root_namespaces:
                ctx.enable_lenient("root namespaces")
                target.namespaces.update(root_namespaces)

        members = sorted(((str(name), value) for name, value in obj.items()), key=itemgetter(0))
        for name, value in members:
            if name.startswith(XMLNS_KEY):
                ctx.enable_lenient(f"member {name!r}")
                target.declare_namespace(name.partition(':')[2], value_to_text(value))
            elif name.startswith('@'):
                target.set_attribute(name[1:], value_to_text(value))
            elif name == TEXT_KEY:
                if kind_of(value) is JsonKind.ARRAY:
                    text = ''.join(value_to_text(item) for item in value)
                else:
                    text = value_to_text(value)
                if text:
                    target.append_text(text)
            elif self._is_expandable(name, value):
                for item in value:
                    element = self._new_element(name, ctx)
                    target.append(self._encode_value(item, element, ctx, depth + 1))
            else:
                element = self._new_element(name, ctx)
                target.append(self._encode_value(value, element, ctx, depth + 1))

    def _is_expandable(self, name: str, value: Any) -> bool:
        if not isinstance(value, (list, tuple)):
            return False
        return getattr(value, 'expand_elements', False) or name in self.config.expandable_properties
