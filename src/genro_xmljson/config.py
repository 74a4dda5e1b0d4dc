# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Converter configuration.

XmlJsonConfig is an immutable value: each converter gets its own copy at
construction and nothing is shared between instances. Namespace operations
return a new configuration.

Options:
    object_name: Tag for object containers (default 'o').
    array_name: Tag for array containers (default 'a').
    element_name: Tag for array items (default 'e').
    root_name: Root tag override, None when unset.
    type_hints_enabled: Emit type/class hint attributes on write.
    namespace_lenient: Write prefixed names verbatim without checking that
        the prefix is bound. Turned on implicitly by any namespace use.
    skip_namespaces: Do not report ``@xmlns`` members on read.
    remove_namespace_prefix_from_elements: Strip prefixes from member keys
        generated on read.
    trim_spaces: Trim text values on read.
    expandable_properties: Member names always written as repeated
        sibling elements.
    namespaces: Root and per element namespace tables.
    max_depth: Deepest nesting accepted on read and write.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from .namespaces import NamespaceScopes

DEFAULT_OBJECT_NAME = 'o'
DEFAULT_ARRAY_NAME = 'a'
DEFAULT_ELEMENT_NAME = 'e'
DEFAULT_MAX_DEPTH = 256


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True)
class XmlJsonConfig:
    """Immutable options of an XmlJsonSerializer."""

    object_name: str = DEFAULT_OBJECT_NAME
    array_name: str = DEFAULT_ARRAY_NAME
    element_name: str = DEFAULT_ELEMENT_NAME
    root_name: str | None = None
    type_hints_enabled: bool = True
    namespace_lenient: bool = False
    skip_namespaces: bool = False
    remove_namespace_prefix_from_elements: bool = False
    trim_spaces: bool = False
    expandable_properties: frozenset[str] = frozenset()
    namespaces: NamespaceScopes = field(default_factory=NamespaceScopes)
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        if _blank(self.object_name):
            object.__setattr__(self, 'object_name', DEFAULT_OBJECT_NAME)
        if _blank(self.array_name):
            object.__setattr__(self, 'array_name', DEFAULT_ARRAY_NAME)
        if _blank(self.element_name):
            object.__setattr__(self, 'element_name', DEFAULT_ELEMENT_NAME)
        if _blank(self.root_name):
            object.__setattr__(self, 'root_name', None)
        if not isinstance(self.expandable_properties, frozenset):
            object.__setattr__(
                self, 'expandable_properties', frozenset(self.expandable_properties or ())
            )
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")

    @property
    def is_lenient(self) -> bool:
        """True if namespace prefixes are written without validation."""
        if self.namespace_lenient or self.namespaces:
            return True
        names = (self.object_name, self.array_name, self.element_name, self.root_name or '')
        return any(':' in name for name in names)

    def with_options(self, **changes) -> XmlJsonConfig:
        """Return a copy with the given options changed."""
        return replace(self, **changes)

    def with_expandable_properties(self, names: Iterable[str]) -> XmlJsonConfig:
        return replace(self, expandable_properties=frozenset(names))

    # ==================== Namespaces ====================

    def add_namespace(self, prefix: str | None, uri: str | None, element_name: str | None = None) -> XmlJsonConfig:
        """Declare a namespace on the root or on elements named element_name."""
        return replace(self, namespaces=self.namespaces.add(prefix, uri, element_name))

    def set_namespace(self, prefix: str | None, uri: str | None, element_name: str | None = None) -> XmlJsonConfig:
        """Replace all declarations of the scope with this one."""
        return replace(self, namespaces=self.namespaces.set(prefix, uri, element_name))

    def remove_namespace(self, prefix: str | None, element_name: str | None = None) -> XmlJsonConfig:
        return replace(self, namespaces=self.namespaces.remove(prefix, element_name))

    def clear_namespaces(self, element_name: str | None = None) -> XmlJsonConfig:
        return replace(self, namespaces=self.namespaces.clear(element_name))

    def clear_all_namespaces(self) -> XmlJsonConfig:
        return replace(self, namespaces=self.namespaces.clear_all())
