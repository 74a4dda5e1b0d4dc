# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Namespace declarations applied while writing XML.

Two scopes are kept:
    - root: declared on the root element of an object document
    - per element name: declared on every element written with that
      qualified name

NamespaceScopes is immutable; every operation returns a new instance.
Prefixes are kept sorted so that declarations are written in a stable
order. The empty prefix stands for the default namespace.

Example:
    >>> scopes = NamespaceScopes().add('ns', 'http://x')
    >>> scopes = scopes.add('', 'http://y', element_name='item')
    >>> scopes.root_namespaces()
    {'ns': 'http://x'}
    >>> scopes.element_namespaces('item')
    {'': 'http://y'}
"""

from __future__ import annotations

from dataclasses import dataclass

Pairs = tuple[tuple[str, str], ...]


def _pairs(mapping: dict[str, str]) -> Pairs:
    return tuple(sorted(mapping.items()))


@dataclass(frozen=True)
class NamespaceScopes:
    """Root and per element namespace tables."""

    root: Pairs = ()
    elements: tuple[tuple[str, Pairs], ...] = ()

    def __bool__(self) -> bool:
        return bool(self.root or self.elements)

    def root_namespaces(self) -> dict[str, str]:
        return dict(self.root)

    def element_namespaces(self, element_name: str) -> dict[str, str]:
        for name, pairs in self.elements:
            if name == element_name:
                return dict(pairs)
        return {}

    def _with_element(self, element_name: str, mapping: dict[str, str]) -> NamespaceScopes:
        tables = {name: pairs for name, pairs in self.elements}
        if mapping:
            tables[element_name] = _pairs(mapping)
        else:
            tables.pop(element_name, None)
        return NamespaceScopes(root=self.root, elements=tuple(sorted(tables.items())))

    def add(self, prefix: str | None, uri: str | None, element_name: str | None = None) -> NamespaceScopes:
        """Declare one prefix, keeping the others of the same scope."""
        if not uri or not uri.strip():
            return self
        prefix = (prefix or '').strip()
        if not element_name or not element_name.strip():
            mapping = self.root_namespaces()
            mapping[prefix] = uri.strip()
            return NamespaceScopes(root=_pairs(mapping), elements=self.elements)
        mapping = self.element_namespaces(element_name)
        mapping[prefix] = uri.strip()
        return self._with_element(element_name, mapping)

    def set(self, prefix: str | None, uri: str | None, element_name: str | None = None) -> NamespaceScopes:
        """Replace the whole scope with a single declaration."""
        if not uri or not uri.strip():
            return self
        prefix = (prefix or '').strip()
        if not element_name or not element_name.strip():
            return NamespaceScopes(root=((prefix, uri.strip()),), elements=self.elements)
        return self._with_element(element_name, {prefix: uri.strip()})

    def remove(self, prefix: str | None, element_name: str | None = None) -> NamespaceScopes:
        prefix = (prefix or '').strip()
        if not element_name or not element_name.strip():
            mapping = self.root_namespaces()
            mapping.pop(prefix, None)
            return NamespaceScopes(root=_pairs(mapping), elements=self.elements)
        mapping = self.element_namespaces(element_name)
        mapping.pop(prefix, None)
        return self._with_element(element_name, mapping)

    def clear(self, element_name: str | None = None) -> NamespaceScopes:
        """Drop every declaration of one scope (the root scope by default)."""
        if not element_name or not element_name.strip():
            return NamespaceScopes(root=(), elements=self.elements)
        return self._with_element(element_name, {})

    def clear_all(self) -> NamespaceScopes:
        return NamespaceScopes()
