# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Heuristic shape classification of unhinted elements.

When an element carries no class hint, its JSON shape is inferred from
structure alone:

- null: no children and no attributes besides the hints (or a ``null``
  attribute);
- array: every child element shares one qualified name, there is no
  non-blank stray text, and no namespace is declared on the element;
- object: anything else.

Two positional quirks are kept on purpose. A lone text child is array-like
only at the document root, and a single nested child element is object
shaped while the same child surrounded by blank text is array shaped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .hints import ARRAY, CLASS_ATTR, NULL_ATTR, TYPE_ATTR, get_class

if TYPE_CHECKING:
    from .tree import XmlElement


def _only_hint_attributes(element: XmlElement) -> bool:
    """True if the element has no attributes other than class/type."""
    names = set(element.attributes)
    return names <= {CLASS_ATTR, TYPE_ATTR}


def _has_lone_text(element: XmlElement) -> bool:
    return len(element.children) == 1 and isinstance(element.children[0], str)


def is_null(element: XmlElement) -> bool:
    """True if the element stands for JSON null."""
    if element.children:
        return False
    if element.get_attribute(NULL_ATTR) is not None:
        return True
    return _only_hint_attributes(element)


def _check_child_elements(element: XmlElement, is_top_level: bool) -> bool:
    if _has_lone_text(element):
        return is_top_level

    elements = element.element_children
    if len(element.children) == len(elements):
        if not elements:
            return True
        if len(elements) == 1:
            return False
    elif any(text.strip() for text in element.text_children):
        return False

    if not elements:
        return True
    child_name = elements[0].qname
    return all(child.qname == child_name for child in elements[1:])


def is_array(element: XmlElement, is_top_level: bool = False) -> bool:
    """True if the element should decode as a JSON array."""
    if get_class(element) == ARRAY:
        result = True
    elif _only_hint_attributes(element):
        result = _check_child_elements(element, is_top_level)
    else:
        result = False

    if result and any(uri.strip() for uri in element.namespaces.values()):
        return False
    return result


def is_object(element: XmlElement, is_top_level: bool = False) -> bool:
    """True if the element should decode as a JSON object.

    A lone text child makes the element object shaped only at the top
    level; nested, the element is a plain string.
    """
    if is_array(element, is_top_level):
        return False
    if _has_lone_text(element):
        return is_top_level
    return True
