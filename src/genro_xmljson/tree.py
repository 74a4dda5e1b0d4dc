# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Element tree used on both sides of the conversion.

A deliberately small XML model: qualified names are kept exactly as written
(prefix included), namespace declarations are kept apart from attributes,
and children are an ordered mix of text (str) and XmlElement nodes.

Classes:
    CData - text node written verbatim inside a CDATA section
    XmlElement - element node
    XmlTreeBuilder - SAX handler that materializes an XmlElement tree

Functions:
    parse_tree - parse XML text into an XmlElement tree
"""

from __future__ import annotations

from typing import Any
from xml import sax

from .exceptions import MalformedInputError


class CData(str):
    """Literal text block, emitted unescaped inside ``<![CDATA[...]]>``."""

    __slots__ = ()


class XmlElement:
    """XML element with qualified name, attributes, namespaces and children.

    Attributes:
        qname: Qualified name, ``prefix:local`` or ``local``.
        attributes: Dict of attribute qualified name to value.
        namespaces: Dict of declared prefix to uri, '' is the default namespace.
        children: Ordered list of str (text) and XmlElement nodes.
    """

    __slots__ = ('qname', 'attributes', 'namespaces', 'children')

    def __init__(
        self,
        qname: str,
        attributes: dict[str, str] | None = None,
        namespaces: dict[str, str] | None = None,
        children: list[Any] | None = None,
    ):
        self.qname = qname
        self.attributes: dict[str, str] = dict(attributes) if attributes else {}
        self.namespaces: dict[str, str] = dict(namespaces) if namespaces else {}
        self.children: list[Any] = list(children) if children else []

    def __repr__(self) -> str:
        return f'<XmlElement {self.qname} attrs={self.attributes} children={len(self.children)}>'

    @property
    def prefix(self) -> str:
        return self.qname.partition(':')[0] if ':' in self.qname else ''

    @property
    def local_name(self) -> str:
        return self.qname.rpartition(':')[2]

    @property
    def element_children(self) -> list[XmlElement]:
        return [child for child in self.children if isinstance(child, XmlElement)]

    @property
    def text_children(self) -> list[str]:
        return [child for child in self.children if isinstance(child, str)]

    @property
    def text_value(self) -> str:
        """String value: the text of all descendants, in document order.

        Walks the subtree with an explicit stack, so nesting depth is not
        bounded by the interpreter recursion limit.
        """
        parts = []
        stack = [iter(self.children)]
        while stack:
            for child in stack[-1]:
                if isinstance(child, XmlElement):
                    stack.append(iter(child.children))
                    break
                parts.append(child)
            else:
                stack.pop()
        return ''.join(parts)

    @property
    def height(self) -> int:
        """Element levels in this subtree, the element itself counting as 1."""
        height = 1
        stack = [(self, 1)]
        while stack:
            element, level = stack.pop()
            height = max(height, level)
            stack.extend((child, level + 1) for child in element.element_children)
        return height

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def declare_namespace(self, prefix: str, uri: str) -> None:
        """Declare a namespace unless the prefix already has a uri here."""
        if not self.namespaces.get(prefix, '').strip():
            self.namespaces[prefix] = uri

    def append(self, child: XmlElement | str) -> None:
        self.children.append(child)

    def append_text(self, text: str) -> None:
        """Append text, merging it with a preceding plain text node."""
        if (
            self.children
            and type(self.children[-1]) is str
            and type(text) is str
        ):
            self.children[-1] += text
        else:
            self.children.append(text)


class XmlTreeBuilder(sax.handler.ContentHandler):
    """SAX handler building an XmlElement tree.

    Namespace processing is left off so that qualified names and
    ``xmlns`` declarations reach the handler exactly as written.
    Comments and processing instructions are not reported, CDATA
    content arrives as ordinary characters.
    """

    def startDocument(self) -> None:
        self.root: XmlElement | None = None
        self.stack: list[XmlElement] = []

    def startElement(self, name: str, attrs: Any) -> None:
        element = XmlElement(name)
        for key, value in attrs.items():
            if key == 'xmlns':
                element.namespaces[''] = value
            elif key.startswith('xmlns:'):
                element.namespaces[key[6:]] = value
            else:
                element.attributes[key] = value

        if self.stack:
            self.stack[-1].append(element)
        else:
            self.root = element
        self.stack.append(element)

    def endElement(self, name: str) -> None:
        self.stack.pop()

    def characters(self, content: str) -> None:
        if self.stack:
            self.stack[-1].append_text(content)

    def ignorableWhitespace(self, whitespace: str) -> None:
        self.characters(whitespace)


def parse_tree(source: str | bytes) -> XmlElement:
    """Parse XML text into an XmlElement tree.

    Args:
        source: XML string or bytes. Bytes honour the encoding in the
            XML declaration.

    Returns:
        The document root element.

    Raises:
        MalformedInputError: If the text is not well-formed XML.
    """
    handler = XmlTreeBuilder()
    try:
        sax.parseString(source, handler)
    except sax.SAXException as e:
        raise MalformedInputError(f"Malformed XML: {e}") from e
    if handler.root is None:
        raise MalformedInputError("Malformed XML: no root element")
    return handler.root
