# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""XmlElement tree to XML text.

The serializer builds the document as a list of string fragments, quoting
with xml.sax.saxutils. Text and attribute values must hold only characters
allowed by XML 1.0, otherwise ConversionError is raised. Beyond plain
serialization there are these special cases:

- CData text nodes are written raw inside ``<![CDATA[...]]>``; a character
  the output encoding cannot represent closes the section and is written as
  a character reference between two sections;
- in lenient mode qualified names are written verbatim, without checking
  that their prefix is bound to a namespace;
- a namespace declaration with a blank uri is not written at all.

Example:
    >>> from genro_xmljson.tree import XmlElement
    >>> root = XmlElement('o', attributes={'class': 'object'})
    >>> root.append(XmlElement('a', children=['1']))
    >>> XmlTreeSerializer.serialize(root, declaration=False)
    '<o class="object"><a>1</a></o>'
"""

from __future__ import annotations

import codecs
import re
from xml.sax import saxutils

from .exceptions import ConversionError, UnsupportedEncodingError
from .tree import CData, XmlElement

XML_NAMESPACE = 'http://www.w3.org/XML/1998/namespace'

_NAME = r'[^\W\d][\w.\-]*'
_QNAME_RE = re.compile(rf'{_NAME}(?::{_NAME})?')
_LENIENT_NAME_RE = re.compile(r'[^\W\d][\w.\-:]*')

_TEXT_ENTITIES = {'\r': '&#13;'}

# characters outside the XML 1.0 Char production
_INVALID_CHAR_RE = re.compile('[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]')


class XmlTreeSerializer:
    """Serialize an XmlElement tree to XML text.

    Args:
        root: Document root element.
        encoding: Output encoding named in the XML declaration.
        lenient: If True, prefixed names are written verbatim.
        declaration: If True, start with the XML declaration.
    """

    def __init__(
        self,
        root: XmlElement,
        encoding: str = 'UTF-8',
        lenient: bool = False,
        declaration: bool = True,
    ):
        self.root = root
        self.encoding = encoding
        self.lenient = lenient
        self.declaration = declaration
        self.codec_name = encoding

    @classmethod
    def serialize(
        cls,
        root: XmlElement,
        encoding: str | None = None,
        lenient: bool = False,
        declaration: bool = True,
    ) -> str:
        """Serialize a tree to XML text.

        Characters the encoding cannot represent are written as numeric
        character references.

        Raises:
            UnsupportedEncodingError: If the encoding is unknown.
            ConversionError: If a name is not a valid XML name, or its prefix
                is unbound outside lenient mode.
                Also raised for a character XML 1.0 does not allow.
        """
        instance = cls(
            root=root,
            encoding=encoding or 'UTF-8',
            lenient=lenient,
            declaration=declaration,
        )
        return instance._serialize()

    def _serialize(self) -> str:
        try:
            self.codec_name = codecs.lookup(self.encoding).name
        except LookupError as e:
            raise UnsupportedEncodingError(f"Unsupported encoding: {self.encoding}") from e

        parts: list[str] = []
        if self.declaration:
            parts.append(f'<?xml version="1.0" encoding="{self.encoding}"?>\n')
        self._element_to_xml(self.root, parts, {'xml': XML_NAMESPACE})
        if self.declaration:
            parts.append('\n')

        content = ''.join(parts)
        return content.encode(self.codec_name, 'xmlcharrefreplace').decode(self.codec_name)

    def _element_to_xml(self, element: XmlElement, parts: list[str], in_scope: dict[str, str]) -> None:
        declared = {prefix: uri for prefix, uri in element.namespaces.items() if uri.strip()}
        scope = {**in_scope, **declared} if declared else in_scope
        self._check_name(element.qname, scope, 'element')

        parts.append(f'<{element.qname}')
        for name, value in element.attributes.items():
            self._check_name(name, scope, 'attribute')
            self._check_chars(value, f"attribute {name!r}")
            parts.append(f' {name}={saxutils.quoteattr(value)}')
        for prefix, uri in declared.items():
            self._check_chars(uri, f"namespace {prefix!r}")
            name = f'xmlns:{prefix}' if prefix else 'xmlns'
            parts.append(f' {name}={saxutils.quoteattr(uri)}')

        children = [child for child in element.children if not (isinstance(child, str) and child == '')]
        if not children:
            parts.append('/>')
            return

        parts.append('>')
        for child in children:
            if isinstance(child, XmlElement):
                self._element_to_xml(child, parts, scope)
            elif isinstance(child, CData):
                self._check_chars(child, f"<{element.qname}> text")
                parts.append(self._cdata(child))
            else:
                self._check_chars(child, f"<{element.qname}> text")
                parts.append(saxutils.escape(child, _TEXT_ENTITIES))
        parts.append(f'</{element.qname}>')

    def _cdata(self, text: str) -> str:
        # a literal "]]>" has to be split across two sections
        text = text.replace(']]>', ']]]]><![CDATA[>')
        try:
            text.encode(self.codec_name)
        except UnicodeEncodeError:
            text = ''.join(
                char if self._encodable(char) else f']]>&#{ord(char)};<![CDATA['
                for char in text
            )
        return '<![CDATA[' + text + ']]>'

    def _encodable(self, char: str) -> bool:
        try:
            char.encode(self.codec_name)
        except UnicodeEncodeError:
            return False
        return True

    @staticmethod
    def _check_chars(text: str, where: str) -> None:
        invalid = _INVALID_CHAR_RE.search(text)
        if invalid:
            raise ConversionError(f"Invalid XML character {invalid.group()!r} in {where}")

    def _check_name(self, name: str, scope: dict[str, str], what: str) -> None:
        if self.lenient:
            if not _LENIENT_NAME_RE.fullmatch(name):
                raise ConversionError(f"Invalid XML {what} name: {name!r}")
            return
        if not _QNAME_RE.fullmatch(name):
            raise ConversionError(f"Invalid XML {what} name: {name!r}")
        if ':' in name:
            prefix = name.partition(':')[0]
            if prefix not in scope:
                raise ConversionError(f"Unbound namespace prefix {prefix!r} in {what} {name!r}")
