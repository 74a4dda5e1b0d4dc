# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""XML <-> JSON conversion entry points.

XmlJsonSerializer ties reader, writer and tree serializer to one immutable
configuration. Instances share no state: the same instance may be used for
any number of read/write calls.

When transforming JSON to XML, type hints are added so that the document
converts back to the same JSON:

    >>> from genro_xmljson import XmlJsonSerializer
    >>> serializer = XmlJsonSerializer()
    >>> xml = serializer.write({'name': 'json', 'bool': True, 'int': 1})
    >>> print(xml)
    <?xml version="1.0" encoding="UTF-8"?>
    <o class="object"><bool type="boolean">true</bool><int type="number">1</int><name type="string">json</name></o>
    >>> serializer.read(xml)
    {'bool': True, 'int': 1, 'name': 'json'}

Plain XML is converted with structural heuristics:

    >>> serializer.read('<root><e>1</e><e>2</e></root>')
    JsonArray(['1', '2'])
"""

from __future__ import annotations

from typing import Any

from .config import XmlJsonConfig
from .exceptions import ConversionError
from .reader import XmlJsonReader
from .tree import XmlElement
from .tree_serializer import XmlTreeSerializer
from .writer import XmlJsonWriter


class XmlJsonSerializer:
    """Bidirectional JSON/XML converter.

    Args:
        config: Complete configuration. If None, built from options.
        **options: XmlJsonConfig fields, applied on top of config.

    Example:
        >>> serializer = XmlJsonSerializer(type_hints_enabled=False, root_name='data')
        >>> serializer = serializer.with_options(trim_spaces=True)
    """

    def __init__(self, config: XmlJsonConfig | None = None, **options: Any):
        config = config or XmlJsonConfig()
        self.config = config.with_options(**options) if options else config
        self._reader = XmlJsonReader(self.config)
        self._writer = XmlJsonWriter(self.config)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.config!r})'

    def with_options(self, **options: Any) -> XmlJsonSerializer:
        """Return a new serializer with some options changed."""
        return type(self)(self.config.with_options(**options))

    def with_config(self, config: XmlJsonConfig) -> XmlJsonSerializer:
        return type(self)(config)

    # ==================== Public API ====================

    def read(self, source: str | bytes) -> Any:
        """Convert an XML document to a JSON value.

        Args:
            source: XML string or bytes.

        Returns:
            None, a JsonArray or a dict.

        Raises:
            MalformedInputError: If the XML is not well-formed.
            ConversionError: If a hinted value cannot be decoded.
        """
        return self._reader.read(source)

    def read_tree(self, root: XmlElement) -> Any:
        return self._reader.read_tree(root)

    def write(
        self,
        value: Any,
        encoding: str | None = None,
        filename: str | None = None,
    ) -> str:
        """Convert a JSON value to an XML document.

        Args:
            value: None, a list or a mapping.
            encoding: Output encoding (default UTF-8).
            filename: Optional file path; the encoded document is also
                written there.

        Returns:
            The XML document text.

        Raises:
            UnsupportedEncodingError: If the encoding is unknown.
            ConversionError: If the value cannot be represented as XML or
                the file cannot be written.
        """
        root, lenient = self._writer.build(value)
        result = XmlTreeSerializer.serialize(root, encoding=encoding, lenient=lenient)

        if filename:
            try:
                with open(filename, 'wb') as output:
                    output.write(result.encode(encoding or 'UTF-8'))
            except OSError as e:
                raise ConversionError(f"Cannot write {filename}: {e}") from e

        return result

    def build_tree(self, value: Any) -> XmlElement:
        """Convert a JSON value to an XmlElement tree without serializing it."""
        return self._writer.build(value)[0]


def to_xml(
    value: Any,
    encoding: str | None = None,
    filename: str | None = None,
    config: XmlJsonConfig | None = None,
    **options: Any,
) -> str:
    """Convert a JSON value to XML text.

    This is a convenience wrapper around XmlJsonSerializer.write().
    """
    return XmlJsonSerializer(config, **options).write(value, encoding=encoding, filename=filename)


def from_xml(
    source: str | bytes,
    config: XmlJsonConfig | None = None,
    **options: Any,
) -> Any:
    """Convert XML text to a JSON value.

    This is a convenience wrapper around XmlJsonSerializer.read().
    """
    return XmlJsonSerializer(config, **options).read(source)
