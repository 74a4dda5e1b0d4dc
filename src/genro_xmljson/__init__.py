# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""genro-xmljson: bidirectional JSON <-> XML conversion.

JSON values become XML documents carrying type hints, and XML documents
(hinted or not) become JSON values, using structural heuristics where
hints are missing.

Example:
    >>> from genro_xmljson import XmlJsonSerializer
    >>> serializer = XmlJsonSerializer()
    >>> serializer.read(serializer.write({'a': 1, 'b': [1, 2, 3]}))
    {'a': 1, 'b': JsonArray([1, 2, 3])}
"""

from .config import XmlJsonConfig
from .exceptions import (
    ConversionError,
    DepthLimitError,
    MalformedInputError,
    UnsupportedEncodingError,
    XmlJsonException,
)
from .namespaces import NamespaceScopes
from .serializer import XmlJsonSerializer, from_xml, to_xml
from .tree import CData, XmlElement, parse_tree
from .values import JsonArray, JsonFunction, JsonKind, dump_json, kind_of, parse_json

__version__ = '0.1.0'

__all__ = [
    'CData',
    'ConversionError',
    'DepthLimitError',
    'JsonArray',
    'JsonFunction',
    'JsonKind',
    'MalformedInputError',
    'NamespaceScopes',
    'UnsupportedEncodingError',
    'XmlElement',
    'XmlJsonConfig',
    'XmlJsonException',
    'XmlJsonSerializer',
    'dump_json',
    'from_xml',
    'kind_of',
    'parse_json',
    'parse_tree',
    'to_xml',
]
