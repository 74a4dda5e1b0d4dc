# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for JSON to XML writing."""

from decimal import Decimal

import pytest

from genro_xmljson import (
    ConversionError,
    DepthLimitError,
    JsonArray,
    JsonFunction,
    UnsupportedEncodingError,
    XmlElement,
    XmlJsonConfig,
    XmlJsonSerializer,
    to_xml,
)

DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def body(xml):
    """Document without the XML declaration and the final newline."""
    assert xml.startswith(DECLARATION)
    assert xml.endswith('\n')
    return xml[len(DECLARATION):-1]


class TestDocument:
    """Root element of the written document."""

    def test_object(self, serializer):
        xml = serializer.write({'a': 1, 'b': [1, 2, 3]})
        assert xml == (
            DECLARATION
            + '<o class="object"><a type="number">1</a><b class="array">'
            '<e type="number">1</e><e type="number">2</e><e type="number">3</e>'
            '</b></o>\n'
        )

    def test_array(self, serializer):
        assert body(serializer.write([1, 'x', True, None])) == (
            '<a class="array"><e type="number">1</e><e type="string">x</e>'
            '<e type="boolean">true</e><e class="object" null="true"/></a>'
        )

    def test_tuple_is_array(self, serializer):
        assert body(serializer.write((1,))) == '<a class="array"><e type="number">1</e></a>'

    def test_null(self, serializer):
        assert body(serializer.write(None)) == '<o null="true"/>'

    def test_empty_containers(self, serializer):
        assert body(serializer.write({})) == '<o class="object"/>'
        assert body(serializer.write([])) == '<a class="array"/>'

    def test_root_name(self):
        serializer = XmlJsonSerializer(root_name='data')
        assert body(serializer.write({'a': 1})) == '<data class="object"><a type="number">1</a></data>'
        assert body(serializer.write([])) == '<data class="array"/>'
        assert body(serializer.write(None)) == '<data null="true"/>'

    def test_custom_names(self):
        serializer = XmlJsonSerializer(object_name='obj', array_name='arr', element_name='it')
        assert body(serializer.write([[1]])) == (
            '<arr class="array"><it class="array"><it type="number">1</it></it></arr>'
        )
        assert body(serializer.write({'x': None})) == '<obj class="object"><x class="object" null="true"/></obj>'

    @pytest.mark.parametrize('value,kind', [(1, 'number'), ('x', 'string'), (True, 'boolean')])
    def test_bare_scalar_rejected(self, serializer, value, kind):
        with pytest.raises(ConversionError, match=f"Cannot write a bare {kind}"):
            serializer.write(value)

    def test_build_tree(self, serializer):
        root = serializer.build_tree({'a': 1})
        assert isinstance(root, XmlElement)
        assert root.qname == 'o'
        assert root.element_children[0].attributes == {'type': 'number'}

    def test_to_xml(self):
        assert body(to_xml({'a': 1}, type_hints_enabled=False)) == '<o><a>1</a></o>'


class TestValues:
    """Scalars, functions and nested containers."""

    def test_scalars(self, serializer):
        value = {'b': False, 'd': Decimal('1.10'), 'f': 2.5, 's': 'x < y & z'}
        assert body(serializer.write(value)) == (
            '<o class="object"><b type="boolean">false</b><d type="number">1.10</d>'
            '<f type="number">2.5</f><s type="string">x &lt; y &amp; z</s></o>'
        )

    def test_empty_string(self, serializer):
        assert body(serializer.write({'s': ''})) == '<o class="object"><s type="string"/></o>'

    def test_function(self, serializer):
        value = {'f': JsonFunction(('a', 'b'), 'return a < b;')}
        assert body(serializer.write(value)) == (
            '<o class="object"><f type="function" params="a,b"><![CDATA[return a < b;]]></f></o>'
        )

    def test_nested(self, serializer):
        value = {'a': {'b': {}, 'c': []}}
        assert body(serializer.write(value)) == (
            '<o class="object"><a class="object"><b class="object"/><c class="array"/></a></o>'
        )

    def test_members_sorted(self, serializer):
        assert body(serializer.write({'b': 1, 'a': 2})) == (
            '<o class="object"><a type="number">2</a><b type="number">1</b></o>'
        )

    def test_without_hints(self, plain_serializer):
        value = {'a': 1, 'b': [1, None], 'f': JsonFunction(('x',), 'x')}
        assert body(plain_serializer.write(value)) == (
            '<o><a>1</a><b><e>1</e><e null="true"/></b><f params="x"><![CDATA[x]]></f></o>'
        )

    @pytest.mark.parametrize('value', [
        {'s': 'a\x01b'},
        {'@x': '\x0b'},
        {'f': JsonFunction((), '\x00')},
        {'@xmlns:p': 'http://p\ufffe'},
    ])
    def test_invalid_xml_characters(self, serializer, value):
        with pytest.raises(ConversionError, match="Invalid XML character"):
            serializer.write(value)

    def test_unsupported_value(self, serializer):
        with pytest.raises(ConversionError, match="Unsupported value type"):
            serializer.write({'a': object()})

    def test_invalid_member_name(self, serializer):
        with pytest.raises(ConversionError, match="Invalid XML element name"):
            serializer.write({'1a': 1})


class TestMembers:
    """Attributes, text and repeated siblings."""

    def test_attributes_and_text(self, serializer):
        value = {'@id': '1', '@n': 5, '#text': 'hi', 'x': True}
        assert body(serializer.write(value)) == (
            '<o class="object" id="1" n="5">hi<x type="boolean">true</x></o>'
        )

    def test_text_array_joined(self, serializer):
        assert body(serializer.write({'#text': ['a', 'b']})) == '<o class="object">ab</o>'

    def test_expand_elements_flag(self, serializer):
        value = {'item': JsonArray(['1', '2'], expand_elements=True)}
        assert body(serializer.write(value)) == (
            '<o class="object"><item type="string">1</item><item type="string">2</item></o>'
        )

    def test_expandable_properties(self):
        serializer = XmlJsonSerializer(type_hints_enabled=False, expandable_properties=['item'])
        value = {'item': [1, 2], 'other': [3]}
        assert body(serializer.write(value)) == (
            '<o><item>1</item><item>2</item><other><e>3</e></other></o>'
        )


class TestNamespaces:
    """Namespace declarations on write."""

    def test_root_namespace(self):
        config = XmlJsonConfig().add_namespace('ns', 'http://x')
        serializer = XmlJsonSerializer(config)
        assert body(serializer.write({'a': 1})) == (
            '<o class="object" xmlns:ns="http://x"><a type="number">1</a></o>'
        )

    def test_element_namespace(self):
        config = XmlJsonConfig().add_namespace('', 'http://y', element_name='a')
        assert body(XmlJsonSerializer(config).write({'a': 1, 'b': 2})) == (
            '<o class="object"><a type="number" xmlns="http://y">1</a><b type="number">2</b></o>'
        )

    def test_element_namespace_on_array_items(self):
        config = XmlJsonConfig().add_namespace('p', 'http://p', element_name='e')
        assert body(XmlJsonSerializer(config).write([1])) == (
            '<a class="array"><e type="number" xmlns:p="http://p">1</e></a>'
        )

    def test_xmlns_members(self, serializer):
        value = {'@xmlns': 'http://d', '@xmlns:p': 'http://p', 'p:a': 1}
        assert body(serializer.write(value)) == (
            '<o class="object" xmlns="http://d" xmlns:p="http://p"><p:a type="number">1</p:a></o>'
        )

    def test_prefixed_member_written_verbatim(self, serializer):
        assert body(serializer.write({'p:a': 1})) == '<o class="object"><p:a type="number">1</p:a></o>'

    def test_unbound_attribute_prefix(self, serializer):
        with pytest.raises(ConversionError, match="Unbound namespace prefix"):
            serializer.write({'@p:x': '1'})

    def test_lenient_attribute_prefix(self):
        serializer = XmlJsonSerializer(namespace_lenient=True)
        assert body(serializer.write({'@p:x': '1'})) == '<o class="object" p:x="1"/>'

    def test_leniency_not_sticky(self, serializer):
        serializer.write({'p:a': 1})
        with pytest.raises(ConversionError):
            serializer.write({'@p:x': '1'})


class TestOutput:
    """Encoding, files and nesting limits."""

    def test_encoding(self, serializer):
        xml = serializer.write({'a': 'è€'}, encoding='ISO-8859-1')
        assert xml == (
            '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
            '<o class="object"><a type="string">è&#8364;</a></o>\n'
        )

    def test_unknown_encoding(self, serializer):
        with pytest.raises(UnsupportedEncodingError):
            serializer.write({'a': 1}, encoding='no-such-codec')

    def test_filename(self, serializer, tmp_path):
        target = tmp_path / 'out.xml'
        xml = serializer.write({'a': 'è'}, filename=str(target))
        assert target.read_bytes() == xml.encode('UTF-8')

    def test_unwritable_filename(self, serializer, tmp_path):
        with pytest.raises(ConversionError, match="Cannot write"):
            serializer.write({'a': 1}, filename=str(tmp_path / 'missing' / 'out.xml'))

    def test_depth_limit(self):
        serializer = XmlJsonSerializer(max_depth=2)
        assert serializer.write({'a': {'b': 1}})
        with pytest.raises(DepthLimitError):
            serializer.write({'a': {'b': {'c': 1}}})
