# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for namespace scopes and configuration."""

import pytest

from genro_xmljson import NamespaceScopes, XmlJsonConfig


class TestNamespaceScopes:
    """Root and per element tables."""

    def test_empty(self):
        scopes = NamespaceScopes()
        assert not scopes
        assert scopes.root_namespaces() == {}
        assert scopes.element_namespaces('item') == {}

    def test_add_root(self):
        scopes = NamespaceScopes().add('ns', 'http://x').add('other', 'http://y')
        assert scopes.root_namespaces() == {'ns': 'http://x', 'other': 'http://y'}

    def test_add_is_copy_on_write(self):
        original = NamespaceScopes()
        changed = original.add('ns', 'http://x')
        assert not original
        assert changed

    def test_none_prefix_is_default_namespace(self):
        scopes = NamespaceScopes().add(None, 'http://d')
        assert scopes.root_namespaces() == {'': 'http://d'}

    def test_blank_uri_ignored(self):
        scopes = NamespaceScopes().add('ns', '  ')
        assert not scopes
        assert NamespaceScopes().set('ns', None) == NamespaceScopes()

    def test_values_trimmed(self):
        scopes = NamespaceScopes().add(' ns ', ' http://x ')
        assert scopes.root_namespaces() == {'ns': 'http://x'}

    def test_add_per_element(self):
        scopes = NamespaceScopes().add('p', 'http://p', element_name='item')
        assert scopes.root_namespaces() == {}
        assert scopes.element_namespaces('item') == {'p': 'http://p'}
        assert scopes.element_namespaces('other') == {}

    def test_set_replaces_scope(self):
        scopes = NamespaceScopes().add('a', 'http://a').add('b', 'http://b')
        scopes = scopes.set('c', 'http://c')
        assert scopes.root_namespaces() == {'c': 'http://c'}

    def test_set_per_element_leaves_root(self):
        scopes = NamespaceScopes().add('r', 'http://r')
        scopes = scopes.add('a', 'http://a', 'item').set('b', 'http://b', 'item')
        assert scopes.root_namespaces() == {'r': 'http://r'}
        assert scopes.element_namespaces('item') == {'b': 'http://b'}

    def test_remove(self):
        scopes = NamespaceScopes().add('a', 'http://a').add('b', 'http://b')
        assert scopes.remove('a').root_namespaces() == {'b': 'http://b'}

    def test_remove_last_element_prefix_drops_table(self):
        scopes = NamespaceScopes().add('a', 'http://a', 'item').remove('a', 'item')
        assert not scopes

    def test_remove_unknown_is_noop(self):
        scopes = NamespaceScopes().add('a', 'http://a')
        assert scopes.remove('zz', 'missing') == scopes

    def test_clear(self):
        scopes = NamespaceScopes().add('a', 'http://a').add('b', 'http://b', 'item')
        assert scopes.clear().root_namespaces() == {}
        assert scopes.clear().element_namespaces('item') == {'b': 'http://b'}
        assert scopes.clear('item').root_namespaces() == {'a': 'http://a'}
        assert not scopes.clear_all()


class TestConfig:
    """Immutable converter options."""

    def test_defaults(self):
        config = XmlJsonConfig()
        assert config.object_name == 'o'
        assert config.array_name == 'a'
        assert config.element_name == 'e'
        assert config.root_name is None
        assert config.type_hints_enabled is True
        assert config.expandable_properties == frozenset()
        assert not config.is_lenient

    def test_blank_names_reset(self):
        config = XmlJsonConfig(object_name='', array_name='  ', element_name=None, root_name=' ')
        assert (config.object_name, config.array_name, config.element_name) == ('o', 'a', 'e')
        assert config.root_name is None

    def test_expandable_properties_normalized(self):
        config = XmlJsonConfig(expandable_properties=['item', 'row'])
        assert config.expandable_properties == frozenset({'item', 'row'})

    def test_frozen(self):
        config = XmlJsonConfig()
        with pytest.raises(AttributeError):
            config.object_name = 'x'

    def test_invalid_max_depth(self):
        with pytest.raises(ValueError):
            XmlJsonConfig(max_depth=0)

    def test_namespace_methods_return_new_config(self):
        config = XmlJsonConfig()
        changed = config.add_namespace('ns', 'http://x')
        assert config.namespaces.root_namespaces() == {}
        assert changed.namespaces.root_namespaces() == {'ns': 'http://x'}
        assert changed.remove_namespace('ns').namespaces.root_namespaces() == {}
        assert not changed.clear_all_namespaces().namespaces

    def test_lenient_from_namespaces(self):
        assert XmlJsonConfig().add_namespace('ns', 'http://x').is_lenient
        assert XmlJsonConfig().set_namespace('p', 'http://p', 'item').is_lenient

    def test_lenient_from_prefixed_tag_names(self):
        assert XmlJsonConfig(root_name='ns:root').is_lenient
        assert XmlJsonConfig(element_name='ns:item').is_lenient

    def test_lenient_explicit(self):
        assert XmlJsonConfig(namespace_lenient=True).is_lenient

    def test_with_options(self):
        config = XmlJsonConfig().with_options(trim_spaces=True)
        assert config.trim_spaces is True
        assert XmlJsonConfig().with_expandable_properties(['x']).expandable_properties == {'x'}
