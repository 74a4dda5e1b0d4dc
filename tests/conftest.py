# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pytest configuration and fixtures."""

import pytest

from genro_xmljson import XmlJsonSerializer


@pytest.fixture
def serializer():
    """Serializer with default options (type hints enabled)."""
    return XmlJsonSerializer()


@pytest.fixture
def plain_serializer():
    """Serializer writing XML without type/class hints."""
    return XmlJsonSerializer(type_hints_enabled=False)

