# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by the XML/JSON conversion engine.

All errors are raised synchronously to the caller: a conversion is one-shot
and deterministic, so there is no fallback and no retry.

Hierarchy:
    XmlJsonException
        MalformedInputError - invalid XML syntax, invalid literal JSON text
        ConversionError - content that cannot be coerced to its hinted type,
            malformed function parameters, invalid names, I/O failures
            while writing
            UnsupportedEncodingError - unknown output character encoding
            DepthLimitError - nesting deeper than the configured max_depth
"""

from __future__ import annotations


class XmlJsonException(Exception):
    """Base class for every error raised by genro_xmljson."""
    pass


class MalformedInputError(XmlJsonException, ValueError):
    """Input text is not well-formed XML or not a valid JSON literal."""
    pass


class ConversionError(XmlJsonException, ValueError):
    """Content cannot be converted to or from its XML form.

    Example:
        - ``<n type="number">abc</n>``
        - ``<f type="function" params="a,,1b">...</f>``
    """
    pass


class UnsupportedEncodingError(ConversionError, LookupError):
    """The character encoding requested on write is unknown."""
    pass


class DepthLimitError(ConversionError):
    """Document or value is nested deeper than the configured limit."""

    def __init__(self, max_depth: int):
        super().__init__(f"Nesting deeper than max_depth={max_depth}")
        self.max_depth = max_depth
