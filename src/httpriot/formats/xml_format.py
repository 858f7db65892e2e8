# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
XML formatter.

Documents are converted to plain Python values so callers handle JSON and XML
responses the same way:

    <person id="1"><name>Bob</name><tag>a</tag><tag>b</tag></person>
    -> {"person": {"@id": "1", "name": "Bob", "tag": ["a", "b"]}}

Attributes are prefixed with `@`, repeated child elements become lists, and
text next to attributes or children is kept under `#text`. Elements with no
attributes, children or text decode to None.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any

from ..errors import DecodeError
from .base import DataFormat

ATTRIBUTE_PREFIX = "@"
TEXT_KEY = "#text"


def _element_to_value(element: ET.Element) -> Any:
    text = (element.text or "").strip()
    children = list(element)
    if not element.attrib and not children:
        return text or None

    value: dict[str, Any] = {f"{ATTRIBUTE_PREFIX}{key}": item for key, item in element.attrib.items()}
    for child in children:
        child_value = _element_to_value(child)
        if child.tag in value:
            existing = value[child.tag]
            if isinstance(existing, list):
                existing.append(child_value)
            else:
                value[child.tag] = [existing, child_value]
        else:
            value[child.tag] = child_value
    if text:
        value[TEXT_KEY] = text
    return value


def _value_to_element(tag: str, value: Any) -> list[ET.Element]:
    if isinstance(value, (list, tuple)):
        elements: list[ET.Element] = []
        for item in value:
            elements.extend(_value_to_element(tag, item))
        return elements

    element = ET.Element(tag)
    if isinstance(value, Mapping):
        for key, item in value.items():
            key = str(key)
            if key == TEXT_KEY:
                element.text = _text(item)
            elif key.startswith(ATTRIBUTE_PREFIX):
                element.set(key[len(ATTRIBUTE_PREFIX):], _text(item))
            else:
                element.extend(_value_to_element(key, item))
    elif value is not None:
        element.text = _text(value)
    return [element]


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


class XMLFormatter:
    format = DataFormat.XML
    mime_type = "application/xml"
    file_extension = "xml"

    def decode(self, data: bytes | str) -> Any:
        """Parse a document; unknown encodings and runaway nesting raise DecodeError too."""
        try:
            root = ET.fromstring(data)
            return {root.tag: _element_to_value(root)}
        except (ET.ParseError, ValueError, LookupError, RecursionError) as exc:
            raw = data if isinstance(data, bytes) else data.encode("utf-8")
            raise DecodeError(f"Invalid XML response body: {exc}", body=raw, format=self.format.value) from exc

    def encode(self, value: Any) -> str:
        """Serialize a single-rooted mapping produced by `decode()` (or shaped like it)."""
        if not isinstance(value, Mapping) or len(value) != 1:
            raise ValueError("XML documents need a mapping with exactly one root element")
        (tag, body), = value.items()
        elements = _value_to_element(str(tag), body)
        if len(elements) != 1:
            raise ValueError("XML root element cannot be a list")
        return ET.tostring(elements[0], encoding="unicode")
