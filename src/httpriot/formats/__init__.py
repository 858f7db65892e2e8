# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Payload formatters keyed by DataFormat."""

from __future__ import annotations

from .base import DataFormat, Formatter
from .json_format import JSONFormatter
from .xml_format import XMLFormatter

_FORMATTERS: dict[DataFormat, Formatter] = {
    DataFormat.JSON: JSONFormatter(),
    DataFormat.XML: XMLFormatter(),
}


def coerce_format(value: DataFormat | str) -> DataFormat:
    """Resolve a DataFormat from an enum member or a case-insensitive name."""
    if isinstance(value, DataFormat):
        return value
    try:
        return DataFormat(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unsupported data format: {value!r}") from None


def get_formatter(value: DataFormat | str) -> Formatter:
    return _FORMATTERS[coerce_format(value)]


__all__ = [
    "DataFormat",
    "Formatter",
    "JSONFormatter",
    "XMLFormatter",
    "coerce_format",
    "get_formatter",
]
