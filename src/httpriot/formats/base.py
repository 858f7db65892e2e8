# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Payload format identifiers and the formatter interface."""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol


class DataFormat(str, Enum):
    JSON = "json"
    XML = "xml"


class Formatter(Protocol):
    """Encodes and decodes request/response payloads for one DataFormat."""

    format: DataFormat
    mime_type: str
    file_extension: str

    def decode(self, data: bytes | str) -> Any: ...

    def encode(self, value: Any) -> str: ...
