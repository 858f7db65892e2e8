# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSON formatter."""

from __future__ import annotations

import json
from typing import Any

from ..errors import DecodeError
from .base import DataFormat


class JSONFormatter:
    format = DataFormat.JSON
    mime_type = "application/json"
    file_extension = "json"

    def decode(self, data: bytes | str) -> Any:
        """Parse a JSON document; bytes may be UTF-8, UTF-16 or UTF-32."""
        raw = data if isinstance(data, bytes) else data.encode("utf-8")
        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as exc:
            # ValueError covers UnicodeDecodeError and JSONDecodeError.
            raise DecodeError(f"Invalid JSON response body: {exc}", body=raw, format=self.format.value) from exc

    def encode(self, value: Any) -> str:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
