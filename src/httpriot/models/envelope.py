# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response envelope delivered once per completed request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import DecodeError, NetworkError
from ..http.models import HttpResponse


@dataclass
class Envelope:
    """
    Outcome of one request.

    - `results`: decoded body (or its configured results member), None on error.
    - `response`: transport response; None only when no request reached the wire.
    - `error`: NetworkError or DecodeError, None on success.
    - `object`: the caller's pass-through value.

    A non-2xx status is not an error: inspect `status_code` or `ok`.
    """

    results: Any = None
    response: HttpResponse | None = None
    error: Exception | None = None
    object: Any = None
    payload: Any = None

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None

    @property
    def ok(self) -> bool:
        return self.error is None and self.response is not None and self.response.is_success

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": self.results,
            "payload": self.payload,
            "response": self.response.to_dict() if self.response is not None else None,
            "error": _error_to_dict(self.error),
            "object": self.object,
        }


def _error_to_dict(error: Exception | None) -> dict[str, Any] | None:
    if error is None:
        return None
    data: dict[str, Any] = {"type": type(error).__name__, "message": str(error)}
    if isinstance(error, NetworkError):
        data.update(category=error.category.value, reason=error.reason, error_type=error.error_type)
    elif isinstance(error, DecodeError):
        data["format"] = error.format
    return data
