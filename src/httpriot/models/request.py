# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request descriptor models."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..config import DEFAULT_TIMEOUT
from .envelope import Envelope

Callback = Callable[[Envelope], Any]
Body = bytes | str | Mapping[str, Any]


class RequestMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def sends_body(self) -> bool:
        return self in (RequestMethod.POST, RequestMethod.PUT)

    @classmethod
    def coerce(cls, value: RequestMethod | str) -> RequestMethod:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {value!r}") from None


@dataclass(frozen=True)
class RequestOptions:
    """
    Per-request overrides layered on top of the model configuration.

    - `headers` are merged over the configured headers.
    - `params` are merged over the configured default params and sent as the
      query string (GET/DELETE) or as a form body (POST/PUT).
    - `body` is only used by POST/PUT and, when present, replaces the params
      body entirely.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)
    body: Body | None = None

    @classmethod
    def from_value(cls, options: RequestOptions | Mapping[str, Any] | None) -> RequestOptions:
        """Accept a RequestOptions instance or a plain mapping; unknown keys are ignored."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if not isinstance(options, Mapping):
            raise TypeError(f"Request options must be a mapping, got {type(options).__name__}")
        return cls(
            headers=dict(options.get("headers") or {}),
            params=dict(options.get("params") or {}),
            body=options.get("body"),
        )


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to run one request; owned by a single operation."""

    method: RequestMethod
    path: str
    options: RequestOptions = field(default_factory=RequestOptions)
    timeout: float = DEFAULT_TIMEOUT
    callback: Callback | None = field(default=None, compare=False)
    object: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", RequestMethod.coerce(self.method))
        object.__setattr__(self, "options", RequestOptions.from_value(self.options))
