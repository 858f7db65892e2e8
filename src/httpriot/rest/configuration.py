# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-model request defaults."""

from __future__ import annotations

import base64
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from ..formats import DataFormat, Formatter, coerce_format, get_formatter


@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str

    @property
    def authorization_header(self) -> str:
        token = base64.b64encode(f"{self.username}:{self.password}".encode()).decode("ascii")
        return f"Basic {token}"

    def to_dict(self) -> dict[str, str]:
        return {"username": self.username, "password": self.password}


@dataclass
class RestConfig:
    """
    Defaults applied to every request sent with this configuration.

    Setters replace the stored value wholesale; merging with per-request
    options happens when a request is built. Nothing is validated here: an
    unusable base URI surfaces as a ConfigurationError when a request is built.

    A configuration belongs to one client or model class. Use `copy()` to start
    another model from the same defaults.
    """

    base_uri: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    basic_auth: BasicAuth | None = None
    default_params: dict[str, Any] = field(default_factory=dict)
    format: DataFormat = DataFormat.JSON
    results_key: str | None = "results"

    def __post_init__(self) -> None:
        self.set_base_uri(self.base_uri)
        self.set_headers(self.headers)
        self.set_default_params(self.default_params)
        self.set_format(self.format)
        if isinstance(self.basic_auth, Mapping):
            self.basic_auth = BasicAuth(str(self.basic_auth["username"]), str(self.basic_auth["password"]))
        elif isinstance(self.basic_auth, tuple):
            username, password = self.basic_auth
            self.basic_auth = BasicAuth(str(username), str(password))

    def set_base_uri(self, uri: Any) -> None:
        self.base_uri = str(uri) if uri is not None else None

    def set_headers(self, headers: Mapping[str, str] | None) -> None:
        self.headers = dict(headers or {})

    def set_basic_auth(self, username: str, password: str) -> None:
        self.basic_auth = BasicAuth(username, password)

    def clear_basic_auth(self) -> None:
        self.basic_auth = None

    def set_default_params(self, params: Mapping[str, Any] | None) -> None:
        self.default_params = dict(params or {})

    def set_format(self, value: DataFormat | str) -> None:
        self.format = coerce_format(value)

    @property
    def formatter(self) -> Formatter:
        return get_formatter(self.format)

    @property
    def authorization_header(self) -> str | None:
        return self.basic_auth.authorization_header if self.basic_auth is not None else None

    def copy(self) -> RestConfig:
        return replace(self, headers=dict(self.headers), default_params=dict(self.default_params))


__all__ = ["BasicAuth", "RestConfig"]
