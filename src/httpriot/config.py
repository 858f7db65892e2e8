# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport-level settings for HTTPRiot."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"HTTPRiot/{__version__}"
DEFAULT_TIMEOUT = 30.0


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP client and worker pool defaults."""

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_body_bytes: int = 16 * 1024 * 1024
    max_workers: int = 3

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("HTTPRIOT_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_body_bytes = _int_env("HTTPRIOT_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        max_workers = _int_env("HTTPRIOT_MAX_WORKERS", cls.max_workers)
        if max_workers <= 0:
            max_workers = cls.max_workers
        return cls(
            timeout=timeout,
            user_agent=os.getenv("HTTPRIOT_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("HTTPRIOT_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("HTTPRIOT_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
            max_workers=max_workers,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
