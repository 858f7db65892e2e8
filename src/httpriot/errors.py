# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception types surfaced through response envelopes."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    BODY_TOO_LARGE = "BODY_TOO_LARGE"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class HTTPRiotError(Exception):
    """Base class for every error raised or delivered by HTTPRiot."""


class ConfigurationError(HTTPRiotError):
    """A request could not be built from the model configuration and options."""


class NetworkError(HTTPRiotError):
    """The transport failed before a complete response was received."""

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        error_type: str | None = None,
        url: str | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.error_type = error_type
        self.url = url

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)


class DecodeError(HTTPRiotError):
    """The response body could not be parsed with the configured format."""

    def __init__(self, message: str, *, body: bytes = b"", format: str | None = None):
        super().__init__(message)
        self.body = body
        self.format = format


class CancellationError(HTTPRiotError):
    """The operation was cancelled; its result will never be delivered."""


def _exception_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx wraps resolver and TLS failures in ConnectError, so the cause chain is
    inspected before falling back to the outer exception type.
    """
    chain = _exception_chain(exc)

    if any(isinstance(item, (httpx.TimeoutException, socket.timeout, TimeoutError)) for item in chain):
        return ErrorCategory.TIMEOUT

    if any(isinstance(item, (socket.gaierror, socket.herror)) for item in chain):
        return ErrorCategory.DNS_ERROR

    if any(isinstance(item, (ssl_module.SSLError, ssl_module.CertificateError)) for item in chain):
        return ErrorCategory.SSL_ERROR

    if isinstance(
        exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)
    ):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Request timed out",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.BODY_TOO_LARGE: "Response body exceeded the configured size limit",
        ErrorCategory.UNKNOWN_ERROR: "Network error during request",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "CancellationError",
    "ConfigurationError",
    "DecodeError",
    "ErrorCategory",
    "HTTPRiotError",
    "NetworkError",
    "categorize_exception",
    "error_category_to_reason",
]
