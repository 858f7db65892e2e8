# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
HTTPRiot package entrypoint.

HTTPRiot sends REST-style requests (GET/POST/PUT/DELETE) on a shared worker
pool and delivers decoded JSON or XML responses as envelopes, either to a
callback or through the returned operation. Defaults such as the base URI,
headers, basic auth and params live in an explicit RestConfig held by a client
or a RestModel subclass. The transport is abstracted behind an injectable
HttpClient with an httpx-backed default.
"""

from .config import HttpSettings, load_http_settings
from .errors import (
    CancellationError,
    ConfigurationError,
    DecodeError,
    ErrorCategory,
    HTTPRiotError,
    NetworkError,
)
from .formats import DataFormat, get_formatter
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import Envelope, RequestDescriptor, RequestMethod, RequestOptions
from .rest import (
    BasicAuth,
    OperationState,
    RequestExecutor,
    RequestOperation,
    RestClient,
    RestConfig,
    RestModel,
    get_default_executor,
)
from .version import __version__

__all__ = [
    "BasicAuth",
    "CancellationError",
    "ConfigurationError",
    "DataFormat",
    "DecodeError",
    "Envelope",
    "ErrorCategory",
    "HTTPRiotError",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "NetworkError",
    "OperationState",
    "RequestDescriptor",
    "RequestExecutor",
    "RequestMethod",
    "RequestOperation",
    "RequestOptions",
    "RestClient",
    "RestConfig",
    "RestModel",
    "StubHttpClient",
    "create_default_http_client",
    "get_default_executor",
    "get_formatter",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
