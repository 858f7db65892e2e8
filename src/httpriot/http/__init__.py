# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client, failed_response
from .headers import header_value, merge_headers, normalize_headers
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .url import append_query, decode_query, encode_query, is_absolute_url, join_url

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "append_query",
    "create_default_http_client",
    "decode_query",
    "encode_query",
    "failed_response",
    "header_value",
    "is_absolute_url",
    "join_url",
    "merge_headers",
    "normalize_headers",
]
