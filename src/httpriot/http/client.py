# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Transport contract used by request operations.

An HttpClient is shared by every worker thread of an executor, so
implementations must tolerate concurrent `request()` calls. Besides sending
the request, a transport is expected to:

- stop reading the body once `request.cancel_event` is set, and mark the
  response with `meta["aborted"]`;
- report transport failures as `HttpResponse(ok=False)` carrying
  `meta["error_category"]` instead of raising (see `failed_response`);
- set `meta["body_truncated"]` when it gave up on an oversized body.
"""

from __future__ import annotations

from typing import Protocol

from ..config import HttpSettings, load_http_settings
from ..errors import categorize_exception
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None: ...


def failed_response(request: HttpRequest, exc: BaseException) -> HttpResponse:
    """Describe a transport exception as an unsuccessful response."""
    return HttpResponse(
        ok=False,
        url=request.url,
        error_message=str(exc) or type(exc).__name__,
        error_type=type(exc).__name__,
        meta={"error_category": categorize_exception(exc).value},
    )


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """httpx-backed transport configured from `settings` (or the environment)."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())


__all__ = ["HttpClient", "create_default_http_client", "failed_response"]
