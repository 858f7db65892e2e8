# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for HTTPRiot."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .envelope import Envelope
from .request import Body, Callback, RequestDescriptor, RequestMethod, RequestOptions

__all__ = [
    "Body",
    "Callback",
    "Envelope",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "RequestDescriptor",
    "RequestMethod",
    "RequestOptions",
]
