# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Compose the wire-level HttpRequest from a descriptor and a model configuration."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..errors import ConfigurationError
from ..http.headers import merge_headers
from ..http.models import HttpRequest
from ..http.url import append_query, encode_query, is_absolute_url, join_url
from ..models.request import RequestDescriptor
from .configuration import RestConfig

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def compose_url(path: str, base_uri: str | None) -> str:
    """Use absolute paths as-is; append relative paths to the base URI."""
    if is_absolute_url(path):
        return str(path)
    if not base_uri:
        raise ConfigurationError(f"Cannot request relative path {path!r} without a base URI")
    if not is_absolute_url(base_uri):
        raise ConfigurationError(f"Base URI {base_uri!r} must include a scheme and host")
    return join_url(base_uri, path)


def merge_params(config: RestConfig, params: Mapping[str, Any] | None) -> dict[str, Any]:
    merged = dict(config.default_params)
    if params:
        merged.update(params)
    return merged


def encode_body(body: Any) -> tuple[bytes, bool]:
    """Return the encoded body and whether it is form-encoded."""
    if isinstance(body, Mapping):
        return encode_query(body).encode("utf-8"), True
    if isinstance(body, str):
        return body.encode("utf-8"), False
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body), False
    raise ConfigurationError(f"Request body must be a mapping, str or bytes, got {type(body).__name__}")


def build_http_request(
    descriptor: RequestDescriptor,
    config: RestConfig,
    *,
    allow_redirects: bool = True,
) -> HttpRequest:
    """
    Build the request sent for a descriptor.

    Header layers, later wins: format defaults (Accept, and Content-Type for raw
    bodies), configured headers, basic auth, form Content-Type, request headers.
    """
    options = descriptor.options
    method = descriptor.method
    url = compose_url(descriptor.path, config.base_uri)
    params = merge_params(config, options.params)
    mime_type = config.formatter.mime_type

    format_defaults: dict[str, str] = {"Accept": mime_type}
    encoding_headers: dict[str, str] = {}
    body: bytes | None = None

    if method.sends_body:
        if options.body is not None:
            body, form_encoded = encode_body(options.body)
            if form_encoded:
                encoding_headers["Content-Type"] = FORM_CONTENT_TYPE
            else:
                format_defaults["Content-Type"] = mime_type
        else:
            body = encode_query(params).encode("utf-8")
            encoding_headers["Content-Type"] = FORM_CONTENT_TYPE
    else:
        url = append_query(url, params)

    auth_headers: dict[str, str] = {}
    if config.authorization_header:
        auth_headers["Authorization"] = config.authorization_header

    headers = merge_headers(format_defaults, config.headers, auth_headers, encoding_headers, options.headers)

    return HttpRequest(
        url=url,
        method=method.value,
        headers=headers,
        body=body,
        timeout=descriptor.timeout,
        allow_redirects=allow_redirects,
    )


__all__ = ["FORM_CONTENT_TYPE", "build_http_request", "compose_url", "encode_body", "merge_params"]
