# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL and query-string helpers used when composing request URLs and bodies."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit


def is_absolute_url(value: str | None) -> bool:
    """Return True when the value carries both a scheme and a host."""
    if not value:
        return False
    parts = urlsplit(str(value))
    return bool(parts.scheme and parts.netloc)


def join_url(base_uri: str, path: str) -> str:
    """
    Append a relative path to a base URI.

    Unlike `urljoin()`, the base path is always kept:
      http://host/api + /people/1 -> http://host/api/people/1
    """
    base = str(base_uri).rstrip("/")
    raw_path = str(path or "")
    if not raw_path:
        return base
    if raw_path.startswith(("?", "#")):
        return base + raw_path
    return f"{base}/{raw_path.lstrip('/')}"


def _query_pairs(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((str(key), _query_value(item)) for item in value if item is not None)
        else:
            pairs.append((str(key), _query_value(value)))
    return pairs


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def encode_query(params: Mapping[str, Any] | None) -> str:
    """
    Encode params as `application/x-www-form-urlencoded` text.

    None values are skipped, list/tuple values repeat the key.
    """
    if not params:
        return ""
    return urlencode(_query_pairs(params))


def decode_query(query: str) -> dict[str, str | list[str]]:
    """Inverse of `encode_query()`; repeated keys collapse into lists."""
    decoded: dict[str, str | list[str]] = {}
    for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
        if key in decoded:
            existing = decoded[key]
            if isinstance(existing, list):
                existing.append(value)
            else:
                decoded[key] = [existing, value]
        else:
            decoded[key] = value
    return decoded


def append_query(url: str, params: Mapping[str, Any] | None) -> str:
    """Append encoded params to a URL, respecting an existing query and fragment."""
    query = encode_query(params)
    if not query:
        return url
    base, hash_mark, fragment = url.partition("#")
    separator = "&" if "?" in base else "?"
    if base.endswith(("?", "&")):
        separator = ""
    return f"{base}{separator}{query}{hash_mark}{fragment}"


__all__ = ["append_query", "decode_query", "encode_query", "is_absolute_url", "join_url"]
