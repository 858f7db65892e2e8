# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTPRiot CLI: send one request and print the decoded response."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import HttpSettings, load_http_settings
from ..errors import ConfigurationError
from ..formats import DataFormat
from ..http import create_default_http_client
from ..log import setup_logging
from ..models import Envelope, RequestMethod
from ..rest import RequestExecutor, RestClient, RestConfig

CLI_TEXT_TRUNCATION_BYTES = 4096


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="httpriot", description="Send a REST request and print the decoded response")
    parser.add_argument("method", type=str.upper, choices=[m.value for m in RequestMethod], help="HTTP method")
    parser.add_argument("path", help="Absolute URL, or a path relative to --base-uri")
    parser.add_argument("--base-uri", help="Prefix for relative paths")
    parser.add_argument("-H", "--header", action="append", default=[], metavar="NAME:VALUE", help="Request header (repeatable)")
    parser.add_argument("-p", "--param", action="append", default=[], metavar="KEY=VALUE", help="Query/form parameter (repeatable)")
    parser.add_argument("--body", help="Raw body for POST/PUT; overrides --param")
    parser.add_argument("--format", choices=[f.value for f in DataFormat], default=DataFormat.JSON.value, help="Response format")
    parser.add_argument("--user", help="Basic auth username")
    parser.add_argument("--password", default="", help="Basic auth password")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("--results-key", default="results", help="Member unwrapped from mapping responses ('' disables)")
    parser.add_argument("--json", action="store_true", help="Print the full envelope as JSON")
    parser.add_argument("--ignore-ssl-errors", action="store_true", help="Skip TLS verification")
    parser.add_argument("--log-level", help="Logging level (default: HTTPRIOT_LOG_LEVEL or WARNING)")
    return parser


def _parse_pairs(values: list[str], separator: str, flag: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition(separator)
        if not sep or not key.strip():
            raise ConfigurationError(f"{flag} expects KEY{separator}VALUE, got {raw!r}")
        pairs[key.strip()] = value.strip() if separator == ":" else value
    return pairs


def _truncate_for_cli(value: Any, *, max_bytes: int) -> Any:
    if isinstance(value, str):
        raw = value.encode("utf-8")
        if len(raw) <= max_bytes:
            return value
        return raw[:max_bytes].decode("utf-8", errors="ignore") + "...[truncated]"
    if isinstance(value, dict):
        return {k: _truncate_for_cli(v, max_bytes=max_bytes) for k, v in value.items()}
    if isinstance(value, list):
        return [_truncate_for_cli(v, max_bytes=max_bytes) for v in value]
    return value


def _print_json(data: Any) -> None:
    json.dump(_truncate_for_cli(data, max_bytes=CLI_TEXT_TRUNCATION_BYTES), sys.stdout, indent=2, sort_keys=True, default=str)
    sys.stdout.write("\n")


def _pretty_print(envelope: Envelope) -> None:
    status = envelope.status_code if envelope.status_code is not None else "-"
    print(f"[HTTPRiot] Status: {status}")
    if envelope.error is not None:
        reason = getattr(envelope.error, "reason", "")
        suffix = f" ({reason})" if reason else ""
        print(f"Error: {envelope.error}{suffix}", file=sys.stderr)
        return
    if envelope.results is not None:
        _print_json(envelope.results)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: HttpSettings = load_http_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    try:
        headers = _parse_pairs(args.header, ":", "--header")
        params = _parse_pairs(args.param, "=", "--param")
    except ConfigurationError as exc:
        parser.error(str(exc))

    config = RestConfig(base_uri=args.base_uri, format=args.format, results_key=args.results_key or None)
    if args.user:
        config.set_basic_auth(args.user, args.password)

    options: dict[str, Any] = {"headers": headers, "params": params}
    if args.body is not None:
        options["body"] = args.body

    http_client = create_default_http_client(settings)
    try:
        with RequestExecutor(http_client, settings=settings, max_workers=1) as executor:
            client = RestClient(config, executor)
            try:
                operation = client.request(args.method, args.path, options, timeout=args.timeout)
            except ConfigurationError as exc:
                print(f"Configuration error: {exc}", file=sys.stderr)
                return 2
            envelope = operation.result()
    finally:
        http_client.close()

    if args.json:
        _print_json(envelope.to_dict())
    else:
        _pretty_print(envelope)

    return 0 if envelope.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
