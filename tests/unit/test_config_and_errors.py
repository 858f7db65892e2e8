# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl
import sys

import httpx

from httpriot import config
from httpriot.config import DEFAULT_USER_AGENT
from httpriot.errors import (
    DecodeError,
    ErrorCategory,
    HTTPRiotError,
    NetworkError,
    categorize_exception,
    error_category_to_reason,
)
from httpriot.log import LOGGER_NAME, resolve_level, setup_logging


def test_http_settings_defaults():
    settings = config.HttpSettings()
    assert settings.timeout == 30.0
    assert settings.max_workers == 3
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("HTTPRIOT_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("HTTPRIOT_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("HTTPRIOT_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("HTTPRIOT_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("HTTPRIOT_HTTP_MAX_BODY_BYTES", "1024")
    monkeypatch.setenv("HTTPRIOT_MAX_WORKERS", "8")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False
    assert settings.max_body_bytes == 1024
    assert settings.max_workers == 8


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("HTTPRIOT_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("HTTPRIOT_HTTP_MAX_BODY_BYTES", "-1")
    monkeypatch.setenv("HTTPRIOT_MAX_WORKERS", "zero")

    settings = config.load_http_settings()

    assert settings.timeout == config.HttpSettings.timeout
    assert settings.max_body_bytes == config.HttpSettings.max_body_bytes
    assert settings.max_workers == config.HttpSettings.max_workers


def test_http_settings_non_positive_values_fall_back(monkeypatch):
    monkeypatch.setenv("HTTPRIOT_HTTP_TIMEOUT", "0")
    monkeypatch.setenv("HTTPRIOT_MAX_WORKERS", "0")
    settings = config.load_http_settings()
    assert settings.timeout == 30.0
    assert settings.max_workers == 3


def test_http_settings_redirects_truthy_variants(monkeypatch):
    monkeypatch.setenv("HTTPRIOT_HTTP_REDIRECTS", "on")
    assert config.load_http_settings().allow_redirects is True
    monkeypatch.setenv("HTTPRIOT_HTTP_REDIRECTS", "no")
    assert config.load_http_settings().allow_redirects is False


def test_load_http_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("HTTPRIOT_HTTP_TIMEOUT", "7.7")
    assert config.load_http_settings().timeout == 7.7
    monkeypatch.setenv("HTTPRIOT_HTTP_TIMEOUT", "8.8")
    assert config.load_http_settings().timeout == 8.8


def test_categorize_httpx_exceptions():
    assert categorize_exception(httpx.ReadTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ConnectionResetError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ValueError("odd")) is ErrorCategory.UNKNOWN_ERROR


def test_categorize_follows_cause_chain():
    def raise_wrapped(inner: BaseException) -> BaseException:
        try:
            try:
                raise inner
            except type(inner) as caught:
                raise httpx.ConnectError("wrapped") from caught
        except httpx.ConnectError as exc:
            return exc

    assert categorize_exception(raise_wrapped(socket.gaierror(-2, "Name or service not known"))) is ErrorCategory.DNS_ERROR
    assert categorize_exception(raise_wrapped(ssl.SSLError("bad cert"))) is ErrorCategory.SSL_ERROR


def test_error_types_share_base_and_carry_details():
    network = NetworkError("refused", category=ErrorCategory.CONNECTION_ERROR, error_type="ConnectError", url="http://x")
    decode = DecodeError("bad json", body=b"{", format="json")

    assert isinstance(network, HTTPRiotError)
    assert isinstance(decode, HTTPRiotError)
    assert network.reason == "Network connectivity issue"
    assert decode.body == b"{"
    assert error_category_to_reason(None) == ""
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "Request timed out"


def test_setup_logging_configures_package_logger_once(monkeypatch):
    monkeypatch.delenv("HTTPRIOT_LOG_LEVEL", raising=False)
    logger = logging.getLogger(LOGGER_NAME)
    before = list(logger.handlers)
    root_handlers = list(logging.getLogger().handlers)
    try:
        assert setup_logging("debug") is logger
        assert logger.level == logging.DEBUG
        setup_logging()
        assert logger.level == logging.WARNING
        assert len([h for h in logger.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr]) == 1
        assert logging.getLogger().handlers == root_handlers
    finally:
        for handler in logger.handlers[:]:
            if handler not in before:
                logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)


def test_resolve_level_reads_env_and_falls_back(monkeypatch):
    monkeypatch.setenv("HTTPRIOT_LOG_LEVEL", "info")
    assert resolve_level() == logging.INFO
    assert resolve_level("error") == logging.ERROR
    assert resolve_level("chatty") == logging.WARNING
