# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading

import httpx

from httpriot.config import HttpSettings
from httpriot.http.adapters import StubHttpClient
from httpriot.http.client import failed_response
from httpriot.http.headers import header_value, merge_headers, normalize_headers
from httpriot.http.httpx_client import HttpxClient
from httpriot.http.models import HttpRequest, HttpResponse
from httpriot.http.url import append_query, decode_query, encode_query, is_absolute_url, join_url


class FakeStreamClient:
    """Stands in for httpx.Client; yields the configured chunks."""

    def __init__(self, chunks=(b"",), status_code=200, on_chunk=None, error=None):
        self.chunks = list(chunks)
        self.status_code = status_code
        self.on_chunk = on_chunk
        self.error = error
        self.calls = []

    def stream(self, method, url, headers=None, content=None, timeout=None, follow_redirects=None):
        self.calls.append(
            {"method": method, "url": url, "headers": headers, "content": content, "timeout": timeout, "follow_redirects": follow_redirects}
        )
        if self.error is not None:
            raise self.error
        fake = self

        class Resp:
            status_code = fake.status_code
            headers = httpx.Headers({"Content-Type": "application/json"})
            encoding = "utf-8"

            def __init__(self):
                self.url = httpx.URL(url)

            def iter_bytes(self):
                for index, chunk in enumerate(fake.chunks):
                    if fake.on_chunk is not None:
                        fake.on_chunk(index)
                    yield chunk

        class _Ctx:
            def __enter__(self):
                return Resp()

            def __exit__(self, exc_type, exc, tb):  # noqa: ARG002
                return None

        return _Ctx()

    def close(self):
        self.closed = True


def test_httpx_client_builds_underlying_client_from_settings(monkeypatch):
    created = {}

    class RecordingClient(FakeStreamClient):
        def __init__(self, follow_redirects, timeout, verify):
            super().__init__(chunks=[b'{"ok":', b" true}"], status_code=201)
            created.update(follow_redirects=follow_redirects, timeout=timeout, verify=verify)

    monkeypatch.setattr(httpx, "Client", RecordingClient)
    client = HttpxClient(HttpSettings(user_agent="UA/1.0", timeout=12.0, verify_ssl=False))
    resp = client.request(HttpRequest(url="http://example/path", method="POST", headers={"X": "1"}, body=b"payload", allow_redirects=False, timeout=1.2))

    assert created == {"follow_redirects": True, "timeout": 12.0, "verify": False}
    assert resp.ok is True
    assert resp.status_code == 201
    assert resp.content == b'{"ok": true}'
    assert resp.text == '{"ok": true}'
    assert resp.url == "http://example/path"
    call = client._client.calls[0]
    assert call["headers"]["User-Agent"] == "UA/1.0"
    assert call["headers"]["X"] == "1"
    assert call["content"] == b"payload"
    assert call["timeout"] == 1.2
    assert call["follow_redirects"] is False


def test_httpx_client_keeps_caller_user_agent_and_default_timeout():
    fake = FakeStreamClient()
    client = HttpxClient(HttpSettings(timeout=9.0), client=fake)
    client.request(HttpRequest(url="http://example", headers={"user-agent": "Mine/2"}))
    assert fake.calls[0]["headers"] == {"user-agent": "Mine/2"}
    assert fake.calls[0]["timeout"] == 9.0


def test_httpx_client_truncates_large_bodies():
    fake = FakeStreamClient(chunks=[b"abc", b"def"])
    client = HttpxClient(HttpSettings(max_body_bytes=4), client=fake)
    resp = client.request(HttpRequest(url="http://example"))
    assert resp.content == b"abcd"
    assert resp.meta["body_truncated"] is True
    assert resp.meta["body_bytes_limit"] == 4


def test_httpx_client_stops_reading_when_cancelled():
    event = threading.Event()

    def cancel_after_first(index):
        if index == 1:
            event.set()

    fake = FakeStreamClient(chunks=[b"ab", b"cd", b"ef"], on_chunk=cancel_after_first)
    client = HttpxClient(HttpSettings(), client=fake)
    resp = client.request(HttpRequest(url="http://example", cancel_event=event))
    assert resp.content == b"ab"
    assert resp.meta["aborted"] is True


def test_httpx_client_converts_transport_errors():
    client = HttpxClient(HttpSettings(), client=FakeStreamClient(error=httpx.ConnectError("refused")))
    resp = client.request(HttpRequest(url="http://example"))
    assert resp.ok is False
    assert resp.status_code is None
    assert resp.error_message == "refused"
    assert resp.error_type == "ConnectError"
    assert resp.meta["error_category"] == "CONNECTION_ERROR"

    timeout_client = HttpxClient(HttpSettings(), client=FakeStreamClient(error=httpx.ReadTimeout("slow")))
    assert timeout_client.request(HttpRequest(url="http://example")).meta["error_category"] == "TIMEOUT"


def test_failed_response_describes_exception_without_message():
    resp = failed_response(HttpRequest(url="http://example/x"), ConnectionResetError())
    assert resp.ok is False
    assert resp.url == "http://example/x"
    assert resp.error_message == "ConnectionResetError"
    assert resp.meta == {"error_category": "CONNECTION_ERROR"}


def test_httpx_client_close_closes_underlying_client():
    fake = FakeStreamClient()
    HttpxClient(HttpSettings(), client=fake).close()
    assert fake.closed is True


def test_stub_http_client_records_requests():
    ok = HttpResponse(ok=True, status_code=200)
    stub = StubHttpClient({"http://a": ok})
    assert stub.request(HttpRequest(url="http://a")) is ok
    missing = stub.request(HttpRequest(url="http://b"))
    assert missing.ok is False
    assert [r.url for r in stub.requests] == ["http://a", "http://b"]

    fallback = HttpResponse(ok=True, status_code=204)
    assert StubHttpClient(default=fallback).request(HttpRequest(url="http://c")) is fallback


def test_http_response_success_flag():
    assert HttpResponse(ok=True, status_code=204).is_success is True
    assert HttpResponse(ok=True, status_code=404).is_success is False
    assert HttpResponse(ok=False).is_success is False


def test_header_helpers_are_case_insensitive():
    headers = {"Content-Type": "text/plain", "X-Empty": None}
    assert normalize_headers(headers) == {"content-type": "text/plain", "x-empty": ""}
    assert header_value(headers, "content-type") == "text/plain"
    assert header_value(httpx.Headers({"ETag": "abc"}), "etag") == "abc"
    assert header_value(None, "x", default="d") == "d"


def test_merge_headers_later_layers_win_key_by_key():
    merged = merge_headers({"Accept": "application/json", "X-A": "1"}, None, {"accept": "text/xml"}, {"X-B": "2"})
    assert merged == {"X-A": "1", "accept": "text/xml", "X-B": "2"}


def test_url_helpers():
    assert is_absolute_url("https://host/x") is True
    assert is_absolute_url("/people/1") is False
    assert is_absolute_url("//host/x") is False
    assert is_absolute_url(None) is False

    assert join_url("http://localhost:1234/api", "/people/1") == "http://localhost:1234/api/people/1"
    assert join_url("http://localhost:1234/api/", "people/1") == "http://localhost:1234/api/people/1"
    assert join_url("http://localhost:1234/api", "") == "http://localhost:1234/api"

    assert append_query("http://h/p", {"a": 1}) == "http://h/p?a=1"
    assert append_query("http://h/p?x=1", {"a": "b c"}) == "http://h/p?x=1&a=b+c"
    assert append_query("http://h/p#frag", {"a": 1}) == "http://h/p?a=1#frag"
    assert append_query("http://h/p", {}) == "http://h/p"


def test_query_encoding_round_trip():
    params = {"name": "Bob Smith", "filter": "a&b=c", "city": "Zürich", "tags": ["x", "y"]}
    encoded = encode_query(params)
    assert decode_query(encoded) == params
    assert decode_query("?" + encoded) == params


def test_encode_query_skips_none_and_formats_booleans():
    assert encode_query({"a": None, "b": True, "c": False, "d": 3}) == "b=true&c=false&d=3"
    assert encode_query(None) == ""
