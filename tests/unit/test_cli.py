# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from httpriot.cli import main as cli_main
from httpriot.http.adapters import StubHttpClient
from httpriot.http.models import HttpResponse


@pytest.fixture
def stub(monkeypatch):
    client = StubHttpClient()
    monkeypatch.setattr(cli_main, "create_default_http_client", lambda settings: client)
    return client


def test_cli_get_prints_envelope_json(stub, capsys):
    stub.add("http://api.test/people/1?page=2", HttpResponse(ok=True, status_code=200, content=b'{"results": {"id": 1}}'))

    exit_code = cli_main.main(["get", "/people/1", "--base-uri", "http://api.test", "-p", "page=2", "-H", "X-Trace: abc", "--json"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["results"] == {"id": 1}
    assert payload["error"] is None
    assert payload["response"]["status_code"] == 200
    assert stub.requests[0].headers["X-Trace"] == "abc"
    assert stub.closed is True


def test_cli_post_body_and_basic_auth(stub, capsys):
    stub.add("http://api.test/people", HttpResponse(ok=True, status_code=201, content=b'{"id": 2}'))

    exit_code = cli_main.main(["POST", "http://api.test/people", "--body", '{"name":"Bob"}', "--user", "user", "--password", "pass"])

    assert exit_code == 0
    request = stub.requests[0]
    assert request.body == b'{"name":"Bob"}'
    assert request.headers["Authorization"] == "Basic dXNlcjpwYXNz"
    out = capsys.readouterr().out
    assert "Status: 201" in out
    assert '"id": 2' in out


def test_cli_reports_failures_with_nonzero_exit(stub, capsys):
    exit_code = cli_main.main(["GET", "http://api.test/missing"])
    assert exit_code == 1
    assert "Error:" in capsys.readouterr().err


def test_cli_relative_path_without_base_uri(stub, capsys):
    assert cli_main.main(["GET", "/people"]) == 2
    assert "Configuration error" in capsys.readouterr().err
    assert stub.requests == []


def test_cli_rejects_malformed_pairs(stub):
    with pytest.raises(SystemExit) as info:
        cli_main.main(["GET", "http://api.test/x", "-p", "novalue"])
    assert info.value.code == 2
