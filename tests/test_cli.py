from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

import lcmap_client.cli as cli
from lcmap_client.client import LcmapClient
from lcmap_client.exceptions import LcmapTransportError
from lcmap_client.transport import HttpxTransport


class FakeTransport:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.requests: list[tuple[Any, str, Any]] = []

    def send(self, verb, url, request):
        self.requests.append((verb, url, request))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake(monkeypatch) -> FakeTransport:
    for name in ("LCMAP_ENDPOINT", "LCMAP_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    transport = FakeTransport({"body": json.dumps({"body": {"result": {"id": 1}}}), "status": 200})
    monkeypatch.setattr(cli, "LcmapClient", lambda **kwargs: LcmapClient(transport=transport, **kwargs))
    return transport


def test_cli_prints_result(fake, capsys) -> None:
    code = cli._main(
        [
            "get",
            "/objects/1",
            "--return",
            "result",
            "--header",
            "x-trace=abc",
            "--query",
            "fields=id",
            "--token",
            "tok",
        ]
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"id": 1}
    _, url, request = fake.requests[0]
    assert url == "http://localhost:1077/objects/1"
    assert request["headers"]["x-trace"] == "abc"
    assert request["headers"]["x-authtoken"] == "tok"
    assert request["params"] == {"fields": "id"}


def test_cli_endpoint_and_json_body(fake) -> None:
    assert cli._main(["post", "/objects", "--endpoint", "https://lcmap.example.com", "--json", '{"a": 1}']) == 0
    _, url, request = fake.requests[0]
    assert url == "https://lcmap.example.com/objects"
    assert request["json"] == {"a": 1}


def test_cli_reports_not_found_envelope(fake, capsys) -> None:
    fake.error = LcmapTransportError("missing", status_code=404)

    assert cli._main(["get", "/objects/9"]) == 2
    assert "Resource not found" in capsys.readouterr().out


def test_cli_reports_transport_failure(fake, capsys) -> None:
    fake.error = LcmapTransportError("boom", status_code=500)

    assert cli._main(["get", "/objects/9"]) == 1
    assert "Request failed: 500: boom" in capsys.readouterr().out


def test_cli_rejects_malformed_header(fake) -> None:
    with pytest.raises(SystemExit):
        cli._main(["get", "/objects", "--header", "novalue"])


def test_cli_head_prints_status_without_decoding(monkeypatch, capsys) -> None:
    monkeypatch.delenv("LCMAP_ENDPOINT", raising=False)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, request=request)

    transport = HttpxTransport(httpx_client=httpx.Client(transport=httpx.MockTransport(handler)))
    monkeypatch.setattr(cli, "LcmapClient", lambda **kwargs: LcmapClient(transport=transport, **kwargs))

    assert cli._main(["head", "/objects/1"]) == 0
    assert capsys.readouterr().out.startswith("200")


def test_cli_reports_undecodable_body(fake, capsys) -> None:
    fake.response = {"body": "<html>Not Found</html>", "status": 404}

    assert cli._main(["get", "/objects/9"]) == 1
    assert "not valid JSON" in capsys.readouterr().out
