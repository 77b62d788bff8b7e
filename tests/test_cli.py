"""Tests de la CLI (Typer) con el daemon simulado."""

from __future__ import annotations

import logging

import httpx
import pytest
from conftest import CIDV1, PEER_A, Recorder
from typer.testing import CliRunner

from cli.main import app
from core.services import ipfs_api

runner = CliRunner()


@pytest.fixture
def daemon(monkeypatch: pytest.MonkeyPatch, tmp_path):
    recorder = Recorder()

    def _client(settings=None, **_: object) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(recorder))

    monkeypatch.setattr(ipfs_api, "build_async_client", _client)
    # Aisla la CLI de cualquier .env local.
    monkeypatch.chdir(tmp_path)
    handlers, level = logging.root.handlers[:], logging.root.level
    yield recorder
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


def test_ls_json(daemon):
    daemon.respond_json({"Objects": [{"Hash": "Qm123", "Links": []}]})

    result = runner.invoke(app, ["ls", "Qm123", "--json"])

    assert result.exit_code == 0, result.output
    assert '"Hash": "Qm123"' in result.output
    assert str(daemon.requests[0].url) == "http://127.0.0.1:5001/api/v0/ls/Qm123"


def test_ls_tree(daemon):
    daemon.respond_json({"Objects": [{"Hash": "QmDir", "Links": [{"Name": "a.txt", "Hash": "QmFi1e", "Size": 3}]}]})

    result = runner.invoke(app, ["ls", "QmDir"])

    assert result.exit_code == 0, result.output
    assert "QmFi1e" in result.output
    assert "a.txt" in result.output


def test_host_and_port_options(daemon):
    daemon.respond_json({"Strings": []})

    result = runner.invoke(app, ["--host", "10.0.0.5", "--port", "5002", "peers", "--json"])

    assert result.exit_code == 0, result.output
    assert daemon.requests[0].url.host == "10.0.0.5"
    assert daemon.requests[0].url.port == 5002


def test_peers_json(daemon):
    address = f"/ip4/127.0.0.1/tcp/4001/p2p/{PEER_A}"
    daemon.respond_json({"Strings": [address]})

    result = runner.invoke(app, ["peers", "--json"])

    assert result.exit_code == 0, result.output
    assert address in result.output


def test_connect_prints_result(daemon):
    daemon.respond_json({"Strings": ["connect ok"]})

    result = runner.invoke(app, ["connect", "/ip4/127.0.0.1/tcp/4001"])

    assert result.exit_code == 0, result.output
    assert "connect ok" in result.output


def test_cat_to_file(daemon, tmp_path):
    daemon.respond_bytes(b"hello world")
    target = tmp_path / "out" / "hello.txt"

    result = runner.invoke(app, ["cat", "Qm123", "--output", str(target)])

    assert result.exit_code == 0, result.output
    assert target.read_bytes() == b"hello world"


def test_pipeline_error_exits_with_code_1(daemon):
    daemon.respond_json({"Strings": []})

    result = runner.invoke(app, ["connect", "/ip4/127.0.0.1/tcp/4001"])

    assert result.exit_code == 1


def test_doctor_reports_unreachable_daemon(daemon):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    daemon.handler = refuse

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 1
    assert "FAIL" in result.output


@pytest.mark.parametrize("command", ["ls", "cat"])
def test_invalid_identifier_is_reported(daemon, command):
    result = runner.invoke(app, [command, CIDV1])

    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)
    assert "Invalid content identifier" in result.output
    assert daemon.requests == []
