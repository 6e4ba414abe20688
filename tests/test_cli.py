"""Tests for the command line entry point."""

import pytest
from typer.testing import CliRunner

from inventory_api import __main__ as cli_module

runner = CliRunner()


@pytest.fixture
def served(monkeypatch):
    calls = []
    monkeypatch.setattr(cli_module.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    return calls


def test_serve_runs_uvicorn(served, tmp_path):
    result = runner.invoke(cli_module.cli, ["--host", "127.0.0.1", "--port", "9001", "--cache", str(tmp_path / "photos")])
    assert result.exit_code == 0, result.output
    app, kwargs = served[0]
    assert kwargs == {"host": "127.0.0.1", "port": 9001}
    assert app.state.settings.base_url == "http://127.0.0.1:9001"
    assert (tmp_path / "photos").is_dir()


@pytest.mark.parametrize("port", ["0", "65536"])
def test_port_is_validated(served, port):
    result = runner.invoke(cli_module.cli, ["--port", port])
    assert result.exit_code != 0
    assert served == []


def test_unknown_storage_backend(served, tmp_path):
    result = runner.invoke(cli_module.cli, ["--storage", "nope", "--cache", str(tmp_path)])
    assert result.exit_code == 1
    assert served == []


def test_bad_cache_dir_exits(served, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    result = runner.invoke(cli_module.cli, ["--cache", str(blocker / "photos")])
    assert result.exit_code == 1
    assert served == []
