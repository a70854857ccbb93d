"""Doctor command tests."""

import json
import logging

import pytest
import structlog
from typer.testing import CliRunner

from cli.main import app
from core.config import write_user_env_vars

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MYFLIX_API_BASE_URL", "https://movies.test")
    monkeypatch.setenv("MYFLIX_CREDENTIALS_PATH", str(tmp_path / "session.json"))
    monkeypatch.setattr(
        "cli.doctor.write_user_env_vars",
        lambda values: write_user_env_vars(values, tmp_path / "cfg" / ".env"),
    )
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def _fake_check(ok, detail):
    async def _check(url, settings):
        return ok, detail

    return _check


def test_doctor_run_reports_config(monkeypatch, tmp_path):
    (tmp_path / "session.json").write_text(json.dumps({"token": "abc", "user": "bob"}), encoding="utf-8")
    monkeypatch.setattr("cli.doctor._check_http", _fake_check(True, "HTTP 200"))

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "https://movies.test/" in result.output
    assert "HTTP 200" in result.output
    assert "bob" in result.output


def test_doctor_run_prints_bracketed_user_literally(monkeypatch, tmp_path):
    (tmp_path / "session.json").write_text(json.dumps({"token": "abc", "user": "x[/y]"}), encoding="utf-8")
    monkeypatch.setattr("cli.doctor._check_http", _fake_check(True, "[200]"))

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "x[/y]" in result.output
    assert "[200]" in result.output


def test_doctor_run_fails_when_unreachable(monkeypatch):
    monkeypatch.setattr("cli.doctor._check_http", _fake_check(False, "connection refused"))

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_doctor_setup_writes_env(tmp_path):
    result = runner.invoke(app, ["doctor", "setup", "--base-url", "http://localhost:8080/"])

    assert result.exit_code == 0, result.output
    env_text = (tmp_path / "cfg" / ".env").read_text(encoding="utf-8")
    assert "MYFLIX_API_BASE_URL=http://localhost:8080/" in env_text


def test_doctor_setup_rejects_bad_url(tmp_path):
    result = runner.invoke(app, ["doctor", "setup", "--base-url", "ftp://nope"])

    assert result.exit_code != 0
    assert not (tmp_path / "cfg" / ".env").exists()
