from __future__ import annotations

import io
import json
import sys

import pytest

from conftest import RFC_EXAMPLE_TOKEN, RFC_UNSECURED_TOKEN
from jwt_handler import __main__ as entry
from jwt_handler import cli
from jwt_handler.config import ENV_ALLOW_UNSECURED, ENV_PRINCIPAL_AUDIENCE


@pytest.fixture(autouse=True)
def _isolate(monkeypatch, tmp_path):
    # keep a developer's config/config.yaml and env out of the tests
    monkeypatch.setattr(cli, "DEFAULT_CONFIG_PATH", str(tmp_path / "absent.yaml"))
    monkeypatch.delenv(ENV_PRINCIPAL_AUDIENCE, raising=False)
    monkeypatch.delenv(ENV_ALLOW_UNSECURED, raising=False)


def _sections(out: str) -> dict:
    """Pull the Header/Payload JSON blocks back out of the printed report."""
    sections = {}
    for label in ("Header", "Payload"):
        start = out.index(f"{label}:\n") + len(label) + 2
        end = out.index("\n}", start) + 2
        sections[label] = json.loads(out[start:end])
    return sections


def test_decode_argument(capsys):
    cli.decode_main([RFC_EXAMPLE_TOKEN])
    out = capsys.readouterr().out

    parsed = _sections(out)
    assert parsed["Header"] == {"alg": "HS256", "typ": "JWT"}
    assert parsed["Payload"]["iss"] == "joe"
    assert "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk" in out


def test_decode_stdin(capsys, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO(RFC_UNSECURED_TOKEN + "\n"))
    cli.decode_main(["--stdin"])
    assert "(none, unsecured token)" in capsys.readouterr().out


def test_decode_empty_stdin_exits(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    with pytest.raises(SystemExit) as excinfo:
        cli.decode_main(["--stdin"])
    assert excinfo.value.code == 1


def test_decode_malformed_token_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.decode_main(["a.b"])
    assert excinfo.value.code == 1
    assert "E1: Invalid token structure." in capsys.readouterr().out


def test_validate_success(capsys, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text(
        "validation:\n"
        "  not_before: {required: false}\n"
        "  audience: {enabled: false}\n",
        encoding="utf-8",
    )
    cli.validate_main([RFC_EXAMPLE_TOKEN, "--config", str(config), "--now", "1300819379"])
    assert "Valid token." in capsys.readouterr().out


def test_validate_expired(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.validate_main([RFC_EXAMPLE_TOKEN, "--now", "1300819380"])
    assert excinfo.value.code == 1
    # defaults require nbf, which the example lacks; exp is checked first
    assert "E2: Token expired." in capsys.readouterr().out


def test_validate_missing_config_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.validate_main([RFC_EXAMPLE_TOKEN, "--config", str(tmp_path / "missing.yaml")])
    assert excinfo.value.code == 1


def test_validate_unsecured_with_flags(capsys, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text(
        "validation:\n"
        "  expiration: {enabled: false}\n"
        "  not_before: {enabled: false}\n"
        "  audience: {required: false}\n",
        encoding="utf-8",
    )
    with pytest.raises(SystemExit):
        cli.validate_main([RFC_UNSECURED_TOKEN, "-c", str(config)])
    assert "E7: Invalid Token Signature." in capsys.readouterr().out

    # configured principal + absent aud is rejected even when aud is optional
    with pytest.raises(SystemExit):
        cli.validate_main([RFC_UNSECURED_TOKEN, "-c", str(config), "--allow-unsecured", "-a", "api"])
    assert "E4: Invalid Audiance." in capsys.readouterr().out

    cli.validate_main([RFC_UNSECURED_TOKEN, "-c", str(config), "--allow-unsecured"])
    assert "Valid token." in capsys.readouterr().out


def test_issue_default_header(capsys):
    cli.issue_main(["--claims", '{"iss": "joe"}'])
    raw = capsys.readouterr().out.strip()
    assert raw == "eyJhbGciOiJub25lIiwidHlwIjoiSldUIn0.eyJpc3MiOiJqb2UifQ."


def test_issue_with_signature(capsys):
    cli.issue_main(["--header", '{"alg": "HS256"}', "--signature", "c2ln"])
    assert capsys.readouterr().out.strip() == "eyJhbGciOiJIUzI1NiJ9.e30.c2ln"


@pytest.mark.parametrize(
    "argv",
    [
        ["--claims", "{not json"],
        ["--claims", '{"exp": "tomorrow"}'],
        ["--header", "[]"],
    ],
)
def test_issue_bad_input_exits(argv):
    with pytest.raises(SystemExit) as excinfo:
        cli.issue_main(argv)
    assert excinfo.value.code == 1


def test_entry_point_usage(capsys, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["jwt-handler"])
    with pytest.raises(SystemExit) as excinfo:
        entry.main()
    assert excinfo.value.code == 0
    assert "commands:" in capsys.readouterr().out


def test_entry_point_unknown_command(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["jwt-handler", "sign"])
    with pytest.raises(SystemExit) as excinfo:
        entry.main()
    assert excinfo.value.code == 1


def test_entry_point_dispatches(capsys, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["jwt-handler", "issue", "--header", "{}"])
    entry.main()
    assert capsys.readouterr().out.strip() == "e30.e30."
