"""
schemahash - CLI Tests

Run with: pytest test_cli.py
"""

import logging

import pytest

import schemahash
from schemahash import cli


def test_create_prints_hash(capsys):
    assert cli.main(["hunter2", "PLAIN"]) == 0
    assert capsys.readouterr().out.strip() == "{PLAIN}aHVudGVyMg=="


def test_default_schema(capsys, monkeypatch):
    monkeypatch.delenv("SCHEMAHASH_SCHEMA", raising=False)
    assert cli.main(["hunter2"]) == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith("{PBKDF2/24/20000/24/sha256}")
    assert schemahash.verify_sync("hunter2", out)


def test_schema_from_environment(capsys, monkeypatch):
    monkeypatch.setenv("SCHEMAHASH_SCHEMA", "SSHA")
    assert cli.main(["hunter2"]) == 0
    assert capsys.readouterr().out.startswith("{SSHA}")

    # Positional schema still wins
    assert cli.main(["hunter2", "PLAIN"]) == 0
    assert capsys.readouterr().out.startswith("{PLAIN}")


def test_missing_password_prints_usage(capsys):
    with pytest.raises(SystemExit) as info:
        cli.main([])
    assert info.value.code != 0
    assert "usage:" in capsys.readouterr().err


def test_bad_schema_exits_nonzero(capsys):
    assert cli.main(["hunter2", "MD5"]) == 1
    assert "ERROR:" in capsys.readouterr().err

    assert cli.main(["hunter2", "SSHA256"]) == 1
    assert "saltSize" in capsys.readouterr().err

    assert cli.main(["hunter2", "PBKDF2/8/10/16/whirlpool"]) == 1
    assert "ERROR:" in capsys.readouterr().err


def test_verify_option(capsys):
    encoded = schemahash.create_sync("hunter2", "SSHA256/8")

    assert cli.main(["hunter2", "--verify", encoded]) == 0
    assert capsys.readouterr().out.strip() == "OK"

    assert cli.main(["hunter3", "--verify", encoded]) == 1
    assert capsys.readouterr().out.strip() == "FAIL"

    assert cli.main(["hunter2", "--verify", "not-a-hash"]) == 1
    assert "ERROR:" in capsys.readouterr().err


def test_password_starting_with_dash(capsys):
    # Without '--' argparse treats it as an option
    with pytest.raises(SystemExit):
        cli.main(["-secret", "PLAIN"])
    capsys.readouterr()

    assert cli.main(["--", "-secret", "PLAIN"]) == 0
    assert capsys.readouterr().out.strip() == "{PLAIN}LXNlY3JldA=="


# =============================================================================
# Logging
# =============================================================================

@pytest.fixture
def basic_config(monkeypatch):
    """Record the keyword arguments configure_logging() hands to basicConfig."""
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.delenv("SCHEMAHASH_LOG_LEVEL", raising=False)
    return calls


def test_log_level_defaults_to_warning(basic_config, capsys):
    assert cli.main(["hunter2", "PLAIN"]) == 0
    assert basic_config[-1]["level"] == logging.WARNING
    assert basic_config[-1]["format"] == "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def test_log_level_option(basic_config, capsys):
    assert cli.main(["--log-level", "DEBUG", "hunter2", "PLAIN"]) == 0
    assert basic_config[-1]["level"] == logging.DEBUG


def test_log_level_from_environment(basic_config, monkeypatch, capsys):
    monkeypatch.setenv("SCHEMAHASH_LOG_LEVEL", "info")
    assert cli.main(["hunter2", "PLAIN"]) == 0
    assert basic_config[-1]["level"] == logging.INFO

    # Command line wins over the environment
    assert cli.main(["--log-level", "ERROR", "hunter2", "PLAIN"]) == 0
    assert basic_config[-1]["level"] == logging.ERROR


def test_unknown_log_level_falls_back_to_warning(basic_config):
    cli.configure_logging(level="nonsense")
    assert basic_config[-1]["level"] == logging.WARNING

    cli.configure_logging(level="  ")
    assert basic_config[-1]["level"] == logging.WARNING


def test_secrets_never_logged(caplog):
    encoded = schemahash.create_sync("hunter2", "SSHA256/8")
    payload = encoded.split("}", 1)[1]

    with caplog.at_level(logging.DEBUG, logger="schemahash"):
        assert not schemahash.verify_sync("wrongpass", encoded)
        with pytest.raises(schemahash.MalformedHashError):
            schemahash.verify_sync("hunter2", "{SSHA256/8}" + payload[:-8])

    assert caplog.records, "verify should log at DEBUG"
    assert "hunter2" not in caplog.text
    assert "wrongpass" not in caplog.text
    assert payload not in caplog.text
    assert payload[:-8] not in caplog.text
