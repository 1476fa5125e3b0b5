"""Shared fixtures."""

from pathlib import Path

import pytest
import structlog


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from the real ~/.netrc and logging setup."""
    monkeypatch.delenv("NETRC", raising=False)
    monkeypatch.delenv("CARGO_CREDENTIAL_NETRC_LOG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("USERPROFILE", str(tmp_path / "home"))
    (tmp_path / "home").mkdir()
    yield
    structlog.reset_defaults()


@pytest.fixture
def write_netrc(tmp_path):
    """Write a netrc file and return its path."""

    def _write(content: str, name: str = "netrc") -> Path:
        path = tmp_path / name
        path.write_text(content)
        path.chmod(0o600)
        return path

    return _write


@pytest.fixture
def netrc_file(write_netrc):
    """Login database with a domain, an IPv4 and an IPv6 host."""
    return write_netrc(
        "machine crates.example.com login u password p\n"
        "machine 10.0.0.7 login ci account builds password ip4-secret\n"
        "machine ::1 login local password ip6-secret\n"
    )
