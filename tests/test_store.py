"""Tests for the netrc-backed login database."""

import sys
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest
from pydantic import SecretStr

from cargo_credential_netrc import (
    LoginDatabase,
    LoginEntry,
    StoreUnavailable,
    default_netrc_path,
    load_login_database,
)


class TestLoginEntry:
    """Test LoginEntry construction and masking."""

    def test_plain_strings_become_secrets(self):
        entry = LoginEntry(login="bob", account="acct", password="secret")
        assert isinstance(entry.password, SecretStr)
        assert entry.login.get_secret_value() == "bob"
        assert entry.account.get_secret_value() == "acct"
        assert entry.password.get_secret_value() == "secret"

    def test_missing_fields_are_empty(self):
        entry = LoginEntry(password="p")
        assert entry.login.get_secret_value() == ""
        assert entry.account.get_secret_value() == ""

    def test_none_fields_are_empty(self):
        entry = LoginEntry.from_authenticator(("u", None, "p"))
        assert entry.account.get_secret_value() == ""

    def test_repr_hides_values(self):
        entry = LoginEntry(login="bob", account="acct", password="hunter2")
        for text in (repr(entry), str(entry)):
            assert "bob" not in text
            assert "acct" not in text
            assert "hunter2" not in text

    def test_frozen(self):
        entry = LoginEntry(password="p")
        with pytest.raises(FrozenInstanceError):
            entry.password = SecretStr("other")


class TestLoginDatabase:
    """Test lookups against a loaded database."""

    def test_single_entry_lookup(self, write_netrc):
        path = write_netrc("machine H login bob password secret\n")
        db = load_login_database(path)

        entry = db.lookup("H")
        assert entry is not None
        assert entry.login.get_secret_value() == "bob"
        assert entry.password.get_secret_value() == "secret"

        for other in ("h", "H.", "", "HH", "default", " H"):
            assert db.lookup(other) is None

    def test_lookup_is_exact(self, netrc_file):
        db = load_login_database(netrc_file)
        assert db.lookup("crates.example.com") is not None
        assert db.lookup("example.com") is None
        assert db.lookup("CRATES.EXAMPLE.COM") is None
        assert db.lookup("sub.crates.example.com") is None

    def test_ip_hosts(self, netrc_file):
        db = load_login_database(netrc_file)
        assert db.lookup("10.0.0.7").account.get_secret_value() == "builds"
        assert db.lookup("::1").password.get_secret_value() == "ip6-secret"

    def test_duplicate_host_last_wins(self, write_netrc):
        path = write_netrc(
            "machine crates.example.com login first password one\n"
            "machine crates.example.com login second password two\n"
        )
        entry = load_login_database(path).lookup("crates.example.com")
        assert entry.login.get_secret_value() == "second"
        assert entry.password.get_secret_value() == "two"

    def test_default_stanza_is_not_a_fallback(self, write_netrc):
        path = write_netrc(
            "machine crates.example.com login u password p\n"
            "default login anonymous password guest\n"
        )
        db = load_login_database(path)
        assert len(db) == 1
        assert "default" not in db
        assert db.lookup("other.example.com") is None

    def test_entries_are_read_only(self, netrc_file):
        db = load_login_database(netrc_file)
        with pytest.raises(TypeError):
            db.entries["new.example.com"] = LoginEntry(password="x")

    def test_records_source_path(self, netrc_file):
        assert load_login_database(netrc_file).path == netrc_file

    def test_from_mapping(self):
        db = LoginDatabase(entries={"a.example.com": LoginEntry(password="p")})
        assert "a.example.com" in db
        assert db.path is None


class TestLoadFailures:
    """Test that every read or parse failure is StoreUnavailable."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(StoreUnavailable, match="does not exist"):
            load_login_database(tmp_path / "nope")

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(StoreUnavailable):
            load_login_database(tmp_path)

    def test_parse_error_does_not_leak_tokens(self, write_netrc):
        path = write_netrc("machine crates.example.com login u password p s3cr3t-leak\n")
        with pytest.raises(StoreUnavailable, match="cannot parse") as exc_info:
            load_login_database(path)

        assert "s3cr3t-leak" not in str(exc_info.value)
        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__


class TestDefaultPath:
    """Test the conventional location lookup."""

    def test_netrc_env_var(self, monkeypatch, tmp_path):
        target = tmp_path / "custom-netrc"
        monkeypatch.setenv("NETRC", str(target))
        assert default_netrc_path() == target

    def test_home_dotfile(self):
        assert default_netrc_path() == Path.home() / ".netrc"

    def test_load_uses_default_path(self, monkeypatch, write_netrc):
        path = write_netrc("machine h login u password p\n")
        monkeypatch.setenv("NETRC", str(path))
        assert load_login_database().lookup("h") is not None

    @pytest.mark.skipif(sys.platform == "win32", reason="posix home layout")
    def test_underscore_file_ignored_off_windows(self):
        (Path.home() / "_netrc").write_text("machine h password p\n")
        assert default_netrc_path().name == ".netrc"
