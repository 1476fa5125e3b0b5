"""Tests for contract types and the error taxonomy."""

import pytest
from pydantic import SecretStr

from cargo_credential_netrc import (
    Action,
    ActionKind,
    CacheControl,
    ConfigError,
    ContractViolationError,
    CredentialError,
    CredentialResponse,
    InvalidTemplate,
    NotFound,
    OperationNotSupported,
    RegistryInfo,
    StoreUnavailable,
    UrlNotSupported,
    UrlParseError,
)


class TestCredentialResponse:
    """Test response invariants."""

    def test_defaults(self):
        response = CredentialResponse(token=SecretStr("t"))
        assert response.cache is CacheControl.SESSION
        assert response.operation_independent is True
        assert response.expiration is None

    def test_plain_token_is_wrapped(self):
        response = CredentialResponse(token="plain")
        assert isinstance(response.token, SecretStr)
        assert response.token.get_secret_value() == "plain"
        assert "plain" not in repr(response)

    def test_expires_requires_expiration(self):
        with pytest.raises(ContractViolationError, match="expiration is required"):
            CredentialResponse(token="t", cache=CacheControl.EXPIRES)

        response = CredentialResponse(token="t", cache=CacheControl.EXPIRES, expiration=1700000000)
        assert response.expiration == 1700000000

    def test_expiration_only_with_expires(self):
        with pytest.raises(ContractViolationError, match="only valid with EXPIRES"):
            CredentialResponse(token="t", cache=CacheControl.NEVER, expiration=1)


class TestRegistryInfo:
    """Test registry info validation."""

    def test_index_url_required(self):
        with pytest.raises(ContractViolationError, match="index_url must be non-empty"):
            RegistryInfo(index_url="")

    def test_headers_frozen_and_hidden(self):
        info = RegistryInfo(index_url="https://x/", headers=["Authorization: secret"])
        assert info.headers == ("Authorization: secret",)
        assert "secret" not in repr(info)


def test_action_kind_from_wire():
    assert ActionKind.from_wire("get") is ActionKind.GET
    assert ActionKind.from_wire("login") is ActionKind.STORE
    assert ActionKind.from_wire("logout") is ActionKind.ERASE
    assert ActionKind.from_wire("cache-clear") is ActionKind.UNKNOWN
    assert ActionKind.from_wire("unknown") is ActionKind.UNKNOWN


def test_action_get_helper():
    action = Action.get("publish")
    assert action.kind is ActionKind.GET
    assert action.operation == "publish"


def test_error_taxonomy():
    """Kinds are stable and only three have a dedicated wire variant."""
    expected = {
        ConfigError: ("config-error", "other"),
        UrlParseError: ("url-parse-error", "other"),
        UrlNotSupported: ("url-not-supported", "url-not-supported"),
        StoreUnavailable: ("store-unavailable", "other"),
        NotFound: ("not-found", "not-found"),
        InvalidTemplate: ("invalid-template", "other"),
        OperationNotSupported: ("operation-not-supported", "operation-not-supported"),
    }
    for cls, (kind, wire_kind) in expected.items():
        assert issubclass(cls, CredentialError)
        assert cls.kind == kind
        assert cls.wire_kind == wire_kind
