"""Credential provider exceptions.

Every failure a request can end in is a ``CredentialError`` subclass. The
``kind`` attribute is a stable identifier for logs and tests; ``wire_kind``
is what the registry client understands (anything it has no dedicated
variant for travels as ``"other"`` with the message attached).

Messages name the failing construct, host or path. They must never carry a
login, account, password or rendered token.
"""


class CredentialError(Exception):
    """Base class for all provider failures."""

    kind = "other"
    wire_kind = "other"


class ConfigError(CredentialError):
    """Raised when the provider arguments do not form a valid configuration."""

    kind = "config-error"


class UrlParseError(CredentialError):
    """Raised when the registry index URL is not a valid absolute URL."""

    kind = "url-parse-error"


class UrlNotSupported(CredentialError):
    """Raised when the index URL has no host to look up."""

    kind = "url-not-supported"
    wire_kind = "url-not-supported"


class StoreUnavailable(CredentialError):
    """Raised when the login database cannot be read or parsed."""

    kind = "store-unavailable"


class NotFound(CredentialError):
    """Raised when the login database has no entry for the registry host."""

    kind = "not-found"
    wire_kind = "not-found"


class InvalidTemplate(CredentialError):
    """Raised when the token template is malformed or names an unknown variable."""

    kind = "invalid-template"


class OperationNotSupported(CredentialError):
    """Raised for any action other than get; this provider is read-only."""

    kind = "operation-not-supported"
    wire_kind = "operation-not-supported"


class ContractViolationError(ValueError):
    """Raised when a contract value is built with inconsistent fields."""
    pass


class ProtocolError(ValueError):
    """Raised when a wire message from the registry client is malformed."""
    pass


__all__ = [
    "CredentialError",
    "ConfigError",
    "UrlParseError",
    "UrlNotSupported",
    "StoreUnavailable",
    "NotFound",
    "InvalidTemplate",
    "OperationNotSupported",
    "ContractViolationError",
    "ProtocolError",
]
