"""Cargo credential provider that reads registry tokens from your .netrc file."""

from .version import PROVIDER_VERSION, PROTOCOL_VERSIONS
from .errors import (
    CredentialError,
    ConfigError,
    UrlParseError,
    UrlNotSupported,
    StoreUnavailable,
    NotFound,
    InvalidTemplate,
    OperationNotSupported,
    ContractViolationError,
    ProtocolError,
)
from .types import (
    CacheControl,
    ActionKind,
    Action,
    RegistryInfo,
    CredentialResponse,
)
from .host import HostId, resolve_host
from .store import (
    LoginEntry,
    LoginDatabase,
    default_netrc_path,
    load_login_database,
)
from .template import VARIABLES, TokenTemplate, compile_template, render
from .config import AdapterConfig, build_parser, parse_adapter_args
from .adapter import CredentialProvider, NetrcCredential

__version__ = PROVIDER_VERSION

__all__ = [
    # Version
    "PROVIDER_VERSION",
    "PROTOCOL_VERSIONS",
    # Errors
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
    # Contract types
    "CacheControl",
    "ActionKind",
    "Action",
    "RegistryInfo",
    "CredentialResponse",
    # Host resolution
    "HostId",
    "resolve_host",
    # Login database
    "LoginEntry",
    "LoginDatabase",
    "default_netrc_path",
    "load_login_database",
    # Token templates
    "VARIABLES",
    "TokenTemplate",
    "compile_template",
    "render",
    # Configuration
    "AdapterConfig",
    "build_parser",
    "parse_adapter_args",
    # Provider
    "CredentialProvider",
    "NetrcCredential",
]
