"""Login database backed by the user's netrc file.

The file format belongs to the stdlib ``netrc`` parser; this module only
locates the file, turns parser failures into ``StoreUnavailable`` and indexes
the machines by host.

Duplicate ``machine`` entries resolve last-wins, as the parser stores them.
The ``default`` stanza is not a host and is never used as a fallback: lookups
are exact, case-sensitive matches only.
"""

import netrc
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

import structlog
from pydantic import SecretStr

from .errors import StoreUnavailable

logger = structlog.get_logger(__name__)

NETRC_ENV_VAR = "NETRC"
_DEFAULT_STANZA = "default"


@dataclass(frozen=True)
class LoginEntry:
    """One machine entry of the login database.

    All three fields are secrets; their repr is masked.
    """
    login: SecretStr = field(default_factory=lambda: SecretStr(""))
    account: SecretStr = field(default_factory=lambda: SecretStr(""))
    password: SecretStr = field(default_factory=lambda: SecretStr(""))

    def __post_init__(self):
        for name in ("login", "account", "password"):
            value = getattr(self, name)
            if value is None:
                object.__setattr__(self, name, SecretStr(""))
            elif not isinstance(value, SecretStr):
                object.__setattr__(self, name, SecretStr(value))

    @classmethod
    def from_authenticator(cls, authenticator: tuple) -> "LoginEntry":
        """Build from a ``netrc.hosts`` value, a (login, account, password) tuple."""
        login, account, password = authenticator
        return cls(login=login or "", account=account or "", password=password or "")


@dataclass(frozen=True)
class LoginDatabase:
    """Read-only host -> LoginEntry index."""
    entries: Mapping[str, LoginEntry]
    path: Optional[Path] = None

    def __post_init__(self):
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    @classmethod
    def from_netrc(cls, parsed: netrc.netrc, path: Optional[Path] = None) -> "LoginDatabase":
        entries = {
            host: LoginEntry.from_authenticator(auth)
            for host, auth in parsed.hosts.items()
            if host != _DEFAULT_STANZA
        }
        return cls(entries=entries, path=path)

    def lookup(self, host: str) -> Optional[LoginEntry]:
        """Exact match on host; None when the host has no entry."""
        return self.entries.get(host)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, host: object) -> bool:
        return host in self.entries


def default_netrc_path() -> Path:
    """Conventional location of the login database.

    ``$NETRC`` when set, else ``~/.netrc``. On Windows ``~/_netrc`` is used
    when ``~/.netrc`` does not exist.
    """
    override = os.environ.get(NETRC_ENV_VAR)
    if override:
        return Path(override).expanduser()

    home = Path.home()
    dotted = home / ".netrc"
    if sys.platform == "win32" and not dotted.exists():
        underscored = home / "_netrc"
        if underscored.exists():
            return underscored
    return dotted


def load_login_database(path: Optional[Union[str, Path]] = None) -> LoginDatabase:
    """Read and index the login database.

    Args:
        path: netrc file to read (defaults to default_netrc_path())

    Returns:
        LoginDatabase for the file

    Raises:
        StoreUnavailable: If the file is missing, unreadable or malformed
    """
    netrc_path = Path(path) if path is not None else default_netrc_path()

    try:
        parsed = netrc.netrc(str(netrc_path))
    except netrc.NetrcParseError as e:
        # The parser's message quotes the offending token, which may be a secret
        raise StoreUnavailable(
            f"cannot parse login database {netrc_path} (line {e.lineno})"
        ) from None
    except FileNotFoundError as e:
        raise StoreUnavailable(f"login database {netrc_path} does not exist") from e
    except UnicodeDecodeError:
        raise StoreUnavailable(f"login database {netrc_path} is not valid UTF-8") from None
    except OSError as e:
        raise StoreUnavailable(
            f"cannot read login database {netrc_path}: {e.strerror or type(e).__name__}"
        ) from e

    database = LoginDatabase.from_netrc(parsed, path=netrc_path)
    logger.debug("LOGIN_DATABASE_LOADED", path=str(netrc_path), hosts=len(database))
    return database


__all__ = [
    "NETRC_ENV_VAR",
    "LoginEntry",
    "LoginDatabase",
    "default_netrc_path",
    "load_login_database",
]
