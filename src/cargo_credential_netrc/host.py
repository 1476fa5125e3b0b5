"""Registry index URL to login-database host key.

The host key is what the login database is indexed by:

- Domain names. For http, https, ws, wss and ftp they are lower-cased and
  internationalised names are punycode-encoded ('bücher.example' becomes
  'xn--bcher-kva.example'). For any other scheme, including Cargo's
  ``sparse+https``, the host is kept exactly as written.
- IPv4 literals in dotted form ('10.0.0.7')
- IPv6 literals in compressed form, without brackets ('::1')

Cargo marks the index kind with a prefix such as ``sparse+``. On the scheme
(``sparse+https://host/``) it is ordinary URL syntax; on the authority
(``https://sparse+host/``) it is stripped from the host.
"""

import ipaddress
import re
from typing import NewType
from urllib.parse import urlsplit

from .errors import UrlNotSupported, UrlParseError

HostId = NewType("HostId", str)

# Schemes whose URLs must carry a host (WHATWG "special" schemes, minus file)
_SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})
_INDEX_KIND_RE = re.compile(r"^(?:sparse|registry|git)\+(?=.)")
_FORBIDDEN_HOST_RE = re.compile(r"[\s<>^|%\\\"'`{}]")
_USERINFO_RE = re.compile(r"//[^/@]*@")


def _display(index_url: str) -> str:
    """URL for error messages, with any userinfo masked."""
    return _USERINFO_RE.sub("//***@", index_url, count=1)


def _split(index_url: str):
    if not isinstance(index_url, str) or not index_url.strip():
        raise UrlParseError("empty index URL")
    try:
        parts = urlsplit(index_url.strip())
        # hostname and port are parsed lazily; force validation now
        hostname = parts.hostname
        parts.port
    except ValueError as e:
        raise UrlParseError(f"invalid index URL {_display(index_url)!r}: {e}") from e
    if not parts.scheme:
        raise UrlParseError(f"relative URL without a base: {_display(index_url)!r}")
    return parts, hostname


def _opaque_host(netloc: str) -> str:
    """Host of a non-special URL, as written."""
    authority = netloc.rpartition("@")[2]
    host, sep, _ = authority.rpartition(":")
    return host if sep else authority


def resolve_host(index_url: str) -> HostId:
    """Extract the login-database host key from a registry index URL.

    Args:
        index_url: Absolute registry index URL

    Returns:
        Host key for LoginDatabase.lookup

    Raises:
        UrlParseError: If the URL is malformed or relative
        UrlNotSupported: If the URL has no host component
    """
    parts, hostname = _split(index_url)
    scheme = parts.scheme.lower()
    special = scheme in _SPECIAL_SCHEMES

    if not hostname:
        if special:
            raise UrlParseError(f"empty host in index URL {_display(index_url)!r}")
        raise UrlNotSupported(f"index URL {_display(index_url)!r} has no host")

    # Bracketed literal: must be valid IPv6
    if "[" in parts.netloc.rpartition("@")[2]:
        try:
            return HostId(str(ipaddress.IPv6Address(hostname)))
        except ValueError as e:
            raise UrlParseError(f"invalid IPv6 literal in index URL {_display(index_url)!r}") from e

    if not special:
        hostname = _opaque_host(parts.netloc)

    if _FORBIDDEN_HOST_RE.search(hostname):
        raise UrlParseError(f"invalid character in host of index URL {_display(index_url)!r}")

    hostname = _INDEX_KIND_RE.sub("", hostname)

    if special and not hostname.isascii():
        try:
            hostname = hostname.encode("idna").decode("ascii")
        except UnicodeError as e:
            raise UrlParseError(f"invalid domain name in index URL {_display(index_url)!r}") from e

    try:
        return HostId(str(ipaddress.IPv4Address(hostname)))
    except ValueError:
        return HostId(hostname)


__all__ = ["HostId", "resolve_host"]
