"""Core contract types exchanged with the registry client."""

import enum
from dataclasses import dataclass, field
from typing import Optional

from pydantic import SecretStr

from .errors import ContractViolationError


class CacheControl(enum.Enum):
    """How long the registry client may reuse a returned token."""
    NEVER = "never"      # Ask again for every request
    SESSION = "session"  # Reuse for the rest of the client process
    EXPIRES = "expires"  # Reuse until ``expiration``


class ActionKind(enum.Enum):
    """Operation kind requested by the registry client."""
    GET = "get"
    STORE = "login"
    ERASE = "logout"
    UNKNOWN = "unknown"

    @classmethod
    def from_wire(cls, value: str) -> "ActionKind":
        """Map a wire ``kind`` to an ActionKind, UNKNOWN for anything new."""
        for member in cls:
            if member.value == value and member is not cls.UNKNOWN:
                return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class RegistryInfo:
    """Registry the client wants credentials for.

    Attributes:
        index_url: Index URL as configured, e.g. "sparse+https://example.com/index/"
        name: Registry name from the client's configuration, if it has one
        headers: Response headers from a failed request; may hold secrets
    """
    index_url: str
    name: Optional[str] = None
    headers: tuple[str, ...] = field(default=(), repr=False)

    def __post_init__(self):
        if not self.index_url:
            raise ContractViolationError("index_url must be non-empty")
        if isinstance(self.headers, list):
            object.__setattr__(self, "headers", tuple(self.headers))


@dataclass(frozen=True)
class Action:
    """Requested action plus the operation it is for (get only)."""
    kind: ActionKind
    operation: Optional[str] = None

    @classmethod
    def get(cls, operation: Optional[str] = "read") -> "Action":
        return cls(ActionKind.GET, operation)


@dataclass(frozen=True)
class CredentialResponse:
    """Successful result of a get.

    Attributes:
        token: Rendered secret; its repr is masked
        cache: Cache policy for the token
        operation_independent: Whether the token may be reused for other
            operations against the same registry
        expiration: Unix timestamp, required exactly when cache is EXPIRES
    """
    token: SecretStr
    cache: CacheControl = CacheControl.SESSION
    operation_independent: bool = True
    expiration: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.token, SecretStr):
            object.__setattr__(self, "token", SecretStr(self.token))

        if self.cache is CacheControl.EXPIRES and self.expiration is None:
            raise ContractViolationError("expiration is required when cache is EXPIRES")
        if self.cache is not CacheControl.EXPIRES and self.expiration is not None:
            raise ContractViolationError(
                f"expiration is only valid with EXPIRES, got cache={self.cache.value}"
            )


__all__ = [
    "CacheControl",
    "ActionKind",
    "Action",
    "RegistryInfo",
    "CredentialResponse",
]
