"""Cargo credential-process protocol, version 1.

One JSON document per line. The provider speaks first::

    -> {"v":[1]}
    <- {"v":1,"registry":{"index-url":"sparse+https://example.com/index/"},
        "kind":"get","operation":"read","args":["Bearer {{password}}"]}
    -> {"Ok":{"kind":"get","token":"Bearer ...","cache":"session",
        "operation_independent":true}}

Requests keep coming until the client closes stdin. Failures are answered with
an ``{"Err": {...}}`` envelope; only the client-side variants not-found,
url-not-supported and operation-not-supported have their own kind, the rest
travel as ``other`` with a message and the chain of causes.
"""

import json
from typing import IO, List, Optional

import structlog
from pydantic import BaseModel, Field, ValidationError

from .adapter import CredentialProvider
from .errors import CredentialError, ProtocolError, UrlParseError
from .types import Action, ActionKind, CacheControl, CredentialResponse, RegistryInfo
from .version import PROTOCOL_VERSIONS

logger = structlog.get_logger(__name__)


class RegistryMessage(BaseModel):
    """``registry`` object of a request."""

    index_url: str = Field(alias="index-url")
    name: Optional[str] = None
    headers: List[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def to_registry_info(self) -> RegistryInfo:
        if not self.index_url.strip():
            raise UrlParseError("empty index URL")
        return RegistryInfo(index_url=self.index_url, name=self.name, headers=tuple(self.headers))


class RequestMessage(BaseModel):
    """A single request line. Fields this provider has no use for are ignored."""

    v: int
    registry: RegistryMessage
    kind: str
    operation: Optional[str] = None
    args: List[str] = Field(default_factory=list)

    def to_action(self) -> Action:
        return Action(kind=ActionKind.from_wire(self.kind), operation=self.operation)


class OkMessage(BaseModel):
    kind: str = "get"
    token: str
    cache: str
    operation_independent: bool
    expiration: Optional[int] = None


class ErrMessage(BaseModel):
    kind: str
    message: Optional[str] = None
    caused_by: Optional[List[str]] = Field(default=None, alias="caused-by")

    model_config = {"populate_by_name": True}


def hello() -> str:
    """First line written by the provider: the protocol versions it supports."""
    return json.dumps({"v": list(PROTOCOL_VERSIONS)}, separators=(",", ":"))


def decode_request(line: str) -> RequestMessage:
    """Parse and version-check one request line.

    Raises:
        ProtocolError: If the line is not a valid request for a supported version
    """
    try:
        request = RequestMessage.model_validate_json(line)
    except ValidationError as e:
        # Validation errors echo their input, which may contain headers
        raise ProtocolError(f"malformed request ({e.error_count()} invalid fields)") from None
    if request.v not in PROTOCOL_VERSIONS:
        raise ProtocolError(f"unsupported protocol version {request.v}")
    return request


def encode_response(response: CredentialResponse) -> str:
    body = OkMessage(
        token=response.token.get_secret_value(),
        cache=response.cache.value,
        operation_independent=response.operation_independent,
        expiration=response.expiration if response.cache is CacheControl.EXPIRES else None,
    )
    return json.dumps({"Ok": body.model_dump(exclude_none=True)}, separators=(",", ":"))


def _causes(error: BaseException) -> List[str]:
    causes = []
    cause = error.__cause__
    while cause is not None:
        causes.append(str(cause) or type(cause).__name__)
        cause = cause.__cause__
    return causes


def encode_error(error: CredentialError) -> str:
    if error.wire_kind == "other":
        body = ErrMessage(kind="other", message=str(error), caused_by=_causes(error) or None)
    else:
        body = ErrMessage(kind=error.wire_kind)
    return json.dumps(
        {"Err": body.model_dump(by_alias=True, exclude_none=True)},
        separators=(",", ":"),
    )


def handle(provider: CredentialProvider, request: RequestMessage) -> str:
    """Run one decoded request through the provider and encode the Ok reply.

    Raises:
        CredentialError: Propagated from the provider; serve() encodes it
    """
    response = provider.perform(request.registry.to_registry_info(), request.to_action(), request.args)
    return encode_response(response)


def serve(provider: CredentialProvider, stdin: IO[str], stdout: IO[str]) -> int:
    """Speak the protocol until stdin is closed.

    Returns:
        Exit status: 0 when every request succeeded, 1 when at least one
        ended in a CredentialError, 2 on a protocol failure
    """
    stdout.write(hello() + "\n")
    stdout.flush()

    failures = 0
    for line in stdin:
        if not line.strip():
            continue
        try:
            request = decode_request(line)
        except ProtocolError as e:
            logger.error("PROTOCOL_ERROR", error=str(e))
            stdout.write(encode_error(CredentialError(str(e))) + "\n")
            stdout.flush()
            return 2

        try:
            reply = handle(provider, request)
        except CredentialError as e:
            failures += 1
            logger.warning("REQUEST_FAILED", kind=e.kind, action=request.kind, error=str(e))
            reply = encode_error(e)
        else:
            logger.info("REQUEST_SUCCEEDED", action=request.kind, registry=request.registry.name)

        stdout.write(reply + "\n")
        stdout.flush()

    return 1 if failures else 0


__all__ = [
    "RegistryMessage",
    "RequestMessage",
    "OkMessage",
    "ErrMessage",
    "hello",
    "decode_request",
    "encode_response",
    "encode_error",
    "handle",
    "serve",
]
