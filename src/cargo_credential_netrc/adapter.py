"""Credential provider that answers get requests from the user's netrc file.

Each call to ``perform`` is independent: it parses the provider arguments,
reads the login database and renders the token from scratch. Nothing is kept
between requests.
"""

from pathlib import Path
from typing import Optional, Protocol, Sequence, Union, runtime_checkable

import structlog

from .config import parse_adapter_args
from .errors import NotFound, OperationNotSupported
from .host import resolve_host
from .store import default_netrc_path, load_login_database
from .template import compile_template
from .types import Action, ActionKind, CacheControl, CredentialResponse, RegistryInfo

logger = structlog.get_logger(__name__)


@runtime_checkable
class CredentialProvider(Protocol):
    """Port the wire protocol drives; one call per request."""

    def perform(
        self,
        registry: RegistryInfo,
        action: Action,
        args: Sequence[str],
    ) -> CredentialResponse:
        """Handle one request.

        Args:
            registry: Registry the request is for
            action: Requested action
            args: Provider arguments from the client's configuration

        Returns:
            CredentialResponse for a successful get

        Raises:
            CredentialError: On any failure; no partial response is returned
        """
        ...


class NetrcCredential:
    """Read-only provider backed by a netrc login database."""

    def __init__(self, netrc_path: Optional[Union[str, Path]] = None):
        """
        Args:
            netrc_path: Login database to read; resolved per request with
                default_netrc_path() when omitted
        """
        self.netrc_path = Path(netrc_path) if netrc_path is not None else None

    def perform(
        self,
        registry: RegistryInfo,
        action: Action,
        args: Sequence[str],
    ) -> CredentialResponse:
        config = parse_adapter_args(args)

        if action.kind is not ActionKind.GET:
            # Store, erase and anything newer: this provider never writes
            raise OperationNotSupported(
                f"operation '{action.kind.value}' is not supported by the netrc provider"
            )

        return self._get(registry, config.template, action.operation)

    def _get(self, registry: RegistryInfo, template: str, operation: Optional[str]) -> CredentialResponse:
        host = resolve_host(registry.index_url)
        logger.debug("HOST_RESOLVED", registry=registry.name, host=host, operation=operation)

        database = load_login_database(self.netrc_path or default_netrc_path())
        entry = database.lookup(host)
        if entry is None:
            raise NotFound(f"no entry for host {host} in {database.path}")

        compiled = compile_template(template)
        token = compiled.render(entry)
        logger.debug("TOKEN_RENDERED", host=host, variables=sorted(compiled.referenced))

        return CredentialResponse(
            token=token,
            cache=CacheControl.SESSION,
            operation_independent=True,
        )


__all__ = ["CredentialProvider", "NetrcCredential"]
