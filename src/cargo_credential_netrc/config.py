"""Provider configuration.

The registry client passes the provider its configured arguments with every
request. There is exactly one: the token template.

    cargo-credential-netrc 'Bearer {{password}}'

Earlier releases took the template through a flag, as in
``["cargo-credential-netrc", "--format", "Bearer {{password}}"]``. That form
is rejected with a ConfigError; drop ``--format`` and pass the template
alone.
"""

import argparse
from typing import Sequence

from pydantic import BaseModel, ValidationError, field_validator

from .errors import ConfigError
from .version import PROVIDER_VERSION

PROG = "cargo-credential-netrc"
_REMOVED_FLAG = "--format"

_FORMAT_HELP = """\
Format of the credential token. Variables: {{login}}, {{account}},
{{password}}. Examples: '{{login}}:{{password}}', 'Bearer {{password}}'.
"""


class AdapterConfig(BaseModel):
    """Validated provider arguments."""

    template: str

    model_config = {"frozen": True}

    @field_validator('template')
    def validate_template(cls, v):
        if not v or not v.strip():
            raise ValueError("Token template cannot be empty")
        return v


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ConfigError instead of exiting."""

    def error(self, message):
        raise ConfigError(f"invalid provider arguments: {message}")


def build_parser(interactive: bool = True) -> ArgumentParser:
    """Build the argument parser.

    Args:
        interactive: Add --help and --version. Both print to stdout and exit,
            so they are left out when parsing arguments from a wire request.
    """
    parser = ArgumentParser(
        prog=PROG,
        description="Cargo credential provider that reads tokens from your .netrc file.",
        add_help=interactive,
    )
    if interactive:
        parser.add_argument(
            "-V", "--version",
            action="version",
            version=f"%(prog)s {PROVIDER_VERSION}",
        )
    parser.add_argument("format", metavar="FORMAT", help=_FORMAT_HELP)
    return parser


def parse_adapter_args(args: Sequence[str], interactive: bool = False) -> AdapterConfig:
    """Parse provider arguments into an AdapterConfig.

    Args:
        args: Arguments without the program name
        interactive: Honour --help and --version (see build_parser)

    Raises:
        ConfigError: If the arguments are missing, extra or invalid
    """
    if args and args[0].split("=", 1)[0] == _REMOVED_FLAG:
        raise ConfigError(
            f"invalid provider arguments: {_REMOVED_FLAG} is no longer accepted, "
            "pass the token template as the only argument"
        )
    namespace = build_parser(interactive).parse_args(list(args))
    try:
        return AdapterConfig(template=namespace.format)
    except ValidationError as e:
        raise ConfigError(
            f"invalid provider arguments: {e.errors()[0]['msg']}"
        ) from e


__all__ = [
    "PROG",
    "AdapterConfig",
    "ArgumentParser",
    "build_parser",
    "parse_adapter_args",
]
