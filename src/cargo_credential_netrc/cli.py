"""Console entry point.

Cargo launches the provider as ``cargo-credential-netrc --cargo-plugin`` and
talks to it over stdin/stdout. Run by hand, the program only validates its
arguments and explains how to hook it up.
"""

import sys
from typing import IO, List, Optional

from .adapter import NetrcCredential
from .config import PROG, parse_adapter_args
from .errors import CredentialError
from .log import configure_logging
from .protocol import serve
from .template import compile_template

PLUGIN_FLAG = "--cargo-plugin"

_USAGE_NOTICE = """\
{prog} is a Cargo credential provider and is started by Cargo itself.
Configure it in .cargo/config.toml, for example:

    [registries.my-registry]
    index = "sparse+https://my-registry.example.com/index/"
    credential-provider = ["{prog}", "Bearer {{{{password}}}}"]

The template is the only argument. The older
["{prog}", "--format", "..."] form is no longer accepted.
"""


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[IO[str]] = None,
    stdout: Optional[IO[str]] = None,
) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    configure_logging()

    if PLUGIN_FLAG in argv:
        return serve(NetrcCredential(), stdin or sys.stdin, stdout or sys.stdout)

    try:
        config = parse_adapter_args(argv, interactive=True)
        compile_template(config.template)
    except CredentialError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(_USAGE_NOTICE.format(prog=PROG), file=sys.stderr)
    return 1


def run() -> None:
    sys.exit(main())


__all__ = ["PLUGIN_FLAG", "main", "run"]
