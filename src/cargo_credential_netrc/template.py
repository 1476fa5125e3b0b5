"""Token templates.

A template is literal text with ``{{name}}`` tags, e.g. ``Bearer {{password}}``
or ``{{login}}:{{password}}``. The grammar is deliberately tiny:

- ``{{ name }}`` inserts the entry field verbatim (whitespace inside the braces
  is ignored; ``{{{name}}}`` is accepted as a synonym)
- ``name`` must be one of ``login``, ``account``, ``password``
- everything else, including a lone ``}}``, is literal text

There is no escaping, no helpers, no conditionals. Errors point at the
offending tag by offset and never include entry values.
"""

import re
from dataclasses import dataclass
from typing import Optional

from pydantic import SecretStr

from .errors import InvalidTemplate
from .store import LoginEntry

VARIABLES = ("login", "account", "password")

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")


@dataclass(frozen=True)
class Segment:
    """Literal text, or a variable reference when ``variable`` is set."""
    text: str = ""
    variable: Optional[str] = None


@dataclass(frozen=True)
class TokenTemplate:
    """Compiled template; build with compile_template()."""
    source: str
    segments: tuple[Segment, ...]

    @property
    def referenced(self) -> frozenset[str]:
        """Variable names used by the template."""
        return frozenset(s.variable for s in self.segments if s.variable)

    def render(self, entry: LoginEntry) -> SecretStr:
        parts = []
        for segment in self.segments:
            if segment.variable is None:
                parts.append(segment.text)
            else:
                parts.append(getattr(entry, segment.variable).get_secret_value())
        return SecretStr("".join(parts))


def compile_template(source: str) -> TokenTemplate:
    """Parse a template into literal and variable segments.

    Raises:
        InvalidTemplate: If the template is empty, has an unterminated or
            empty tag, or references an unknown variable
    """
    if not source:
        raise InvalidTemplate("template is empty")

    segments = []
    pos = 0
    while True:
        start = source.find("{{", pos)
        if start == -1:
            if pos < len(source):
                segments.append(Segment(text=source[pos:]))
            break
        if start > pos:
            segments.append(Segment(text=source[pos:start]))

        opener, closer = ("{{{", "}}}") if source.startswith("{{{", start) else ("{{", "}}")
        end = source.find(closer, start + len(opener))
        if end == -1:
            raise InvalidTemplate(f"unterminated tag '{opener}' at offset {start}")

        name = source[start + len(opener):end].strip()
        if not name:
            raise InvalidTemplate(f"empty tag at offset {start}")
        if not _NAME_RE.match(name):
            raise InvalidTemplate(f"malformed tag at offset {start}")
        if name not in VARIABLES:
            raise InvalidTemplate(
                f"unknown variable '{name}' at offset {start} "
                f"(available: {', '.join(VARIABLES)})"
            )

        segments.append(Segment(variable=name))
        pos = end + len(closer)

    return TokenTemplate(source=source, segments=tuple(segments))


def render(template: str, entry: LoginEntry) -> SecretStr:
    """Compile ``template`` and render it against ``entry``."""
    return compile_template(template).render(entry)


__all__ = [
    "VARIABLES",
    "Segment",
    "TokenTemplate",
    "compile_template",
    "render",
]
