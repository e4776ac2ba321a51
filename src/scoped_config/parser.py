"""Line parser for the scoped config format.

The format is TOML-like but deliberately flat::

    # comment
    ; comment too
    [scope]
    key = value
    [another scope]
    another key = another value

Each line is classified on its own; the only state carried between lines is
the name of the most recently declared scope.
"""

from __future__ import annotations

from dataclasses import dataclass
import enum

from .errors import LineError

COMMENT_MARKERS = ("#", ";")
# Shortest meaningful line is "a=b" or "[s]".
MIN_LINE_LENGTH = 3

# Applied in order; doubled backslashes collapse only after the letter escapes.
_ESCAPES = (
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ("\\\\", "\\"),
    ("\\'", "'"),
    ('\\"', '"'),
)


class LineKind(enum.Enum):
    IGNORE = "ignore"
    SCOPE = "scope"
    PAIR = "pair"


@dataclass(frozen=True)
class ParsedLine:
    """Outcome of parsing one raw line."""

    kind: LineKind
    scope: str | None = None
    key: str | None = None
    value: str | None = None


IGNORED = ParsedLine(kind=LineKind.IGNORE)


def unescape(value: str) -> str:
    """Resolve the supported backslash escapes in a value."""

    for escaped, literal in _ESCAPES:
        value = value.replace(escaped, literal)
    return value


def prepare_line(raw: str) -> str:
    """Trim a raw line; comments and blank lines become an empty string."""

    line = raw.strip()
    if not line or line.startswith(COMMENT_MARKERS):
        return ""
    return line


class LineParser:
    """Classify config lines while tracking the current scope."""

    def __init__(self) -> None:
        self._scope: str | None = None

    @property
    def current_scope(self) -> str | None:
        return self._scope

    def parse(self, raw: str) -> ParsedLine:
        line = prepare_line(raw)
        if not line:
            return IGNORED

        if len(line) < MIN_LINE_LENGTH:
            raise LineError("too short line")

        if line.startswith("[") and line.endswith("]"):
            name = line[1:-1].strip()
            if not name:
                raise LineError("invalid scope name")
            self._scope = name
            return ParsedLine(kind=LineKind.SCOPE, scope=name)

        if self._scope is None:
            raise LineError("expression without scope")

        key, sep, value = line.partition("=")
        if not sep:
            raise LineError("can not parse")

        key = key.strip()
        if not key:
            raise LineError("param name missed")

        value = value.strip()
        if not value:
            raise LineError("param value missed")

        return ParsedLine(kind=LineKind.PAIR, scope=self._scope, key=key, value=unescape(value))
