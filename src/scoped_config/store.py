"""Scoped key/value store populated from config files.

A store owns one parse session: the scopes read so far, the list of files
they came from and the strict-mode policy. It performs no locking; wrap it in
:class:`scoped_config.sync.SynchronizedStore` when several threads share it.
"""

from __future__ import annotations

from dataclasses import dataclass
import enum
import logging
import math
import os
import re
from typing import Callable, TypeVar

from .errors import (
    ConfigIOError,
    ConfigLookupError,
    ConfigParseError,
    ConversionError,
    KeyNotFoundError,
    LineError,
    PreconditionError,
    ScopeNotFoundError,
    SizeLimitError,
)
from .models import ScopeModel, StoreSnapshot
from .parser import LineKind, LineParser, ParsedLine, prepare_line

MAX_SIZE_LIMIT = 16 * 1024 * 1024
SNIPPET_LENGTH = 16

# Case-insensitive; every other value reads as true.
FALSY_VALUES = frozenset({"0", "no", "f", "false", "none", "never", "negative"})

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_LEGACY_OCTAL = re.compile(r"[+-]?0[0-7]+")

T = TypeVar("T")


class _Missing(enum.Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing.MISSING


@dataclass(frozen=True)
class StrictPolicy:
    """Duplicate checks enforced while strict mode is enabled."""

    scopes: bool = True
    keys: bool = True


def _require_plain(text: str) -> None:
    # int() and float() also take padding and non-ASCII digits.
    if not text.isascii() or text != text.strip():
        raise ValueError(f"{text!r} is not a plain ASCII number")


def parse_int(text: str) -> int:
    """Parse a signed 64-bit integer with an optional base prefix."""

    _require_plain(text)
    try:
        number = int(text, 0)
    except ValueError:
        # int(..., 0) refuses C-style "017"; treat it as octal.
        if not _LEGACY_OCTAL.fullmatch(text):
            raise
        number = int(text, 8)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueError(f"{text!r} is out of 64-bit integer range")
    return number


def parse_float(text: str) -> float:
    """Parse a double, rejecting finite literals that overflow."""

    _require_plain(text)
    number = float(text)
    if math.isinf(number) and "inf" not in text.lower():
        raise ValueError(f"{text!r} is out of float range")
    return number


def parse_bool(text: str) -> bool:
    return text.lower() not in FALSY_VALUES


class ScopedStore:
    """Two-level scope -> key -> value store with typed accessors."""

    def __init__(
        self,
        strict: bool = False,
        policy: StrictPolicy | None = None,
        size_limit: int = MAX_SIZE_LIMIT,
        logger: logging.Logger | None = None,
    ) -> None:
        self._scopes: dict[str, dict[str, str]] = {}
        self._sources: list[str] = []
        # Current scope survives between reads until clear().
        self._parser = LineParser()
        self._strict = strict
        self._policy = policy or StrictPolicy()
        self._size_limit = MAX_SIZE_LIMIT
        self._logger = logger or logging.getLogger(__name__)
        self.set_size_limit(size_limit)

    def __contains__(self, scope: object) -> bool:
        return scope in self._scopes

    def __len__(self) -> int:
        return len(self._scopes)

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def policy(self) -> StrictPolicy:
        return self._policy

    @property
    def size_limit(self) -> int:
        return self._size_limit

    @property
    def provenance(self) -> tuple[str, ...]:
        return tuple(self._sources)

    def clear(self) -> None:
        """Forget all scopes and read files; start a fresh session."""

        self._scopes.clear()
        self._sources.clear()
        self._parser = LineParser()
        self._logger.debug("config_cleared")

    def toggle_strict_mode(self) -> bool:
        """Flip strict mode and return the previous state."""

        previous = self._strict
        self._strict = not previous
        self._logger.debug("strict_mode_toggled", extra={"strict": self._strict})
        return previous

    def set_size_limit(self, limit: int) -> None:
        """Lower (or restore) the maximum accepted file size in bytes."""

        if limit <= 0:
            raise PreconditionError(f"size limit must be positive, got {limit}")
        if limit > MAX_SIZE_LIMIT:
            raise PreconditionError(f"size limit can not exceed {MAX_SIZE_LIMIT} bytes, got {limit}")
        self._size_limit = limit

    def read(self, path: str | os.PathLike[str]) -> None:
        """Parse a config file into the store.

        The first bad line aborts the read. Pairs applied before that line
        stay in the store.
        """

        name = os.fspath(path)
        if not name:
            raise ConfigIOError("config path is empty")
        try:
            size = os.stat(name).st_size
        except OSError as exc:
            raise ConfigIOError(f"{name}: {exc.strerror or exc}") from exc
        if size > self._size_limit:
            raise SizeLimitError(name, size, self._size_limit)

        try:
            handle = open(name, "rb")
        except OSError as exc:
            raise ConfigIOError(f"{name}: {exc.strerror or exc}") from exc

        with handle:
            line_no = 0
            for line_no, data in enumerate(handle, start=1):
                try:
                    raw = data.decode("utf-8")
                except UnicodeDecodeError as exc:
                    raise ConfigIOError(f"{name}: line {line_no}: not valid UTF-8") from exc
                try:
                    self._apply(self._parser.parse(raw))
                except LineError as exc:
                    snippet = prepare_line(raw)[:SNIPPET_LENGTH]
                    raise ConfigParseError(name, line_no, snippet, exc.reason) from exc

        self._sources.append(name)
        self._logger.debug(
            "config_read",
            extra={"path": name, "lines": line_no, "scopes": len(self._scopes)},
        )

    def _apply(self, parsed: ParsedLine) -> None:
        if parsed.kind is LineKind.SCOPE:
            self._declare_scope(parsed.scope)
        elif parsed.kind is LineKind.PAIR:
            self._set(parsed.scope, parsed.key, parsed.value)

    def _declare_scope(self, scope: str) -> None:
        if scope not in self._scopes:
            self._scopes[scope] = {}
            return
        if self._strict and self._policy.scopes:
            raise LineError("duplicate scope name")
        self._logger.debug("scope_merged", extra={"scope": scope})

    def _set(self, scope: str, key: str, value: str) -> None:
        pairs = self._scopes.setdefault(scope, {})
        if key in pairs:
            if self._strict and self._policy.keys:
                raise LineError("duplicate key")
            self._logger.debug("key_overridden", extra={"scope": scope, "key": key})
        pairs[key] = value

    def scopes(self) -> list[str]:
        return list(self._scopes)

    def raw(self, scope: str, key: str) -> str:
        """Return the stored string, telling a missing scope from a missing key."""

        pairs = self._scopes.get(scope)
        if pairs is None:
            raise ScopeNotFoundError(scope)
        try:
            return pairs[key]
        except KeyError:
            raise KeyNotFoundError(scope, key) from None

    def _get(
        self,
        scope: str,
        key: str,
        default: T | None | _Missing,
        convert: Callable[[str], T],
        target: str,
    ) -> T | None:
        try:
            value = self.raw(scope, key)
        except ConfigLookupError:
            if default is MISSING:
                raise
            return default
        try:
            return convert(value)
        except ValueError as exc:
            raise ConversionError(scope, key, value, target) from exc

    def get_str(self, scope: str, key: str, default: str | None | _Missing = MISSING) -> str | None:
        return self._get(scope, key, default, str, "string")

    def get_int(self, scope: str, key: str, default: int | None | _Missing = MISSING) -> int | None:
        return self._get(scope, key, default, parse_int, "integer")

    def get_float(self, scope: str, key: str, default: float | None | _Missing = MISSING) -> float | None:
        return self._get(scope, key, default, parse_float, "float")

    def get_bool(self, scope: str, key: str, default: bool | None | _Missing = MISSING) -> bool | None:
        """Return a permissive boolean: only :data:`FALSY_VALUES` read as false."""

        return self._get(scope, key, default, parse_bool, "boolean")

    def render(self) -> str:
        """Render the store in config file format, headed by the read files."""

        lines = ["# Generated dump of:"]
        lines.extend(f"# {source}" for source in self._sources)
        lines.append("")
        for scope, pairs in self._scopes.items():
            lines.append(f"[{scope}]")
            # Values are written as stored; control characters are not re-escaped.
            lines.extend(f"  {key} = {value}" for key, value in pairs.items())
        return "\n".join(lines) + "\n"

    def dump(self, path: str | os.PathLike[str]) -> None:
        """Write the current store to ``path``."""

        if not self._sources:
            raise PreconditionError("nothing to dump: no config file has been read")
        name = os.fspath(path)
        try:
            with open(name, "w", encoding="utf-8") as handle:
                handle.write(self.render())
        except OSError as exc:
            raise ConfigIOError(f"{name}: {exc.strerror or exc}") from exc
        self._logger.debug("config_dumped", extra={"path": name, "scopes": len(self._scopes)})

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            scopes=[ScopeModel(name=name, values=dict(pairs)) for name, pairs in self._scopes.items()],
            sources=list(self._sources),
            strict=self._strict,
        )
