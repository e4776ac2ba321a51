"""Exception hierarchy for config reading and lookups."""

from __future__ import annotations


class ScopedConfigError(Exception):
    """Base class for every error raised by this package."""


class ConfigIOError(ScopedConfigError, OSError):
    """Config file could not be opened, inspected or written."""


class SizeLimitError(ConfigIOError):
    """Config file is larger than the configured size limit."""

    def __init__(self, path: str, size: int, limit: int) -> None:
        super().__init__(f"{path}: file size {size} exceeds limit of {limit} bytes")
        self.path = path
        self.size = size
        self.limit = limit


class LineError(ScopedConfigError, ValueError):
    """A single line could not be parsed or applied."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ConfigParseError(ScopedConfigError, ValueError):
    """Parse failure with file and line context."""

    def __init__(self, path: str, line_no: int, snippet: str, reason: str) -> None:
        super().__init__(f"{path}: line {line_no}: {reason} (near '{snippet} ...')")
        self.path = path
        self.line_no = line_no
        self.snippet = snippet
        self.reason = reason


class ConfigLookupError(ScopedConfigError, LookupError):
    """Requested scope or key is not present in the store."""


class ScopeNotFoundError(ConfigLookupError):
    def __init__(self, scope: str) -> None:
        super().__init__(f"scope '{scope}' is not found")
        self.scope = scope


class KeyNotFoundError(ConfigLookupError):
    def __init__(self, scope: str, key: str) -> None:
        super().__init__(f"key '{key}' is not found in scope '{scope}'")
        self.scope = scope
        self.key = key


class ConversionError(ScopedConfigError, ValueError):
    """Stored value cannot be converted to the requested type."""

    def __init__(self, scope: str, key: str, value: str, target: str) -> None:
        super().__init__(f"value '{value}' of '{scope}.{key}' is not a valid {target}")
        self.scope = scope
        self.key = key
        self.value = value
        self.target = target


class PreconditionError(ScopedConfigError, RuntimeError):
    """Operation is not allowed in the current store state."""
