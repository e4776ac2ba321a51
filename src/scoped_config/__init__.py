"""Top-level package for the scoped config file reader."""

from .api import build_store, load, load_shared
from .config import LoggingConfig, ReaderConfig, ScopedConfigSettings
from .errors import (
    ConfigIOError,
    ConfigLookupError,
    ConfigParseError,
    ConversionError,
    KeyNotFoundError,
    LineError,
    PreconditionError,
    ScopeNotFoundError,
    ScopedConfigError,
    SizeLimitError,
)
from .logging_utils import JsonFormatter, configure_logging
from .models import ScopeModel, StoreSnapshot
from .parser import LineKind, LineParser, ParsedLine, unescape
from .store import FALSY_VALUES, MAX_SIZE_LIMIT, MISSING, ScopedStore, StrictPolicy
from .sync import SynchronizedStore

__all__ = [
    "build_store",
    "load",
    "load_shared",
    "LoggingConfig",
    "ReaderConfig",
    "ScopedConfigSettings",
    "ConfigIOError",
    "ConfigLookupError",
    "ConfigParseError",
    "ConversionError",
    "KeyNotFoundError",
    "LineError",
    "PreconditionError",
    "ScopeNotFoundError",
    "ScopedConfigError",
    "SizeLimitError",
    "JsonFormatter",
    "configure_logging",
    "ScopeModel",
    "StoreSnapshot",
    "LineKind",
    "LineParser",
    "ParsedLine",
    "unescape",
    "FALSY_VALUES",
    "MAX_SIZE_LIMIT",
    "MISSING",
    "ScopedStore",
    "StrictPolicy",
    "SynchronizedStore",
]
