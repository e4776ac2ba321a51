"""Settings for the reader and its logging."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import tomllib

from .store import MAX_SIZE_LIMIT, StrictPolicy


class LoggingConfig(BaseModel):
    """Logging configuration settings."""

    # Logging severity threshold (INFO/DEBUG/etc.).
    level: str = Field(default="WARNING", description="Logging level")
    # Emit JSON if True; otherwise emit a human-readable format.
    json_format: bool = Field(default=True, description="Emit JSON logs")
    # Optional file path for log output; if None, logs go to stderr.
    log_file: str | None = Field(default=None, description="Optional log file path")
    # Maximum size (bytes) before log rotation.
    max_bytes: int = Field(default=1_000_000, description="Max log file size before rotation")
    # Number of backup files to retain.
    backup_count: int = Field(default=3, description="Number of rotated log files to keep")


class ReaderConfig(BaseModel):
    """Parsing policy applied to new stores."""

    # Reject duplicate definitions instead of overwriting.
    strict: bool = Field(default=False, description="Start stores in strict mode")
    strict_scopes: bool = Field(default=True, description="Strict mode rejects redeclared scopes")
    strict_keys: bool = Field(default=True, description="Strict mode rejects reassigned keys")
    # May be lowered, never raised past the built-in ceiling.
    max_size_bytes: int = Field(
        default=MAX_SIZE_LIMIT,
        gt=0,
        le=MAX_SIZE_LIMIT,
        description="Largest config file accepted by read",
    )

    def policy(self) -> StrictPolicy:
        return StrictPolicy(scopes=self.strict_scopes, keys=self.strict_keys)


class ScopedConfigSettings(BaseSettings):
    """Configuration settings loaded from env or optional TOML."""

    # Environment keys use SCONF_ prefix and "__" nesting.
    model_config = SettingsConfigDict(env_prefix="SCONF_", env_nested_delimiter="__", extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    reader: ReaderConfig = Field(default_factory=ReaderConfig)

    @classmethod
    def from_toml(cls, path: str | Path) -> "ScopedConfigSettings":
        data = tomllib.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)
