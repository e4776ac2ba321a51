"""Pydantic models for store snapshots."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScopeModel(BaseModel):
    """One scope and its key/value pairs."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    values: dict[str, str] = Field(default_factory=dict)

    @field_validator("values")
    @classmethod
    def _keys_not_empty(cls, values: dict[str, str]) -> dict[str, str]:
        if any(not key for key in values):
            raise ValueError("keys must be non-empty")
        return values


class StoreSnapshot(BaseModel):
    """Read-only view of a store, serialisable to JSON."""

    model_config = ConfigDict(extra="forbid")

    scopes: list[ScopeModel] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    strict: bool = False

    def scope(self, name: str) -> ScopeModel | None:
        for scope in self.scopes:
            if scope.name == name:
                return scope
        return None
