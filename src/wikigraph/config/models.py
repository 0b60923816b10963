"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, wikigraph.toml only contains
overrides. A vault needs nothing more than ``[vault] path``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class VaultConfig(BaseModel):
    """[vault] section."""

    model_config = {"frozen": True}

    # Empty means "no collection configured"; every operation is then a no-op.
    path: str = ""
    extension: str = ".md"

    @field_validator("extension")
    @classmethod
    def _dotted(cls, value: str) -> str:
        if not value.startswith("."):
            return f".{value}"
        return value


class BacklinksConfig(BaseModel):
    """[backlinks] section."""

    model_config = {"frozen": True}

    context_max_chars: int = Field(default=100, ge=1)


class GraphConfig(BaseModel):
    """[graph] section."""

    model_config = {"frozen": True}

    include_unresolved: bool = False
