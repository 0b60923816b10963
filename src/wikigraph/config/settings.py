"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``WIKIGRAPH_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``wikigraph.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource`.
"""

from __future__ import annotations

import logging
import os
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from wikigraph.config.models import BacklinksConfig, GraphConfig, VaultConfig

CONFIG_FILENAME = "wikigraph.toml"
CONFIG_ENV_VAR = "WIKIGRAPH_CONFIG"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``wikigraph.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the TOML path during construction.
_tls = threading.local()


class WikigraphSettings(BaseSettings):
    """Unified settings for the wikigraph CLI.

    Attributes:
        vault_root: Absolute vault directory, or None when no vault is
            configured. Settable through ``WIKIGRAPH_VAULT_ROOT``; resolved
            by :meth:`from_cli`.
        config_path: The TOML file in effect, if any.
        log_levels: Per-logger level overrides, e.g.
            ``{"wikigraph.infrastructure.filesystem": "DEBUG"}``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "WIKIGRAPH_",
        "env_nested_delimiter": "__",
    }

    vault_root: Path | None = None
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    vault: VaultConfig = Field(default_factory=VaultConfig)
    backlinks: BacklinksConfig = Field(default_factory=BacklinksConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
    log_levels: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @field_validator("log_levels")
    @classmethod
    def _known_levels(cls, value: dict[str, str]) -> dict[str, str]:
        known = logging.getLevelNamesMapping()
        levels = {name: level.upper() for name, level in value.items()}
        unknown = sorted(level for level in levels.values() if level not in known)
        if unknown:
            msg = f"Unknown log level(s): {', '.join(unknown)}"
            raise ValueError(msg)
        return levels

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        vault_path: str | Path | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> WikigraphSettings:
        """Construct settings from a CLI invocation.

        The vault root is the first of: *vault_path* (``--vault``),
        ``WIKIGRAPH_VAULT_ROOT``, ``[vault] path``. A relative TOML path is
        taken relative to the directory holding the config file.
        """
        toml_path = locate_config(config_path, start)

        _tls.toml_path = toml_path
        try:
            settings = cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

        if vault_path:
            root: Path | None = Path(vault_path).expanduser().resolve()
        elif settings.vault_root is not None:
            root = settings.vault_root.expanduser().resolve()
        elif settings.vault.path:
            base = toml_path.parent if toml_path else Path.cwd()
            root = (base / Path(settings.vault.path).expanduser()).resolve()
        else:
            root = None
        return settings.model_copy(update={"vault_root": root})


def locate_config(config_path: str | None = None, start: Path | None = None) -> Path | None:
    """Pick the ``wikigraph.toml`` in effect.

    An explicit file (``--config``, then ``WIKIGRAPH_CONFIG``) must exist.
    Otherwise the nearest ``wikigraph.toml`` in *start* (default: cwd) or
    one of its parents is used, or None when there is none.
    """
    explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_file():
            msg = f"Config file not found: {path}"
            raise click.ClickException(msg)
        return path

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
