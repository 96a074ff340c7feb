"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs : CLI flags passed by Click
  2. Env vars    : ``LAYERGROUPS_*`` prefix
  3. TOML file   : ``layergroups.toml`` (--config, LAYERGROUPS_CONFIG, or walk-up)
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` fed by
:func:`layergroups.config.discovery.locate_config`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from layergroups.config.discovery import ConfigNotFoundError, ConfigSource, locate_config
from layergroups.config.models import StyleConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the located ``layergroups.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class LayerGroupsSettings(BaseSettings):
    """Unified settings for the layergroups CLI.

    Attributes:
        root: Directory relative style paths resolve against (parent of
            ``layergroups.toml``, or CWD if no config found).
        config_path: The config file in use, or None.
        config_source: Which discovery source produced *config_path*.
        verbose: Log verbosity, one step per ``-v``.
        style_path: Explicit ``--style`` override of ``[style] path``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LAYERGROUPS_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    config_source: ConfigSource = ConfigSource.DEFAULT

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: int = Field(default=0, ge=0)
    log_json: bool = False
    style_path: Path | None = None

    # --- TOML sections ---
    style: StyleConfig = Field(default_factory=StyleConfig)

    @property
    def resolved_style_path(self) -> Path:
        """The style file to operate on, resolved against :attr:`root`."""
        path = self.style_path or self.style.path
        if path.is_absolute():
            return path
        return self.root / path

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

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> LayerGroupsSettings:
        """Construct settings from a CLI invocation.

        *root* is where the walk-up search starts; when omitted, relative
        style paths resolve against the located config file's directory
        (or CWD when no config is in use). Flags passed as None are
        dropped so they don't mask lower sources.
        """
        try:
            location = locate_config(config_path, start=root)
        except ConfigNotFoundError as exc:
            import click

            raise click.ClickException(str(exc)) from exc

        flags = {key: value for key, value in cli_flags.items() if value is not None}

        _tls.toml_path = location.path
        try:
            return cls(
                root=root if root is not None else location.root,
                config_path=location.path,
                config_source=location.source,
                **flags,
            )
        finally:
            _tls.toml_path = None
