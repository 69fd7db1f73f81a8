"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs (CLI flags passed by Click)
  2. Env vars (``DISCOUNTCTL_*`` prefix, ``__`` for nesting)
  3. TOML file (``discountctl.toml`` discovered via walk-up)
  4. Code defaults (baked into the section models)

Loaded once per process and shared read-only by every evaluation.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from discountctl.config.discovery import find_config
from discountctl.config.models import CryptoConfig, ThresholdRule


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``discountctl.toml`` file."""

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
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class DiscountSettings(BaseSettings):
    """Settings for the discount pipeline and its CLI.

    Attributes:
        config_path: TOML file the settings were read from, if any.
        crypto: Key and IV used to decrypt the cart attribute.
        rule: Threshold, percentage and message of the discount rule.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DISCOUNTCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    crypto: CryptoConfig = Field(default_factory=CryptoConfig)
    rule: ThresholdRule = Field(default_factory=ThresholdRule)

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
    def load(
        cls,
        *,
        config_path: str | None = None,
        start_dir: Path | None = None,
        **overrides: Any,
    ) -> DiscountSettings:
        """Build settings, discovering ``discountctl.toml`` unless *config_path* is given.

        *overrides* (CLI flags, or section models in tests) take
        priority over every other source.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start_dir)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
