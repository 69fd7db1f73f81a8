"""Shared pytest fixtures and test helpers for discountctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from discountctl.config.models import CryptoConfig
from discountctl.config.settings import DiscountSettings
from discountctl.services.discount import DiscountService
from discountctl.services.telemetry import _current_span, disable_telemetry
from tests.helpers import TEST_IV_HEX, TEST_KEY_HEX, Encrypt, encrypt_value


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient DISCOUNTCTL_* variables out of every test."""
    for name in list(os.environ):
        if name.startswith("DISCOUNTCTL_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None]:
    """Undo telemetry and logging changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    pkg = logging.getLogger("discountctl")
    pkg_level = pkg.level
    yield
    disable_telemetry()
    _current_span.set(None)
    root.handlers = handlers
    root.setLevel(level)
    pkg.setLevel(pkg_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def encrypt() -> Encrypt:
    """The test-key encryptor, for building cart attributes."""
    return encrypt_value


@pytest.fixture
def settings(tmp_path: Path) -> DiscountSettings:
    """Settings with the test key/IV and default rule."""
    return DiscountSettings.load(
        start_dir=tmp_path,
        crypto=CryptoConfig(key_hex=TEST_KEY_HEX, iv_hex=TEST_IV_HEX),
    )


@pytest.fixture
def service(settings: DiscountSettings) -> DiscountService:
    return DiscountService(settings)


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temp CWD holding a discountctl.toml with the test key/IV.

    Use via ``@pytest.mark.usefixtures("config_dir")`` on command test classes.
    """
    (tmp_path / "discountctl.toml").write_text(
        f'[crypto]\nkey_hex = "{TEST_KEY_HEX}"\niv_hex = "{TEST_IV_HEX}"\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path
