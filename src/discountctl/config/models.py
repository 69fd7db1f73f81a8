"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, discountctl.toml only contains
overrides. Secrets have no usable default and must be injected through
the TOML file or ``DISCOUNTCTL_CRYPTO__*`` environment variables.
"""

from __future__ import annotations

from pydantic import BaseModel, SecretStr

from discountctl.domain.rules import ThresholdRule

__all__ = ["CryptoConfig", "ThresholdRule"]


class CryptoConfig(BaseModel):
    """[crypto] section: hex-encoded AES-128 key and IV."""

    model_config = {"frozen": True}

    key_hex: SecretStr = SecretStr("")
    iv_hex: SecretStr = SecretStr("")
