"""Test-side encryption helpers.

The package only ever decrypts; these mirror what the upstream checkout
extension attaches to the cart.
"""

from __future__ import annotations

import base64
from collections.abc import Callable

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

TEST_KEY_HEX = "000102030405060708090a0b0c0d0e0f"
TEST_IV_HEX = "f0e0d0c0b0a090807060504030201000"

# Signature of the `encrypt` fixture.
Encrypt = Callable[..., str]


def encrypt_bytes(
    plaintext: str | bytes,
    key_hex: str = TEST_KEY_HEX,
    iv_hex: str = TEST_IV_HEX,
    *,
    pad: bool = True,
) -> bytes:
    """AES-128-CBC encrypt *plaintext*; PKCS#7-padded unless ``pad=False``."""
    data = plaintext.encode("utf-8") if isinstance(plaintext, str) else plaintext
    if pad:
        padder = padding.PKCS7(128).padder()
        data = padder.update(data) + padder.finalize()
    encryptor = Cipher(
        algorithms.AES(bytes.fromhex(key_hex)), modes.CBC(bytes.fromhex(iv_hex))
    ).encryptor()
    return encryptor.update(data) + encryptor.finalize()


def encrypt_value(
    plaintext: str | bytes,
    key_hex: str = TEST_KEY_HEX,
    iv_hex: str = TEST_IV_HEX,
) -> str:
    """Encrypt *plaintext* and base64 it, ready to use as the cart attribute."""
    return base64.b64encode(encrypt_bytes(plaintext, key_hex, iv_hex)).decode("ascii")
