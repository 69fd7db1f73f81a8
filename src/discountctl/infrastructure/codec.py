"""Transport decoding: text-encoded ciphertext, key and IV to raw bytes.

- Ciphertext: standard base64, missing ``=`` padding tolerated.
- Key / IV: strict hexadecimal (even length, no whitespace).
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from discountctl.errors import DecodeError


@dataclass(frozen=True)
class TransportBuffers:
    """Raw buffers handed to the block decryptor."""

    ciphertext: bytes
    key: bytes
    iv: bytes


def decode_base64(text: str) -> bytes:
    """Decode standard-alphabet base64, restoring stripped padding."""
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.b64decode(padded, validate=True)
    except ValueError as exc:
        # binascii.Error for bad alphabet/length, ValueError for non-ASCII str
        raise DecodeError(f"Ciphertext is not valid base64: {exc}") from exc


def decode_hex(text: str, *, name: str = "value") -> bytes:
    """Decode strict hexadecimal; odd length or non-hex digits fail."""
    try:
        return binascii.unhexlify(text)
    except ValueError as exc:
        raise DecodeError(f"{name} is not valid hex: {exc}") from exc


def decode_transport(encoded: str, key_hex: str, iv_hex: str) -> TransportBuffers:
    """Decode all three pipeline inputs, failing on the first bad one."""
    return TransportBuffers(
        ciphertext=decode_base64(encoded),
        key=decode_hex(key_hex, name="key"),
        iv=decode_hex(iv_hex, name="iv"),
    )
