"""AES-128-CBC decryption with PKCS#7 padding removal.

Built on ``cryptography``'s hazmat primitives. Preconditions are checked
up front so every failure surfaces as :class:`CryptoError`, never as a
library-specific exception.
"""

from __future__ import annotations

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from discountctl.errors import CryptoError

BLOCK_SIZE = 16
KEY_SIZE = 16


def decrypt_aes_128_cbc(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    """Decrypt *ciphertext* and strip its PKCS#7 padding.

    Raises:
        CryptoError: wrong key or IV length, ciphertext not a whole
            number of blocks, or invalid padding (wrong key / tampering).
    """
    if len(key) != KEY_SIZE:
        raise CryptoError(f"Key must be {KEY_SIZE} bytes, got {len(key)}")
    if len(iv) != BLOCK_SIZE:
        raise CryptoError(f"IV must be {BLOCK_SIZE} bytes, got {len(iv)}")
    if not ciphertext or len(ciphertext) % BLOCK_SIZE:
        msg = f"Ciphertext length {len(ciphertext)} is not a positive multiple of {BLOCK_SIZE}"
        raise CryptoError(msg)

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()

    unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
    try:
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise CryptoError("Invalid padding (wrong key or corrupted ciphertext)") from exc
