"""Error taxonomy for the decrypt-then-decide pipeline.

Every stage raises a subclass of :class:`DiscountPipelineError`. The
service layer catches them at the stage boundary and downgrades them
to "no discount".

INVARIANT: No pipeline error ever escapes ``DiscountService.evaluate``.
"""

from __future__ import annotations

from typing import ClassVar


class DiscountPipelineError(Exception):
    """Base class for all recoverable pipeline failures."""

    code: ClassVar[str] = "PIPELINE_ERROR"
    stage: ClassVar[str] = "pipeline"
    outcome: ClassVar[str] = "pipeline_failed"


class DecodeError(DiscountPipelineError):
    """Malformed base64 ciphertext or hex key/IV."""

    code = "DECODE_ERROR"
    stage = "decode"
    outcome = "decode_failed"


class CryptoError(DiscountPipelineError):
    """Wrong key/IV size, bad ciphertext length, or invalid padding."""

    code = "CRYPTO_ERROR"
    stage = "decrypt"
    outcome = "decrypt_failed"


class EncodingError(DiscountPipelineError):
    """Decrypted bytes are not valid UTF-8 text."""

    code = "ENCODING_ERROR"
    stage = "parse"
    outcome = "encoding_failed"


class ParseError(DiscountPipelineError):
    """Decrypted text is not a decimal number."""

    code = "PARSE_ERROR"
    stage = "parse"
    outcome = "parse_failed"
