"""Payload parsing: decrypted bytes to a decimal amount.

Two steps, each with its own failure kind:
- bytes -> text (UTF-8), else :class:`EncodingError`
- text -> float (decimal literal), else :class:`ParseError`
"""

from __future__ import annotations

import re

from discountctl.errors import EncodingError, ParseError

# Optional sign, digits, optional fraction, optional exponent.
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

SPECIAL_PATTERN = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)


def decode_text(data: bytes) -> str:
    """Interpret decrypted bytes as UTF-8 text."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Decrypted payload is not valid UTF-8 ({exc.reason} at byte {exc.start})"
        raise EncodingError(msg) from exc


def is_decimal_literal(text: str) -> bool:
    """Check whether *text* is a plain decimal literal.

    Surrounding whitespace and ``_`` digit separators are rejected,
    even though :func:`float` would accept them.
    """
    return bool(DECIMAL_PATTERN.fullmatch(text) or SPECIAL_PATTERN.fullmatch(text))


def parse_amount(text: str) -> float:
    """Parse *text* as a decimal floating-point number."""
    if not is_decimal_literal(text):
        raise ParseError(f"Decrypted payload is not a decimal number: {text!r}")
    return float(text)
