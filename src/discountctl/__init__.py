"""discountctl — minimum-spend discount rule over an encrypted cart total."""

__version__ = "0.1.0"
