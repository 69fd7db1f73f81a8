"""Domain layer — host value objects, payload parsing, discount rules.

This layer depends only on stdlib, pydantic and :mod:`discountctl.errors`.
It must never import from services, infrastructure, commands, or config.
"""
