"""ServiceResult and ServiceError — the service-layer envelope.

INVARIANT: All service-layer methods return ServiceResult.
The CLI consumes this type; the host-facing ``run()`` unwraps it to a
plain RunResult.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded. A pipeline run that ends in
            "no discount" because a stage failed is still ``ok``.
        op: Name of the operation (e.g. ``"run"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, including short-circuited stages.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
