"""DiscountService — the decrypt-then-decide pipeline.

Stages run strictly in order: decode -> decrypt -> parse -> decide.
Any stage may short-circuit to "no discount"; the failure is recorded
on the returned :class:`Evaluation` and logged, never raised.

INVARIANT: ``evaluate`` and ``run`` always return a well-formed RunResult
with the FIRST application strategy.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from discountctl.domain.payload import decode_text, parse_amount
from discountctl.domain.rules import build_result, decide
from discountctl.domain.types import Evaluation, Failure, Outcome, RunInput, RunResult
from discountctl.errors import DecodeError, DiscountPipelineError
from discountctl.infrastructure.cipher import BLOCK_SIZE, KEY_SIZE, decrypt_aes_128_cbc
from discountctl.infrastructure.codec import decode_hex, decode_transport
from discountctl.services.base import BaseService
from discountctl.services.result import ServiceError, ServiceResult
from discountctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from discountctl.config.settings import DiscountSettings

logger = logging.getLogger(__name__)


class DiscountService(BaseService):
    """Evaluate the minimum-spend rule against an encrypted cart total."""

    # ── Pipeline ─────────────────────────────────────────────────────

    def recover(self, encoded: str) -> tuple[str, float]:
        """Decode, decrypt and parse *encoded* into ``(plaintext, amount)``.

        Raises:
            DiscountPipelineError: from whichever stage failed first.
        """
        with trace_span("decode"):
            buffers = decode_transport(encoded, self.key_hex, self.iv_hex)
        with trace_span("decrypt") as span:
            plaintext = decrypt_aes_128_cbc(buffers.ciphertext, buffers.key, buffers.iv)
            if span is not None:
                span.annotate("ciphertext_bytes", len(buffers.ciphertext))
        with trace_span("parse"):
            text = decode_text(plaintext)
            logger.info("discount.decrypted_value", extra={"value": text})
            return text, parse_amount(text)

    def evaluate(self, run_input: RunInput) -> Evaluation:
        """Run the full pipeline. Never raises a pipeline error."""
        encoded = run_input.encoded_value
        logger.info("discount.encrypted_value", extra={"value": encoded})
        if encoded is None:
            logger.info("discount.attribute_missing")
            return Evaluation(result=build_result(), outcome=Outcome.NO_ATTRIBUTE)

        try:
            _, amount = self.recover(encoded)
        except DiscountPipelineError as exc:
            logger.info(
                "discount.stage_failed",
                extra={"stage": exc.stage, "code": exc.code, "error": str(exc)},
            )
            return Evaluation(
                result=build_result(),
                outcome=Outcome(exc.outcome),
                failure=Failure(code=exc.code, stage=exc.stage, message=str(exc)),
            )

        with trace_span("decide"):
            discounts = decide(amount, self._settings.rule)
        outcome = Outcome.DISCOUNT_APPLIED if discounts else Outcome.BELOW_THRESHOLD
        logger.info(
            "discount.decision",
            extra={
                "amount": amount,
                "threshold": self._settings.rule.threshold,
                "outcome": outcome.value,
            },
        )
        return Evaluation(result=build_result(discounts), outcome=outcome, amount=amount)

    # ── Service operations ───────────────────────────────────────────

    @traced
    def run(self, run_input: RunInput) -> ServiceResult:
        """Evaluate one cart. Always ``ok``; stage failures become warnings."""
        evaluation = self.evaluate(run_input)
        warnings: list[str] = []
        if evaluation.failure is not None:
            warnings.append(f"{evaluation.failure.code}: {evaluation.failure.message}")
        return ServiceResult(
            ok=True,
            op="run",
            data=_evaluation_payload(evaluation),
            warnings=warnings,
        )

    def run_json(self, raw: str | bytes) -> ServiceResult:
        """Parse host input JSON, then :meth:`run` it."""
        try:
            run_input = RunInput.model_validate_json(raw)
        except ValidationError as exc:
            return ServiceResult(
                ok=False,
                op="run",
                error=ServiceError(
                    code="INVALID_INPUT",
                    message="Input is not a valid cart payload",
                    detail={"errors": exc.errors(include_url=False, include_context=False)},
                ),
            )
        return self.run(run_input)

    @traced
    def decrypt(self, encoded: str) -> ServiceResult:
        """Recover one encrypted value without applying the rule."""
        try:
            text, amount = self.recover(encoded)
        except DiscountPipelineError as exc:
            return ServiceResult(
                ok=False,
                op="decrypt",
                error=ServiceError(code=exc.code, message=str(exc), detail={"stage": exc.stage}),
            )
        return ServiceResult(
            ok=True,
            op="decrypt",
            data={"plaintext": text, "amount": amount},
        )

    @traced
    def check_config(self) -> ServiceResult:
        """Validate key/IV encoding and length before serving traffic."""
        issues: list[str] = []
        sizes: dict[str, int] = {}
        for name, value, expected in (
            ("crypto.key_hex", self.key_hex, KEY_SIZE),
            ("crypto.iv_hex", self.iv_hex, BLOCK_SIZE),
        ):
            if not value:
                issues.append(f"{name} is not set")
                continue
            try:
                sizes[name] = len(decode_hex(value, name=name))
            except DecodeError as exc:
                issues.append(str(exc))
                continue
            if sizes[name] != expected:
                issues.append(f"{name} must decode to {expected} bytes, got {sizes[name]}")

        if issues:
            return ServiceResult(
                ok=False,
                op="check",
                error=ServiceError(
                    code="INVALID_CONFIG",
                    message=f"{len(issues)} configuration issue(s)",
                    detail={"issues": issues},
                ),
            )

        rule = self._settings.rule
        config_path = self._settings.config_path
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "config_path": str(config_path) if config_path else None,
                "key_bytes": sizes["crypto.key_hex"],
                "iv_bytes": sizes["crypto.iv_hex"],
                "threshold": rule.threshold,
                "percentage": rule.percentage,
                "message": rule.message,
            },
        )


def _evaluation_payload(evaluation: Evaluation) -> dict[str, Any]:
    return {
        "result": evaluation.result.model_dump(mode="json", by_alias=True),
        "outcome": evaluation.outcome.value,
        "amount": evaluation.amount,
        "failure": evaluation.failure.model_dump() if evaluation.failure else None,
    }


def run(run_input: RunInput | dict[str, Any], settings: DiscountSettings) -> RunResult:
    """Host entry point: evaluate one cart and return only the RunResult.

    A dict that does not match the cart shape yields no discount.
    """
    if isinstance(run_input, dict):
        try:
            run_input = RunInput.model_validate(run_input)
        except ValidationError as exc:
            logger.warning("discount.invalid_input", extra={"errors": exc.error_count()})
            return build_result()
    return DiscountService(settings).evaluate(run_input).result
