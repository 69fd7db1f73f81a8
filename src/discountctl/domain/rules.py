"""Threshold decision: map a recovered amount to a discount.

The rule is total over its input. A missing amount, NaN, or an amount
at or below the threshold yields no discount; anything strictly above
yields exactly one percentage discount on the order subtotal.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from discountctl.domain.types import (
    Discount,
    DiscountApplicationStrategy,
    OrderSubtotalTarget,
    PercentageValue,
    RunResult,
)

DEFAULT_THRESHOLD = 2000.0
DEFAULT_PERCENTAGE = 10.0
DEFAULT_MESSAGE = "Minimum spend"


class ThresholdRule(BaseModel):
    """Minimum-spend rule, also the ``[rule]`` config section."""

    model_config = {"frozen": True}

    threshold: float = Field(default=DEFAULT_THRESHOLD, allow_inf_nan=False)
    percentage: float = Field(default=DEFAULT_PERCENTAGE, gt=0, le=100)
    message: str = DEFAULT_MESSAGE

    def applies(self, amount: float | None) -> bool:
        """True when *amount* is present and strictly above the threshold."""
        return amount is not None and amount > self.threshold

    def discount(self) -> Discount:
        """The descriptor emitted when the rule applies."""
        return Discount(
            value=PercentageValue(value=self.percentage),
            targets=(OrderSubtotalTarget(excluded_variant_ids=()),),
            message=self.message,
            conditions=(),
        )


def decide(amount: float | None, rule: ThresholdRule) -> tuple[Discount, ...]:
    """Return the discounts earned by *amount* under *rule* (zero or one)."""
    if rule.applies(amount):
        return (rule.discount(),)
    return ()


def build_result(discounts: tuple[Discount, ...] = ()) -> RunResult:
    """Wrap *discounts* in a RunResult with the first-match strategy."""
    return RunResult(
        discounts=discounts,
        discount_application_strategy=DiscountApplicationStrategy.FIRST,
    )
