"""Host-facing value objects and classification enums.

Input models mirror the cart query the host sends; output models mirror
the function result it consumes. Discount values and targets are tagged
variants (discriminated on ``kind``) so new shapes slot in without
special-casing the decision stage.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DiscountApplicationStrategy(StrEnum):
    """How the host chooses among several eligible discounts."""

    FIRST = "FIRST"
    MAXIMUM = "MAXIMUM"
    ALL = "ALL"


class Outcome(StrEnum):
    """Terminal state reached by one pipeline run."""

    NO_ATTRIBUTE = "no_attribute"
    DECODE_FAILED = "decode_failed"
    DECRYPT_FAILED = "decrypt_failed"
    ENCODING_FAILED = "encoding_failed"
    PARSE_FAILED = "parse_failed"
    BELOW_THRESHOLD = "below_threshold"
    DISCOUNT_APPLIED = "discount_applied"


class _HostModel(BaseModel):
    """Frozen model serialized with the host's camelCase field names."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# --- Input ---


class CartAttribute(_HostModel):
    """A key/value annotation attached to the cart upstream."""

    key: str | None = None
    value: str | None = None


class Cart(_HostModel):
    attribute: CartAttribute | None = None


class RunInput(_HostModel):
    """Input handed over by the host for one cart evaluation.

    Unknown keys are ignored; a missing cart, attribute or value all
    mean the encrypted total is absent.
    """

    cart: Cart = Field(default_factory=Cart)

    @property
    def encoded_value(self) -> str | None:
        """The transport-encoded ciphertext, or None when absent."""
        if self.cart.attribute is None:
            return None
        return self.cart.attribute.value


# --- Output: discount value variants ---


class PercentageValue(_HostModel):
    kind: Literal["percentage"] = "percentage"
    value: float


class FixedAmountValue(_HostModel):
    kind: Literal["fixed_amount"] = "fixed_amount"
    amount: float
    applies_to_each_item: bool = False


DiscountValue = Annotated[PercentageValue | FixedAmountValue, Field(discriminator="kind")]


# --- Output: discount target variants ---


class OrderSubtotalTarget(_HostModel):
    kind: Literal["order_subtotal"] = "order_subtotal"
    excluded_variant_ids: tuple[str, ...] = ()


class ProductVariantTarget(_HostModel):
    kind: Literal["product_variant"] = "product_variant"
    id: str
    quantity: int | None = None


DiscountTarget = Annotated[
    OrderSubtotalTarget | ProductVariantTarget, Field(discriminator="kind")
]


class Discount(_HostModel):
    """One discount descriptor. Immutable once built."""

    value: DiscountValue
    targets: tuple[DiscountTarget, ...]
    message: str | None = None
    conditions: tuple[dict[str, Any], ...] = ()


class RunResult(_HostModel):
    """Result handed back to the host: zero or more discounts plus a strategy."""

    discounts: tuple[Discount, ...] = ()
    discount_application_strategy: DiscountApplicationStrategy = (
        DiscountApplicationStrategy.FIRST
    )


# --- Pipeline evaluation ---


class Failure(BaseModel):
    """Which stage failed and why. Present only on failed runs."""

    model_config = {"frozen": True}

    code: str
    stage: str
    message: str


class Evaluation(BaseModel):
    """Full account of one pipeline run.

    Attributes:
        result: What the host receives. Always well formed.
        outcome: Terminal state reached.
        amount: Decrypted total, when one was recovered.
        failure: Structured failure when a stage short-circuited.
    """

    model_config = {"frozen": True}

    result: RunResult = Field(default_factory=RunResult)
    outcome: Outcome
    amount: float | None = None
    failure: Failure | None = None
