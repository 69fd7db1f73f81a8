"""Tests for host input/output value objects."""

import json

import pytest
from pydantic import ValidationError

from discountctl.domain.rules import ThresholdRule, build_result, decide
from discountctl.domain.types import (
    Discount,
    FixedAmountValue,
    OrderSubtotalTarget,
    ProductVariantTarget,
    RunInput,
    RunResult,
)


class TestRunInput:
    def test_value_present(self) -> None:
        run_input = RunInput.model_validate(
            {"cart": {"attribute": {"key": "total_price", "value": "abc=="}}}
        )
        assert run_input.encoded_value == "abc=="

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"discountNode": {"metafield": None}},
            {"cart": {}},
            {"cart": {"attribute": None}},
            {"cart": {"attribute": {"key": "total_price"}}},
            {"cart": {"attribute": {"key": "total_price", "value": None}}},
        ],
    )
    def test_value_absent(self, payload: dict) -> None:
        assert RunInput.model_validate(payload).encoded_value is None

    def test_empty_string_is_present(self) -> None:
        run_input = RunInput.model_validate({"cart": {"attribute": {"value": ""}}})
        assert run_input.encoded_value == ""

    def test_frozen(self) -> None:
        run_input = RunInput()
        with pytest.raises(ValidationError):
            run_input.cart = None  # type: ignore[misc]


class TestRunResultSerialization:
    def test_empty_result(self) -> None:
        payload = json.loads(build_result().model_dump_json(by_alias=True))
        assert payload == {"discounts": [], "discountApplicationStrategy": "FIRST"}

    def test_discount_shape(self) -> None:
        result = build_result(decide(2500.0, ThresholdRule()))
        payload = result.model_dump(mode="json", by_alias=True)
        assert payload["discounts"] == [
            {
                "value": {"kind": "percentage", "value": 10.0},
                "targets": [{"kind": "order_subtotal", "excludedVariantIds": []}],
                "message": "Minimum spend",
                "conditions": [],
            }
        ]

    def test_parses_back_from_host_json(self) -> None:
        result = build_result(decide(2500.0, ThresholdRule()))
        raw = result.model_dump_json(by_alias=True)
        assert RunResult.model_validate_json(raw) == result


class TestTaggedVariants:
    def test_fixed_amount_and_variant_target(self) -> None:
        discount = Discount.model_validate(
            {
                "value": {"kind": "fixed_amount", "amount": 5.0, "appliesToEachItem": True},
                "targets": [{"kind": "product_variant", "id": "gid://Variant/1", "quantity": 2}],
            }
        )
        assert discount.value == FixedAmountValue(amount=5.0, applies_to_each_item=True)
        assert discount.targets == (ProductVariantTarget(id="gid://Variant/1", quantity=2),)

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Discount.model_validate(
                {"value": {"kind": "bogus", "value": 1.0}, "targets": [OrderSubtotalTarget()]}
            )
