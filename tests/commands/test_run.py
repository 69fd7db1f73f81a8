"""Tests for the run CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from discountctl.cli import cli
from tests.helpers import Encrypt


def _cart_json(value: str | None) -> str:
    attribute = None if value is None else {"key": "total_price", "value": value}
    return json.dumps({"cart": {"attribute": attribute}})


@pytest.mark.usefixtures("config_dir")
class TestRunCommand:
    def test_discount_from_stdin(self, cli_runner: CliRunner, encrypt: Encrypt) -> None:
        result = cli_runner.invoke(cli, ["--json", "run"], input=_cart_json(encrypt("2500.00")))
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["data"]["outcome"] == "discount_applied"
        (discount,) = data["data"]["result"]["discounts"]
        assert discount["value"] == {"kind": "percentage", "value": 10.0}
        assert discount["message"] == "Minimum spend"

    def test_from_file(self, cli_runner: CliRunner, encrypt: Encrypt, config_dir: Path) -> None:
        cart = config_dir / "cart.json"
        cart.write_text(_cart_json(encrypt("1999.99")), encoding="utf-8")
        result = cli_runner.invoke(cli, ["--json", "run", str(cart)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["outcome"] == "below_threshold"
        assert data["data"]["result"]["discounts"] == []

    def test_value_option(self, cli_runner: CliRunner, encrypt: Encrypt) -> None:
        result = cli_runner.invoke(cli, ["run", "--value", encrypt("4000")])
        assert result.exit_code == 0
        assert "10% off order subtotal" in result.stdout

    def test_function_output(self, cli_runner: CliRunner, encrypt: Encrypt) -> None:
        result = cli_runner.invoke(
            cli, ["run", "--function-output"], input=_cart_json(encrypt("2500.00"))
        )
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["discountApplicationStrategy"] == "FIRST"
        assert payload["discounts"][0]["targets"] == [
            {"kind": "order_subtotal", "excludedVariantIds": []}
        ]

    def test_absent_attribute(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "--function-output"], input=_cart_json(None))
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "discounts": [],
            "discountApplicationStrategy": "FIRST",
        }

    def test_stage_failure_is_warning_not_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "--value", "Z2FyYmFnZQ=="])
        assert result.exit_code == 0
        assert "no discount" in result.stdout
        assert "WARNING: CRYPTO_ERROR" in result.stderr

    def test_invalid_input_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "run"], input="{not json")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "INVALID_INPUT" in result.stderr

    def test_verbose_includes_stage_timings(
        self, cli_runner: CliRunner, encrypt: Encrypt
    ) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "-v", "run", "--value", encrypt("2500.00")]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        names = [c["name"] for c in data["meta"]["telemetry"]["children"]]
        assert names == ["decode", "decrypt", "parse", "decide"]

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "--examples"])
        assert result.exit_code == 0
        assert "discountctl run cart.json" in result.output


class TestRunWithoutConfig:
    def test_no_key_means_no_discount(
        self,
        cli_runner: CliRunner,
        encrypt: Encrypt,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(cli, ["--json", "run", "--value", encrypt("2500.00")])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["outcome"] == "decrypt_failed"

    def test_key_from_env(
        self,
        cli_runner: CliRunner,
        encrypt: Encrypt,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        from tests.helpers import TEST_IV_HEX, TEST_KEY_HEX

        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DISCOUNTCTL_CRYPTO__KEY_HEX", TEST_KEY_HEX)
        monkeypatch.setenv("DISCOUNTCTL_CRYPTO__IV_HEX", TEST_IV_HEX)
        result = cli_runner.invoke(cli, ["--json", "run", "--value", encrypt("2500.00")])
        assert json.loads(result.stdout)["data"]["outcome"] == "discount_applied"
