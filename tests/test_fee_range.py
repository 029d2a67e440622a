from __future__ import annotations

from decimal import Decimal

import pytest

from wallet_state_engine.app.application.services.fee_range import (
    GasFeesSource,
    describe_fee_range,
    estimate_fee_range,
    fee_inputs_from_request,
    fee_source_note,
    uses_fee_market,
)
from wallet_state_engine.app.domain.models import NativeCurrencyMeta, Quote

GWEI = 10**9

ETH = NativeCurrencyMeta(name="Ether", symbol="ETH", decimals=18, usd=Quote(price=Decimal("2000")))
ETH_NO_RATE = NativeCurrencyMeta(name="Ether", symbol="ETH", decimals=18)


# ============================================================
# RANGE
# ============================================================


def test_max_and_min_fee():
    fees = estimate_fee_range(21000, 100, True)

    assert fees.max_fee == Decimal(2_100_000)
    # 2,100,000 / (9/8)^2 / 1.5
    assert fees.min_fee.quantize(Decimal("0.0001")) == Decimal("1106172.8395")
    assert fees.min_fee < fees.max_fee


def test_min_fee_undoes_margins_exactly():
    fees = estimate_fee_range(21000, 100, True)

    restored = fees.min_fee * Decimal(81) / Decimal(64) * Decimal("1.5")
    assert restored.quantize(Decimal("0.000001")) == Decimal("2100000.000000")


def test_legacy_and_fee_market_use_same_arithmetic():
    legacy = estimate_fee_range(50_000, 30 * GWEI, False)
    market = estimate_fee_range(50_000, 30 * GWEI, True)

    assert legacy.max_fee == market.max_fee
    assert legacy.min_fee == market.min_fee
    assert legacy.uses_fee_market is False


@pytest.mark.parametrize("gas_limit,fee_basis", [(1, 1), (21000, 1), (30_000_000, 500 * GWEI)])
def test_min_fee_strictly_below_max_fee(gas_limit, fee_basis):
    fees = estimate_fee_range(gas_limit, fee_basis, True)

    assert Decimal(0) < fees.min_fee < fees.max_fee


def test_zero_gas_limit_gives_zero_fees():
    fees = estimate_fee_range(0, 100 * GWEI, True)

    assert fees.max_fee == 0
    assert fees.min_fee == 0


def test_negative_inputs_are_rejected():
    with pytest.raises(ValueError):
        estimate_fee_range(-1, 1, True)
    with pytest.raises(ValueError):
        estimate_fee_range(1, -1, True)


# ============================================================
# REQUEST PARSING
# ============================================================


def test_fee_market_request_uses_max_fee_per_gas():
    inputs = fee_inputs_from_request(
        {"chainId": "0x89", "type": "0x2", "gasLimit": "0x5208", "maxFeePerGas": "0x3b9aca00", "gasPrice": "0x1"}
    )

    assert inputs.chain_id == 137
    assert inputs.gas_limit == 21000
    assert inputs.fee_basis == GWEI
    assert inputs.uses_fee_market is True


def test_legacy_request_uses_gas_price():
    inputs = fee_inputs_from_request({"chainId": "0x1", "gasLimit": "0x5208", "gasPrice": "0x64"})

    assert inputs.fee_basis == 100
    assert inputs.uses_fee_market is False
    assert uses_fee_market({"type": "0x0"}) is False


def test_request_missing_fee_field():
    with pytest.raises(ValueError, match="maxFeePerGas"):
        fee_inputs_from_request({"chainId": "0x1", "type": "0x2", "gasLimit": "0x5208", "gasPrice": "0x64"})


def test_request_with_invalid_quantity():
    with pytest.raises(ValueError, match="gasLimit"):
        fee_inputs_from_request({"chainId": "0x1", "gasLimit": "lots", "gasPrice": "0x64"})


# ============================================================
# DISPLAY
# ============================================================


def test_display_with_rate():
    display = describe_fee_range(estimate_fee_range(21000, 100 * GWEI, True), native_currency=ETH)

    assert display.symbol == "ETH"
    assert (display.gas_price, display.gas_price_unit) == ("100", "Gwei")
    assert display.max_fee_native == "0.0021"
    assert display.max_fee_usd == Decimal("4.2")
    assert display.usd_range == ("2.21", "4.20")
    assert display.max_fee_warning is False
    assert display.fee_source_note is None


def test_sub_cent_fee_collapses_range():
    display = describe_fee_range(estimate_fee_range(21000, 1, True), native_currency=ETH)

    assert display.usd_range == ("< 0.01",)
    assert (display.gas_price, display.gas_price_unit) == ("1", "Wei")


def test_missing_rate_is_absent_not_zero():
    display = describe_fee_range(estimate_fee_range(21000, 100 * GWEI, True), native_currency=ETH_NO_RATE)

    assert display.min_fee_usd is None
    assert display.max_fee_usd is None
    assert display.usd_range is None
    assert display.max_fee_warning is False
    assert display.max_fee_native == "0.0021"


def test_testnet_fees_are_worth_nothing():
    display = describe_fee_range(
        estimate_fee_range(21000, 100 * GWEI, True),
        native_currency=ETH_NO_RATE,
        is_testnet=True,
    )

    assert display.max_fee_usd == 0
    assert display.usd_range == ("0.00", "0.00")


def test_expensive_fee_raises_warning():
    display = describe_fee_range(estimate_fee_range(21000, 2000 * GWEI, True), native_currency=ETH)

    assert display.max_fee_usd == Decimal("84")
    assert display.max_fee_warning is True

    relaxed = describe_fee_range(
        estimate_fee_range(21000, 2000 * GWEI, True),
        native_currency=ETH,
        warning_threshold_usd=Decimal("100"),
    )
    assert relaxed.max_fee_warning is False


def test_fractional_gwei_display():
    display = describe_fee_range(estimate_fee_range(21000, 1_500_000, True), native_currency=ETH)

    assert (display.gas_price, display.gas_price_unit) == ("0.0015", "Gwei")


def test_fee_source_notes():
    assert fee_source_note(fees_updated_by_user=True, source=GasFeesSource.DAPP) == "Gas values set by user"
    assert fee_source_note(fees_updated_by_user=False, source=GasFeesSource.DAPP) == "Gas values set by Dapp"
    assert fee_source_note(fees_updated_by_user=False, source=GasFeesSource.WALLET) is None
    assert fee_source_note(fees_updated_by_user=False, source="Wallet") is None
