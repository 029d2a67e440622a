from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Any, Mapping

from wallet_state_engine.app.application.services.display_value import (
    LESS_THAN_A_CENT,
    WIDE_CONTEXT,
    display_usd,
    format_native,
    gas_price_display,
    to_usd,
)
from wallet_state_engine.app.config import settings
from wallet_state_engine.app.domain.models import NativeCurrencyMeta
from wallet_state_engine.app.domain.quantities import parse_quantity

# Upstream fee estimates allow for two consecutive 12.5% base-fee increases.
BLOCK_FEE_INCREASE = Decimal(9) / Decimal(8)

# Upstream gas-limit estimates are padded by 50%.
GAS_LIMIT_PADDING = Decimal("1.5")

_FEE_MARKET_TX_TYPE = 2


class GasFeesSource(str, enum.Enum):
    WALLET = "Wallet"
    DAPP = "Dapp"
    OTHER = "Other"


@dataclass(frozen=True)
class FeeRange:
    """Estimated fee bounds in native base units (e.g. wei)."""

    min_fee: Decimal
    max_fee: Decimal
    fee_per_gas: Decimal
    gas_limit: Decimal
    uses_fee_market: bool


@dataclass(frozen=True)
class FeeInputs:
    chain_id: int
    gas_limit: int
    fee_basis: int
    uses_fee_market: bool


@dataclass(frozen=True)
class FeeDisplay:
    symbol: str
    gas_price: str
    gas_price_unit: str
    max_fee_native: str
    min_fee_usd: Decimal | None
    max_fee_usd: Decimal | None
    # ("< 0.01",) when the max fee is under a cent, (min, max) otherwise,
    # None when no exchange rate is available.
    usd_range: tuple[str, ...] | None
    max_fee_warning: bool
    fee_source_note: str | None = None


def estimate_fee_range(
    gas_limit: int | Decimal,
    fee_basis: int | Decimal,
    uses_fee_market: bool,
) -> FeeRange:
    """
    Compute the displayed fee range for a transaction.

    `fee_basis` is maxFeePerGas for fee-market transactions and gasPrice for
    legacy ones. The maximum is what the transaction may pay; the minimum
    undoes the two base-fee margins and the gas-limit padding applied
    upstream.
    """
    if gas_limit < 0:
        raise ValueError("gas_limit must be non-negative")
    if fee_basis < 0:
        raise ValueError("fee_basis must be non-negative")

    with localcontext(WIDE_CONTEXT):
        max_gas = Decimal(gas_limit)
        max_fee_per_gas = Decimal(fee_basis)
        max_fee = max_fee_per_gas * max_gas

        min_fee_per_gas = max_fee_per_gas / BLOCK_FEE_INCREASE / BLOCK_FEE_INCREASE
        min_gas = max_gas / GAS_LIMIT_PADDING
        min_fee = min_fee_per_gas * min_gas

    return FeeRange(
        min_fee=min_fee,
        max_fee=max_fee,
        fee_per_gas=max_fee_per_gas,
        gas_limit=max_gas,
        uses_fee_market=uses_fee_market,
    )


def uses_fee_market(data: Mapping[str, Any]) -> bool:
    tx_type = data.get("type")
    if tx_type is None:
        return False
    return _parse_quantity(tx_type, "type") == _FEE_MARKET_TX_TYPE


def fee_inputs_from_request(data: Mapping[str, Any]) -> FeeInputs:
    """
    Read fee inputs from transaction request data.

    Quantities are hex strings ("0x5208") or ints. Fee-market transactions
    (type 0x2) use maxFeePerGas, legacy ones gasPrice.
    """
    fee_market = uses_fee_market(data)
    fee_key = "maxFeePerGas" if fee_market else "gasPrice"

    for key in ("chainId", "gasLimit", fee_key):
        if data.get(key) is None:
            raise ValueError(f"Transaction data is missing {key!r}")

    return FeeInputs(
        chain_id=_parse_quantity(data["chainId"], "chainId"),
        gas_limit=_parse_quantity(data["gasLimit"], "gasLimit"),
        fee_basis=_parse_quantity(data[fee_key], fee_key),
        uses_fee_market=fee_market,
    )


def fee_source_note(*, fees_updated_by_user: bool, source: GasFeesSource | str) -> str | None:
    if fees_updated_by_user:
        return "Gas values set by user"

    source_value = source.value if isinstance(source, GasFeesSource) else str(source)
    if source_value != GasFeesSource.WALLET.value:
        return f"Gas values set by {source_value}"
    return None


def describe_fee_range(
    fee_range: FeeRange,
    *,
    native_currency: NativeCurrencyMeta,
    is_testnet: bool = False,
    fees_updated_by_user: bool = False,
    source: GasFeesSource | str = GasFeesSource.WALLET,
    warning_threshold_usd: Decimal | None = None,
    precision: int | None = None,
) -> FeeDisplay:
    decimals = (
        native_currency.decimals
        if native_currency.decimals is not None
        else settings.default_native_decimals
    )
    threshold = (
        warning_threshold_usd
        if warning_threshold_usd is not None
        else settings.fee_warning_threshold_usd
    )
    precision = settings.fee_display_precision if precision is None else precision

    min_usd = to_usd(fee_range.min_fee, decimals=decimals, quote=native_currency.usd, is_testnet=is_testnet)
    max_usd = to_usd(fee_range.max_fee, decimals=decimals, quote=native_currency.usd, is_testnet=is_testnet)

    gas_price, gas_price_unit = gas_price_display(fee_range.fee_per_gas)

    return FeeDisplay(
        symbol=native_currency.symbol or "",
        gas_price=gas_price,
        gas_price_unit=gas_price_unit,
        max_fee_native=format_native(fee_range.max_fee, decimals, precision),
        min_fee_usd=min_usd,
        max_fee_usd=max_usd,
        usd_range=_usd_range(min_usd, max_usd),
        max_fee_warning=max_usd is not None and max_usd > threshold,
        fee_source_note=fee_source_note(fees_updated_by_user=fees_updated_by_user, source=source),
    )


def _usd_range(min_usd: Decimal | None, max_usd: Decimal | None) -> tuple[str, ...] | None:
    display_max = display_usd(max_usd)
    display_min = display_usd(min_usd)
    if display_max is None or display_min is None:
        return None
    if display_max == LESS_THAN_A_CENT:
        return (display_max,)
    return (display_min, display_max)


def _parse_quantity(value: Any, key: str) -> int:
    try:
        return parse_quantity(value)
    except ValueError:
        raise ValueError(f"Invalid quantity for {key!r}: {value!r}") from None
