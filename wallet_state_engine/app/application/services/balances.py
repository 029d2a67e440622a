from __future__ import annotations

import time
from dataclasses import dataclass, replace
from decimal import Decimal, localcontext
from typing import Iterable, Mapping, Sequence

from eth_utils import is_hex_address, is_same_address

from wallet_state_engine.app.application.services.display_value import (
    WIDE_CONTEXT,
    format_balance,
    format_usd_rate,
    shift_decimals,
)
from wallet_state_engine.app.config import settings
from wallet_state_engine.app.domain.models import (
    Chain,
    ChainMetadata,
    NativeCurrencyMeta,
    PopulatedChain,
    Quote,
    Rate,
    RawBalance,
)

NATIVE_CURRENCY = "0x0000000000000000000000000000000000000000"

UNKNOWN_TOTAL = "---.--"

_TESTNET_QUOTE = Quote(price=Decimal(0))


@dataclass(frozen=True)
class BalanceView:
    chain_id: int
    address: str
    symbol: str
    name: str
    decimals: int
    balance: int
    logo_uri: str | None
    # None when no price is known for the token
    usd_rate: Decimal | None
    total_value: Decimal
    display_balance: str
    price: str | None
    price_change: str | None
    display_value: str | None


@dataclass(frozen=True)
class BalanceAggregate:
    balances: tuple[BalanceView, ...]
    total_display_value: str
    total_value: Decimal


@dataclass(frozen=True)
class BalanceSummary:
    balances: tuple[BalanceView, ...]
    total_display_value: str
    total_value: Decimal
    high_value_hot_signer: bool


def is_native_currency(address: str | None) -> bool:
    if not address or not is_hex_address(address):
        return False
    return is_same_address(address, NATIVE_CURRENCY)


def is_network_connected(chain: Chain | None) -> bool:
    return chain is not None and chain.connected


def match_filter(filter_text: str, properties: Iterable[str | None]) -> bool:
    """Case-insensitive substring match of the whole filter against any property."""
    if not filter_text:
        return True
    needle = filter_text.lower()
    return any(prop and needle in prop.lower() for prop in properties)


def create_balance(raw: RawBalance, quote: Quote | None) -> BalanceView:
    """
    Attach value and display fields to a normalised balance.

    Without a quote the value is unknown: `usd_rate`, `price` and
    `display_value` are None and `total_value` counts as 0.
    """
    with localcontext(WIDE_CONTEXT):
        amount = shift_decimals(raw.balance, raw.decimals)
        usd_rate = quote.price if quote is not None else None
        total_value = amount * usd_rate if usd_rate is not None else Decimal(0)

        rate_digits = len(str(int((usd_rate or Decimal(0)).scaleb(1))))
        balance_decimals = max(2, rate_digits)

    if usd_rate is None:
        price = price_change = display_value = None
    else:
        price = format_usd_rate(usd_rate)
        price_change = f"{quote.change_24hr:.2f}" if usd_rate != 0 else None
        display_value = "0" if total_value == 0 else format_usd_rate(total_value, 0)

    return BalanceView(
        chain_id=raw.chain_id,
        address=raw.address,
        symbol=raw.symbol,
        name=raw.name,
        decimals=raw.decimals,
        balance=raw.balance,
        logo_uri=raw.logo_uri,
        usd_rate=usd_rate,
        total_value=total_value,
        display_balance=format_balance(amount, total_value, balance_decimals),
        price=price,
        price_change=price_change,
        display_value=display_value,
    )


def aggregate_balances(
    raw_balances: Sequence[RawBalance],
    rates: Mapping[str, Rate],
    filter_text: str = "",
    *,
    chains: Mapping[int, Chain],
    chains_meta: Mapping[int, ChainMetadata],
    populated_chains: Mapping[int, PopulatedChain],
    now_ms: int | None = None,
    default_native_decimals: int | None = None,
) -> BalanceAggregate:
    """
    Turn raw balances of one account into sorted, valued balance views.

    Steps, in order:
    - drop balances on chains that are not connected,
    - normalise native-currency entries from chain metadata and pick the rate,
    - drop chains without fresh data and entries not matching `filter_text`,
    - value each balance (test networks are worth 0),
    - sort by value, highest first (stable), and sum the total.
    """
    now = int(time.time() * 1000) if now_ms is None else now_ms
    native_decimals = (
        settings.default_native_decimals if default_native_decimals is None else default_native_decimals
    )

    connected = [raw for raw in raw_balances if is_network_connected(chains.get(raw.chain_id))]

    views: list[BalanceView] = []
    for raw in connected:
        chain = chains[raw.chain_id]
        normalized, quote = _normalize(
            raw,
            chain=chain,
            meta=chains_meta.get(raw.chain_id),
            rates=rates,
            native_decimals=native_decimals,
        )

        populated = populated_chains.get(raw.chain_id)
        if populated is None or populated.expires <= now:
            continue
        if not match_filter(filter_text, (chain.name, normalized.name, normalized.symbol)):
            continue

        views.append(create_balance(normalized, _TESTNET_QUOTE if chain.is_testnet else quote))

    views.sort(key=lambda view: view.total_value, reverse=True)

    with localcontext(WIDE_CONTEXT):
        total_value = sum((view.total_value for view in views), Decimal(0))

    return BalanceAggregate(
        balances=tuple(views),
        total_display_value=format_usd_rate(total_value, 0),
        total_value=total_value,
    )


def summarize_balances(
    aggregate: BalanceAggregate,
    *,
    expanded: bool,
    all_chains_updated: bool,
    signer_type: str | None = None,
    collapsed_count: int | None = None,
    high_value_threshold_usd: Decimal | None = None,
) -> BalanceSummary:
    """
    Presentation summary of an aggregate.

    The collapsed view keeps the first `collapsed_count` balances. The total is
    shown only once every chain has been updated and something is listed.
    """
    count = settings.collapsed_balance_count if collapsed_count is None else collapsed_count
    threshold = (
        settings.high_value_threshold_usd if high_value_threshold_usd is None else high_value_threshold_usd
    )

    visible = aggregate.balances if expanded else aggregate.balances[:count]
    total_display = aggregate.total_display_value if visible and all_chains_updated else UNKNOWN_TOTAL
    hot_signer = signer_type in settings.hot_signer_types

    return BalanceSummary(
        balances=visible,
        total_display_value=total_display,
        total_value=aggregate.total_value,
        high_value_hot_signer=hot_signer and aggregate.total_value > threshold,
    )


def _normalize(
    raw: RawBalance,
    *,
    chain: Chain,
    meta: ChainMetadata | None,
    rates: Mapping[str, Rate],
    native_decimals: int,
) -> tuple[RawBalance, Quote | None]:
    if not is_native_currency(raw.address):
        rate = rates.get(raw.address or raw.symbol)
        return raw, rate.usd if rate is not None else None

    native = (meta.native_currency if meta is not None else None) or NativeCurrencyMeta()
    normalized = replace(
        raw,
        logo_uri=native.icon or raw.logo_uri,
        name=native.name or chain.name,
        decimals=native.decimals or native_decimals,
        symbol=native.symbol or raw.symbol,
    )
    return normalized, native.usd


def all_chains_updated(
    *,
    chains: Mapping[int, Chain],
    populated_chains: Mapping[int, PopulatedChain],
    now_ms: int | None = None,
) -> bool:
    """True when every enabled, connected chain has balance data that has not expired."""
    now = int(time.time() * 1000) if now_ms is None else now_ms
    for chain_id, chain in chains.items():
        if not chain.on or not chain.connected:
            continue
        populated = populated_chains.get(chain_id)
        if populated is None or populated.expires <= now:
            return False
    return True
