from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


# ---------------------------------------------------------------------
# Store entries
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class Chain:
    """
    One network configuration entry (main.networks.ethereum.<id>).

    `on` marks the chain as enabled by the user.
    """

    id: int
    name: str
    explorer: str = ""
    on: bool = False
    is_testnet: bool = False
    primary_connected: bool = False
    secondary_connected: bool = False

    @property
    def connected(self) -> bool:
        return self.primary_connected or self.secondary_connected


@dataclass(frozen=True)
class Quote:
    price: Decimal
    change_24hr: Decimal = Decimal(0)


@dataclass(frozen=True)
class Rate:
    """Price-feed entry (main.rates.<address or symbol>)."""

    usd: Quote | None = None


@dataclass(frozen=True)
class NativeCurrencyMeta:
    name: str | None = None
    symbol: str | None = None
    decimals: int | None = None
    icon: str | None = None
    usd: Quote | None = None


@dataclass(frozen=True)
class ChainMetadata:
    """Per-chain metadata entry (main.networksMeta.ethereum.<id>)."""

    native_currency: NativeCurrencyMeta | None = None
    primary_color: str | None = None


@dataclass(frozen=True)
class Origin:
    """A connected client context and the chain it currently uses."""

    id: str
    chain_id: int


@dataclass(frozen=True)
class Account:
    id: str
    address: str
    last_signer_type: str | None = None


@dataclass(frozen=True)
class RawBalance:
    """
    Balance as written by the balance scanner.

    `balance` is the amount in base units of the token.
    """

    chain_id: int
    address: str
    symbol: str
    decimals: int
    balance: int
    name: str = ""
    logo_uri: str | None = None


@dataclass(frozen=True)
class PopulatedChain:
    """Freshness marker for a chain's cached balance data, `expires` in epoch ms."""

    expires: int


# ---------------------------------------------------------------------
# Active-chain snapshot
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class NativeCurrency:
    name: str
    symbol: str
    decimals: int


@dataclass(frozen=True)
class Icon:
    url: str


@dataclass(frozen=True)
class Explorer:
    url: str


@dataclass(frozen=True)
class ActiveChain:
    """
    Client-facing description of an enabled chain.

    Equality is field by field; `icons`, `explorers` and `colors` are tuples,
    so ordering participates in comparison.
    """

    chain_id: int
    network_id: int
    name: str
    connected: bool
    native_currency: NativeCurrency
    icons: tuple[Icon, ...] = ()
    explorers: tuple[Explorer, ...] = ()
    colors: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        return {
            "chainId": self.chain_id,
            "networkId": self.network_id,
            "name": self.name,
            "connected": self.connected,
            "nativeCurrency": {
                "name": self.native_currency.name,
                "symbol": self.native_currency.symbol,
                "decimals": self.native_currency.decimals,
            },
            "icon": [{"url": icon.url} for icon in self.icons],
            "explorers": [{"url": explorer.url} for explorer in self.explorers],
            "external": {"wallet": {"colors": list(self.colors)}},
        }


ActiveChains = tuple[ActiveChain, ...]


# ---------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class ChainEvent:
    """One emitted notification, as recorded by event handlers."""

    kind: str
    payload: dict[str, Any] = field(default_factory=dict)
