from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, Sequence

from wallet_state_engine.app.domain.models import (
    Account,
    ActiveChains,
    Chain,
    ChainMetadata,
    Origin,
    PopulatedChain,
    Rate,
    RawBalance,
)


class StoreReader(Protocol):
    """
    Port for reading the externally-owned application store.

    Paths are sequences of keys; a segment may also be a dotted string
    ("main.networks"). Missing paths return None. Implementations must not
    cache: every call reflects the current state.
    """

    def get(self, *path: str | int) -> Any: ...


class ChainStateReader(Protocol):
    """
    Typed view over the store used by observers, tasks and the CLI.

    Each call reads the store again and returns freshly parsed values.
    """

    def get_chains(self) -> Mapping[int, Chain]: ...

    def get_chains_meta(self) -> Mapping[int, ChainMetadata]: ...

    def get_colorway(self) -> str: ...

    def get_current_origins(self) -> Mapping[str, Origin]: ...

    def get_selected_account(self) -> str | None: ...

    def get_account(self, account_id: str) -> Account | None: ...

    def get_rates(self) -> Mapping[str, Rate]: ...

    def get_balances(self, address: str) -> Sequence[RawBalance]: ...

    def get_populated_chains(self, address: str) -> Mapping[int, PopulatedChain]: ...


class ColorResolver(Protocol):
    """Resolves a theme color token (e.g. "accent1") for a colorway."""

    def __call__(self, color_token: str, colorway: str) -> str | None: ...


class Scheduler(Protocol):
    """
    Port for deferred execution.

    `call_soon` must never run the callback synchronously: it becomes
    observable only after the current call stack has returned.
    """

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None: ...


class ChainsChangedHandler(Protocol):
    def chains_changed(self, account: str | None, chains: ActiveChains) -> None: ...


class ChainChangedHandler(Protocol):
    def chain_changed(self, chain_id: int, origin_id: str) -> None: ...


class NetworkChangedHandler(Protocol):
    def network_changed(self, network_id: int, origin_id: str) -> None: ...


class OriginChainHandler(ChainChangedHandler, NetworkChangedHandler, Protocol):
    """Receives both per-origin events for a chain switch."""
