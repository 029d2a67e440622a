from __future__ import annotations

from typing import Any, Mapping, Sequence

from wallet_state_engine.app.config import settings
from wallet_state_engine.app.domain.errors import StoreDataError
from wallet_state_engine.app.domain.models import (
    Account,
    Chain,
    ChainMetadata,
    NativeCurrencyMeta,
    Origin,
    PopulatedChain,
    Quote,
    Rate,
    RawBalance,
)
from wallet_state_engine.app.domain.ports.out import StoreReader
from wallet_state_engine.app.domain.quantities import parse_decimal, parse_quantity

_CHAIN_TYPE = "ethereum"

StorePath = tuple[str | int, ...]


class StoreStateReader:
    """
    Typed access to the application store.

    Layout read (camelCase, as written by the wallet):
      main.networks.ethereum.<id>         chain configuration
      main.networksMeta.ethereum.<id>     native currency / color metadata
      main.origins.<origin id>.chain.id   chain selected by a client
      main.colorway                       active theme
      selected.current                    selected account id
      main.accounts.<id>                  address / last signer type
      main.rates.<address or symbol>.usd  price quotes
      main.balances.<address>             raw balances (list)
      main.populatedChains.<address>.<id> freshness markers ({expires})

    Nothing is cached; every call parses the current store contents.
    """

    def __init__(self, store: StoreReader, *, chain_type: str = _CHAIN_TYPE) -> None:
        self._store = store
        self._chain_type = chain_type

    def get_chains(self) -> dict[int, Chain]:
        path: StorePath = ("main", "networks", self._chain_type)
        raw = self._table(path)

        chains: dict[int, Chain] = {}
        for key, entry in raw.items():
            entry_path = (*path, key)
            entry = _expect_mapping(entry, entry_path)
            chain_id = _chain_id(entry.get("id", key), (*entry_path, "id"))
            connection = _optional_mapping(entry.get("connection"), (*entry_path, "connection"))

            chains[chain_id] = Chain(
                id=chain_id,
                name=str(entry.get("name") or ""),
                explorer=str(entry.get("explorer") or ""),
                on=bool(entry.get("on")),
                is_testnet=bool(entry.get("isTestnet")),
                primary_connected=_link_connected(connection, "primary", (*entry_path, "connection")),
                secondary_connected=_link_connected(connection, "secondary", (*entry_path, "connection")),
            )
        return chains

    def get_chains_meta(self) -> dict[int, ChainMetadata]:
        path: StorePath = ("main", "networksMeta", self._chain_type)
        raw = self._table(path)

        meta: dict[int, ChainMetadata] = {}
        for key, entry in raw.items():
            entry_path = (*path, key)
            entry = _expect_mapping(entry, entry_path)
            chain_id = _chain_id(key, entry_path)

            native_raw = entry.get("nativeCurrency")
            native = None
            if native_raw is not None:
                native = _native_currency(native_raw, (*entry_path, "nativeCurrency"))

            meta[chain_id] = ChainMetadata(
                native_currency=native,
                primary_color=entry.get("primaryColor") or None,
            )
        return meta

    def get_colorway(self) -> str:
        colorway = self._store.get("main", "colorway")
        return str(colorway) if colorway else settings.default_colorway

    def get_current_origins(self) -> dict[str, Origin]:
        path: StorePath = ("main", "origins")
        raw = self._table(path)

        origins: dict[str, Origin] = {}
        for origin_id, entry in raw.items():
            entry_path = (*path, origin_id)
            entry = _expect_mapping(entry, entry_path)
            chain = _expect_mapping(entry.get("chain"), (*entry_path, "chain"))
            origins[str(origin_id)] = Origin(
                id=str(origin_id),
                chain_id=_chain_id(chain.get("id"), (*entry_path, "chain", "id")),
            )
        return origins

    def get_selected_account(self) -> str | None:
        current = self._store.get("selected", "current")
        return str(current) if current else None

    def get_account(self, account_id: str) -> Account | None:
        path: StorePath = ("main", "accounts", account_id)
        raw = self._store.get(*path)
        if raw is None:
            return None
        raw = _expect_mapping(raw, path)
        return Account(
            id=account_id,
            address=str(raw.get("address") or account_id),
            last_signer_type=raw.get("lastSignerType") or None,
        )

    def get_rates(self) -> dict[str, Rate]:
        path: StorePath = ("main", "rates")
        raw = self._table(path)
        return {
            str(key): Rate(usd=_quote(_expect_mapping(entry, (*path, key)).get("usd"), (*path, key, "usd")))
            for key, entry in raw.items()
        }

    def get_balances(self, address: str) -> list[RawBalance]:
        path: StorePath = ("main", "balances", address)
        raw = self._store.get(*path)
        if raw is None:
            return []
        if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
            raise StoreDataError(path, "expected a list of balances")

        balances: list[RawBalance] = []
        for index, entry in enumerate(raw):
            entry_path = (*path, index)
            entry = _expect_mapping(entry, entry_path)
            balances.append(
                RawBalance(
                    chain_id=_chain_id(entry.get("chainId"), (*entry_path, "chainId")),
                    address=str(entry.get("address") or ""),
                    symbol=str(entry.get("symbol") or ""),
                    name=str(entry.get("name") or ""),
                    decimals=_quantity(entry.get("decimals", 0), (*entry_path, "decimals")),
                    balance=_quantity(entry.get("balance", 0), (*entry_path, "balance")),
                    logo_uri=entry.get("logoURI") or None,
                )
            )
        return balances

    def get_populated_chains(self, address: str) -> dict[int, PopulatedChain]:
        path: StorePath = ("main", "populatedChains", address)
        raw = self._table(path)
        return {
            _chain_id(key, (*path, key)): PopulatedChain(
                expires=_quantity(_expect_mapping(entry, (*path, key)).get("expires", 0), (*path, key, "expires"))
            )
            for key, entry in raw.items()
        }

    def _table(self, path: StorePath) -> Mapping[str, Any]:
        raw = self._store.get(*path)
        if raw is None:
            return {}
        return _expect_mapping(raw, path)


# ---------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------


def _expect_mapping(value: Any, path: Sequence[str | int]) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise StoreDataError(path, f"expected an object, got {type(value).__name__}")
    return value


def _optional_mapping(value: Any, path: Sequence[str | int]) -> Mapping[str, Any]:
    if value is None:
        return {}
    return _expect_mapping(value, path)


def _quantity(value: Any, path: Sequence[str | int]) -> int:
    try:
        return parse_quantity(value)
    except ValueError as exc:
        raise StoreDataError(path, str(exc)) from None


def _chain_id(value: Any, path: Sequence[str | int]) -> int:
    chain_id = _quantity(value, path)
    if chain_id <= 0:
        raise StoreDataError(path, "chain id must be positive")
    return chain_id


def _link_connected(connection: Mapping[str, Any], link: str, path: Sequence[str | int]) -> bool:
    raw = _optional_mapping(connection.get(link), (*path, link))
    return bool(raw.get("connected"))


def _quote(value: Any, path: Sequence[str | int]) -> Quote | None:
    if value is None:
        return None
    raw = _expect_mapping(value, path)
    if raw.get("price") is None:
        return None
    try:
        return Quote(
            price=parse_decimal(raw["price"]),
            change_24hr=parse_decimal(raw.get("change24hr", 0) or 0),
        )
    except ValueError as exc:
        raise StoreDataError(path, str(exc)) from None


def _native_currency(value: Any, path: Sequence[str | int]) -> NativeCurrencyMeta:
    raw = _expect_mapping(value, path)
    decimals = raw.get("decimals")
    return NativeCurrencyMeta(
        name=raw.get("name") or None,
        symbol=raw.get("symbol") or None,
        decimals=_quantity(decimals, (*path, "decimals")) if decimals is not None else None,
        icon=raw.get("icon") or None,
        usd=_quote(raw.get("usd"), (*path, "usd")),
    )
