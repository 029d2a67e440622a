from __future__ import annotations

import pytest

from wallet_state_engine.app.application.services.chain_snapshot import (
    build_active_chains,
    read_active_chains,
)
from wallet_state_engine.app.domain.errors import ChainMetadataMissingError
from wallet_state_engine.app.domain.models import (
    Chain,
    ChainMetadata,
    Explorer,
    Icon,
    NativeCurrency,
    NativeCurrencyMeta,
)


def _resolve(token: str, colorway: str) -> str:
    return f"{colorway}:{token}"


def test_only_enabled_chains_sorted_by_id(reader, resolver):
    chains = read_active_chains(reader=reader, resolve_color=resolver)

    assert [c.chain_id for c in chains] == [1, 5, 137]
    assert all(c.chain_id == c.network_id for c in chains)


def test_descriptor_fields(reader, resolver):
    mainnet, _, polygon = read_active_chains(reader=reader, resolve_color=resolver)

    assert mainnet.name == "Mainnet"
    assert mainnet.connected is True
    assert mainnet.native_currency == NativeCurrency(name="Ether", symbol="ETH", decimals=18)
    assert mainnet.icons == (Icon(url="https://icons.example/eth.svg"),)
    assert mainnet.explorers == (Explorer(url="https://explorer.example/1"),)
    assert mainnet.colors == (resolver("accent1", "dark"),)

    # connected through the secondary link only
    assert polygon.connected is True
    assert polygon.icons == ()
    assert polygon.colors == ()


def test_client_payload_shape(reader, resolver):
    payload = read_active_chains(reader=reader, resolve_color=resolver)[0].to_payload()

    assert payload == {
        "chainId": 1,
        "networkId": 1,
        "name": "Mainnet",
        "connected": True,
        "nativeCurrency": {"name": "Ether", "symbol": "ETH", "decimals": 18},
        "icon": [{"url": "https://icons.example/eth.svg"}],
        "explorers": [{"url": "https://explorer.example/1"}],
        "external": {"wallet": {"colors": ["rgb(0, 210, 190)"]}},
    }


def test_building_twice_gives_equal_snapshots(reader, resolver):
    assert read_active_chains(reader=reader, resolve_color=resolver) == read_active_chains(
        reader=reader, resolve_color=resolver
    )


def test_colorway_is_passed_to_resolver():
    chains = {1: Chain(id=1, name="Mainnet", on=True)}
    meta = {1: ChainMetadata(native_currency=NativeCurrencyMeta(name="Ether", symbol="ETH", decimals=18), primary_color="accent1")}

    (chain,) = build_active_chains(chains=chains, chains_meta=meta, resolve_color=_resolve, colorway="light")

    assert chain.colors == ("light:accent1",)


def test_missing_metadata_for_enabled_chain_fails():
    chains = {
        1: Chain(id=1, name="Mainnet", on=True),
        42: Chain(id=42, name="Kovan", on=True),
    }
    meta = {1: ChainMetadata(native_currency=NativeCurrencyMeta(name="Ether", symbol="ETH", decimals=18))}

    with pytest.raises(ChainMetadataMissingError) as exc_info:
        build_active_chains(chains=chains, chains_meta=meta, resolve_color=_resolve, colorway="dark")

    assert exc_info.value.chain_id == 42


def test_missing_native_currency_fails():
    chains = {7: Chain(id=7, name="Seven", on=True)}
    meta = {7: ChainMetadata(primary_color="accent1")}

    with pytest.raises(ChainMetadataMissingError) as exc_info:
        build_active_chains(chains=chains, chains_meta=meta, resolve_color=_resolve, colorway="dark")

    assert exc_info.value.field == "nativeCurrency"


def test_disabled_chain_without_metadata_is_ignored():
    chains = {
        1: Chain(id=1, name="Mainnet", on=True),
        42: Chain(id=42, name="Kovan", on=False),
    }
    meta = {1: ChainMetadata(native_currency=NativeCurrencyMeta(name="Ether", symbol="ETH", decimals=18))}

    chains_out = build_active_chains(chains=chains, chains_meta=meta, resolve_color=_resolve, colorway="dark")

    assert [c.chain_id for c in chains_out] == [1]


def test_no_enabled_chains_gives_empty_snapshot():
    chains = {1: Chain(id=1, name="Mainnet", on=False)}

    assert build_active_chains(chains=chains, chains_meta={}, resolve_color=_resolve, colorway="dark") == ()


def test_sorting_is_numeric_not_lexical():
    ids = [100, 9, 42161, 10, 1]
    chains = {i: Chain(id=i, name=str(i), on=True) for i in ids}
    meta = {i: ChainMetadata(native_currency=NativeCurrencyMeta(name="n", symbol="s", decimals=18)) for i in ids}

    chains_out = build_active_chains(chains=chains, chains_meta=meta, resolve_color=_resolve, colorway="dark")

    assert [c.chain_id for c in chains_out] == [1, 9, 10, 100, 42161]


def test_unknown_color_token_publishes_no_color():
    chains = {1: Chain(id=1, name="Mainnet", on=True)}
    meta = {1: ChainMetadata(native_currency=NativeCurrencyMeta(name="Ether", symbol="ETH", decimals=18), primary_color="nope")}

    (chain,) = build_active_chains(chains=chains, chains_meta=meta, resolve_color=lambda t, c: None, colorway="dark")

    assert chain.colors == ()
