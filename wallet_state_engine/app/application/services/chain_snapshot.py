from __future__ import annotations

import logging
from typing import Mapping

from wallet_state_engine.app.domain.errors import ChainMetadataMissingError
from wallet_state_engine.app.domain.models import (
    ActiveChain,
    ActiveChains,
    Chain,
    ChainMetadata,
    Explorer,
    Icon,
    NativeCurrency,
    NativeCurrencyMeta,
)
from wallet_state_engine.app.domain.ports.out import ChainStateReader, ColorResolver

logger = logging.getLogger(__name__)


def build_active_chains(
    *,
    chains: Mapping[int, Chain],
    chains_meta: Mapping[int, ChainMetadata],
    resolve_color: ColorResolver,
    colorway: str,
) -> ActiveChains:
    """
    Build the ordered snapshot of enabled chains.

    - keeps only chains with `on` set,
    - sorts them by chain id (ascending, stable),
    - joins metadata by chain id; a missing entry raises ChainMetadataMissingError,
    - turns optional icon / color into 0- or 1-element tuples.
    """
    enabled = sorted((chain for chain in chains.values() if chain.on), key=lambda c: c.id)

    active: list[ActiveChain] = []
    for chain in enabled:
        meta, native = _require_meta(chain.id, chains_meta)
        active.append(
            _describe_chain(chain, meta=meta, native=native, resolve_color=resolve_color, colorway=colorway)
        )
    return tuple(active)


def read_active_chains(*, reader: ChainStateReader, resolve_color: ColorResolver) -> ActiveChains:
    return build_active_chains(
        chains=reader.get_chains(),
        chains_meta=reader.get_chains_meta(),
        resolve_color=resolve_color,
        colorway=reader.get_colorway(),
    )


def _require_meta(
    chain_id: int, chains_meta: Mapping[int, ChainMetadata]
) -> tuple[ChainMetadata, NativeCurrencyMeta]:
    meta = chains_meta.get(chain_id)
    if meta is None:
        logger.error("No metadata for enabled chain", extra={"chain_id": chain_id})
        raise ChainMetadataMissingError(chain_id)
    if meta.native_currency is None:
        logger.error("No native currency metadata for enabled chain", extra={"chain_id": chain_id})
        raise ChainMetadataMissingError(chain_id, field="nativeCurrency")
    return meta, meta.native_currency


def _describe_chain(
    chain: Chain,
    *,
    meta: ChainMetadata,
    native: NativeCurrencyMeta,
    resolve_color: ColorResolver,
    colorway: str,
) -> ActiveChain:
    icons = (Icon(url=native.icon),) if native.icon else ()

    colors: tuple[str, ...] = ()
    if meta.primary_color:
        color = resolve_color(meta.primary_color, colorway)
        if color:
            colors = (color,)

    return ActiveChain(
        chain_id=chain.id,
        network_id=chain.id,
        name=chain.name,
        connected=chain.connected,
        native_currency=NativeCurrency(
            name=native.name or "",
            symbol=native.symbol or "",
            decimals=native.decimals if native.decimals is not None else 0,
        ),
        icons=icons,
        explorers=(Explorer(url=chain.explorer),),
        colors=colors,
    )
