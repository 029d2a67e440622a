from __future__ import annotations

import logging
from typing import Any

from wallet_state_engine.app.application.services.chain_snapshot import read_active_chains
from wallet_state_engine.app.infrastructure.colors.palette import PaletteColorResolver
from wallet_state_engine.app.infrastructure.factories.store_reader_factory import store_reader_factory

logger = logging.getLogger(__name__)


async def active_chains_task(
    *,
    store_path: str | None = None,
    backend: str = "json",
) -> list[dict[str, Any]]:
    """
    Task: print the active-chain snapshot clients would receive.

    - reads networks, metadata and colorway from the store dump,
    - builds the snapshot (enabled chains, by chain id),
    - returns client payloads.
    """
    reader = store_reader_factory(backend=backend, path=store_path)
    chains = read_active_chains(reader=reader, resolve_color=PaletteColorResolver())

    logger.info("Built active chains snapshot", extra={"count": len(chains)})
    return [chain.to_payload() for chain in chains]
