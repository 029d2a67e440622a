from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from wallet_state_engine.app.application.services.chains_observer import ChainsChangeObserver
from wallet_state_engine.app.application.services.origin_chain_observer import OriginChainObserver
from wallet_state_engine.app.domain.errors import ChainMetadataMissingError
from wallet_state_engine.app.domain.ports.out import (
    ChainsChangedHandler,
    ChainStateReader,
    ColorResolver,
    OriginChainHandler,
    Scheduler,
)
from wallet_state_engine.app.infrastructure.colors.palette import PaletteColorResolver

logger = logging.getLogger(__name__)


@dataclass
class Observers:
    """
    Both observers over one store reader.

    `chains` is None until its first snapshot could be built; the tick that
    builds it takes the snapshot as baseline and does not notify.
    """

    origins: OriginChainObserver
    build_chains: Callable[[], ChainsChangeObserver]
    chains: ChainsChangeObserver | None = None

    def tick(self) -> None:
        """
        Run both observers for one store mutation.

        The origin observer runs even when the snapshot build fails; the
        snapshot error is raised afterwards.
        """
        try:
            if self.chains is None:
                self.chains = self.build_chains()
            else:
                self.chains.tick()
        finally:
            self.origins.tick()


def observers_factory(
    *,
    reader: ChainStateReader,
    chains_handler: ChainsChangedHandler,
    origin_handler: OriginChainHandler,
    scheduler: Scheduler,
    resolve_color: ColorResolver | None = None,
) -> Observers:
    """
    Wire both observers over one store reader.

    The origin observer is always created. When the initial snapshot cannot be
    built (an enabled chain lacks metadata) the chains observer is created on
    the first tick that succeeds.
    """
    resolver = resolve_color or PaletteColorResolver()

    def build_chains() -> ChainsChangeObserver:
        return ChainsChangeObserver(
            reader=reader,
            handler=chains_handler,
            scheduler=scheduler,
            resolve_color=resolver,
        )

    observers = Observers(
        origins=OriginChainObserver(reader=reader, handler=origin_handler),
        build_chains=build_chains,
    )
    try:
        observers.chains = build_chains()
    except ChainMetadataMissingError as exc:
        logger.error(
            "Initial chains snapshot unavailable; retrying on next tick",
            extra={"chain_id": exc.chain_id, "field": exc.field},
        )
    return observers
