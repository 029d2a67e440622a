from __future__ import annotations

import logging

from wallet_state_engine.app.application.services.chain_snapshot import read_active_chains
from wallet_state_engine.app.domain.models import ActiveChains
from wallet_state_engine.app.domain.ports.out import (
    ChainsChangedHandler,
    ChainStateReader,
    ColorResolver,
    Scheduler,
)

logger = logging.getLogger(__name__)


class ChainsChangeObserver:
    """
    Detects changes to the set of active chains.

    The snapshot is built once at construction (no notification). Each
    `tick()` rebuilds it and, when it differs from the retained one, schedules
    `chains_changed(account, chains)` through the scheduler. The selected
    account is read when the notification is delivered, not when the change
    is detected.

    Not safe for concurrent ticks on the same instance.
    """

    def __init__(
        self,
        *,
        reader: ChainStateReader,
        handler: ChainsChangedHandler,
        scheduler: Scheduler,
        resolve_color: ColorResolver,
    ) -> None:
        self._reader = reader
        self._handler = handler
        self._scheduler = scheduler
        self._resolve_color = resolve_color
        self._chains: ActiveChains = self._build()

    @property
    def chains(self) -> ActiveChains:
        return self._chains

    def tick(self) -> bool:
        """
        Returns True when a change was detected and a notification scheduled.

        Errors from the snapshot build propagate; the retained snapshot is
        then left as it was.
        """
        current = self._build()

        if current == self._chains:
            logger.debug("Active chains unchanged", extra={"count": len(current)})
            return False

        self._chains = current

        logger.info(
            "Active chains changed",
            extra={"chain_ids": [chain.chain_id for chain in current]},
        )
        self._scheduler.call_soon(self._deliver, current)
        return True

    __call__ = tick

    def _build(self) -> ActiveChains:
        return read_active_chains(reader=self._reader, resolve_color=self._resolve_color)

    def _deliver(self, chains: ActiveChains) -> None:
        account = self._reader.get_selected_account()
        self._handler.chains_changed(account, chains)
