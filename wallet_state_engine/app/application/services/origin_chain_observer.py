from __future__ import annotations

import logging
from typing import Mapping

from wallet_state_engine.app.domain.ports.out import ChainStateReader, OriginChainHandler

logger = logging.getLogger(__name__)


class OriginChainObserver:
    """
    Emits per-origin chain switch events.

    Remembers the last chain id seen for every origin. An origin seen for the
    first time only records a baseline. When a known origin's chain id
    differs, `chain_changed` and then `network_changed` are emitted
    synchronously, inside `tick()`.

    Entries for origins that disappear are kept; they never emit again unless
    the origin comes back.
    """

    def __init__(self, *, reader: ChainStateReader, handler: OriginChainHandler) -> None:
        self._reader = reader
        self._handler = handler
        self._known: dict[str, int] = {}

    @property
    def known_origins(self) -> Mapping[str, int]:
        return dict(self._known)

    def tick(self) -> int:
        """Returns the number of origins whose chain changed."""
        changed = 0

        for origin_id, origin in self._reader.get_current_origins().items():
            previous = self._known.get(origin_id)

            if previous is not None and previous != origin.chain_id:
                logger.info(
                    "Origin switched chain",
                    extra={
                        "origin_id": origin_id,
                        "from_chain_id": previous,
                        "to_chain_id": origin.chain_id,
                    },
                )
                self._handler.chain_changed(origin.chain_id, origin_id)
                self._handler.network_changed(origin.chain_id, origin_id)
                changed += 1

            self._known[origin_id] = origin.chain_id

        return changed

    __call__ = tick
