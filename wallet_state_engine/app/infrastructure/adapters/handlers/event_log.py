from __future__ import annotations

import logging

from wallet_state_engine.app.domain.models import ActiveChains, ChainEvent

logger = logging.getLogger(__name__)


class EventLog:
    """
    Handler for all three notifications that records them in emission order.

    Delivery to clients is the transport's job; this adapter only collects
    payloads (for the CLI replay and for tests) and logs them.
    """

    def __init__(self) -> None:
        self._events: list[ChainEvent] = []

    @property
    def events(self) -> list[ChainEvent]:
        return list(self._events)

    def clear(self) -> None:
        self._events.clear()

    def chains_changed(self, account: str | None, chains: ActiveChains) -> None:
        logger.info("chainsChanged", extra={"account": account, "count": len(chains)})
        self._events.append(
            ChainEvent(
                kind="chainsChanged",
                payload={"account": account, "chains": [chain.to_payload() for chain in chains]},
            )
        )

    def chain_changed(self, chain_id: int, origin_id: str) -> None:
        logger.info("chainChanged", extra={"chain_id": chain_id, "origin_id": origin_id})
        self._events.append(
            ChainEvent(kind="chainChanged", payload={"chainId": chain_id, "originId": origin_id})
        )

    def network_changed(self, network_id: int, origin_id: str) -> None:
        logger.info("networkChanged", extra={"network_id": network_id, "origin_id": origin_id})
        self._events.append(
            ChainEvent(kind="networkChanged", payload={"networkId": network_id, "originId": origin_id})
        )
