from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Sequence

from wallet_state_engine.app.infrastructure.adapters.handlers.event_log import EventLog
from wallet_state_engine.app.infrastructure.adapters.store.json_store import JsonFileStore
from wallet_state_engine.app.infrastructure.adapters.store.memory_store import InMemoryStore
from wallet_state_engine.app.infrastructure.adapters.store.state_reader import StoreStateReader
from wallet_state_engine.app.infrastructure.factories.observers_factory import observers_factory
from wallet_state_engine.app.infrastructure.scheduling.deferred import AsyncioScheduler

logger = logging.getLogger(__name__)


async def replay_store_task(*, store_paths: Sequence[str]) -> list[dict[str, Any]]:
    """
    Task: replay a sequence of store dumps through both observers.

    - the first dump is the baseline (observers are constructed on it and
      ticked once, which records origin chains without emitting),
    - each following dump replaces the store contents and counts as one
      mutation tick,
    - deferred chainsChanged deliveries run on the event loop between ticks.

    Returns the emitted events in delivery order.
    """
    if not store_paths:
        raise ValueError("At least one store snapshot is required")

    paths = [Path(p) for p in store_paths]
    store = InMemoryStore(JsonFileStore(path=paths[0]).get())
    events = EventLog()

    observers = observers_factory(
        reader=StoreStateReader(store),
        chains_handler=events,
        origin_handler=events,
        scheduler=AsyncioScheduler(),
    )
    observers.tick()
    await asyncio.sleep(0)

    for tick, path in enumerate(paths[1:], start=1):
        logger.info("Replaying store snapshot", extra={"tick": tick, "path": str(path)})
        store.replace(JsonFileStore(path=path).get())
        observers.tick()
        # let deferred notifications run before the next mutation
        await asyncio.sleep(0)

    return [asdict(event) for event in events.events]
