from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from store_state import make_state

from wallet_state_engine.app.infrastructure.adapters.handlers.event_log import EventLog
from wallet_state_engine.app.infrastructure.adapters.store.memory_store import InMemoryStore
from wallet_state_engine.app.infrastructure.adapters.store.state_reader import StoreStateReader
from wallet_state_engine.app.infrastructure.colors.palette import PaletteColorResolver
from wallet_state_engine.app.infrastructure.scheduling.deferred import DeferredCallQueue


@pytest.fixture
def state() -> dict[str, Any]:
    return make_state()


@pytest.fixture
def store(state) -> InMemoryStore:
    return InMemoryStore(state)


@pytest.fixture
def reader(store) -> StoreStateReader:
    return StoreStateReader(store)


@pytest.fixture
def resolver() -> PaletteColorResolver:
    return PaletteColorResolver()


@pytest.fixture
def queue() -> DeferredCallQueue:
    return DeferredCallQueue()


@pytest.fixture
def events() -> EventLog:
    return EventLog()


@pytest.fixture
def write_state(tmp_path):
    """Write a store dump to a JSON file and return its path."""

    def _write(name: str, data: dict[str, Any]) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
