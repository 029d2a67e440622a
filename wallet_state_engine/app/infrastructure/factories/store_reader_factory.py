from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Mapping

from wallet_state_engine.app.config import settings
from wallet_state_engine.app.domain.ports.out import ChainStateReader
from wallet_state_engine.app.infrastructure.adapters.store.json_store import JsonFileStore
from wallet_state_engine.app.infrastructure.adapters.store.memory_store import InMemoryStore
from wallet_state_engine.app.infrastructure.adapters.store.state_reader import StoreStateReader

StoreReaderFactory = Callable[..., ChainStateReader]

_STORE_READER_REGISTRY: Dict[str, StoreReaderFactory] = {}


def _make_memory_reader(*, state: Mapping[str, Any] | None = None, **_: Any) -> ChainStateReader:
    return StoreStateReader(InMemoryStore(state))


def _make_json_reader(*, path: str | Path | None = None, **_: Any) -> ChainStateReader:
    """
    Wire a reader over a JSON store dump.

    Falls back to STORE_SNAPSHOT_PATH when no path is given.
    """
    resolved = path or settings.store_snapshot_path
    if not resolved:
        raise ValueError("No store snapshot path given and STORE_SNAPSHOT_PATH is not set")
    return StoreStateReader(JsonFileStore(path=Path(resolved)))


# Register backends
_STORE_READER_REGISTRY["memory"] = _make_memory_reader
_STORE_READER_REGISTRY["json"] = _make_json_reader


def store_reader_factory(*, backend: str, **kwargs: Any) -> ChainStateReader:
    """
    Create a typed store reader for the given backend.

    - "memory": dict-backed store, `state=` initial tree,
    - "json":   JSON dump read on every access, `path=` file path.
    """
    try:
        factory = _STORE_READER_REGISTRY[backend]
    except KeyError:
        raise ValueError(f"Unsupported store backend: {backend!r}")

    return factory(**kwargs)
