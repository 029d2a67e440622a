from __future__ import annotations

import copy
from typing import Any, Mapping

from wallet_state_engine.app.infrastructure.adapters.store.paths import resolve_path, split_path


class InMemoryStore:
    """
    Dict-backed, path-addressable store.

    Stands in for the application store in tests and replays. `get` returns
    live references into the tree; callers are expected to only read them.
    """

    def __init__(self, state: Mapping[str, Any] | None = None) -> None:
        self._state: dict[str, Any] = copy.deepcopy(dict(state or {}))

    def get(self, *path: str | int) -> Any:
        if not path:
            return self._state
        return resolve_path(self._state, path)

    def set(self, *path: str | int, value: Any) -> None:
        keys = split_path(path)
        if not keys:
            raise ValueError("Cannot replace the store root")

        node = self._state
        for key in keys[:-1]:
            child = node.get(key)
            if not isinstance(child, dict):
                child = {}
                node[key] = child
            node = child
        node[keys[-1]] = value

    def delete(self, *path: str | int) -> None:
        keys = split_path(path)
        if not keys:
            raise ValueError("Cannot delete the store root")

        parent = resolve_path(self._state, keys[:-1]) if len(keys) > 1 else self._state
        if isinstance(parent, dict):
            parent.pop(keys[-1], None)

    def replace(self, state: Mapping[str, Any]) -> None:
        self._state = copy.deepcopy(dict(state))
