from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from wallet_state_engine.app.infrastructure.adapters.store.paths import resolve_path


class JsonFileStore:
    """
    Read-only store backed by a JSON dump of the application state.

    The file is read again on every `get`, so a process rewriting the dump
    is picked up on the next read.
    """

    def __init__(self, *, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def get(self, *path: str | int) -> Any:
        state = self._load()
        if not path:
            return state
        return resolve_path(state, path)

    def _load(self) -> Any:
        if not self._path.exists():
            raise FileNotFoundError(f"Store snapshot not found: {self._path}")
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Unsupported store snapshot in {self._path}. Expected a JSON object.")
        return data
