from __future__ import annotations

from typing import Any, Mapping, Sequence


def split_path(path: Sequence[str | int]) -> list[str]:
    """
    Flatten a store path into string keys.

    ("main.networks", "ethereum", 1) -> ["main", "networks", "ethereum", "1"]
    """
    keys: list[str] = []
    for segment in path:
        if isinstance(segment, int):
            keys.append(str(segment))
        else:
            keys.extend(part for part in segment.split(".") if part)
    return keys


def resolve_path(tree: Any, path: Sequence[str | int]) -> Any:
    node = tree
    for key in split_path(path):
        if not isinstance(node, Mapping) or key not in node:
            return None
        node = node[key]
    return node
