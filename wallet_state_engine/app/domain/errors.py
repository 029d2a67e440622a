from __future__ import annotations

from typing import Sequence


class WalletStateError(Exception):
    """Base class for errors raised by the wallet state engine."""


class ChainMetadataMissingError(WalletStateError, LookupError):
    """
    An enabled chain has no usable metadata entry.

    Raised while building the active-chain snapshot. Callers must treat the
    whole build as failed; a partial snapshot is never published.
    """

    def __init__(self, chain_id: int, *, field: str | None = None) -> None:
        self.chain_id = chain_id
        self.field = field
        what = f"metadata field {field!r}" if field else "metadata"
        super().__init__(f"Missing {what} for enabled chain_id={chain_id}")


class StoreDataError(WalletStateError, ValueError):
    """A value read from the store does not have the expected shape."""

    def __init__(self, path: Sequence[str | int], message: str) -> None:
        self.path = tuple(path)
        super().__init__(f"{'.'.join(str(p) for p in self.path)}: {message}")
