from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from .balances_task import balances_task
from .chains_task import active_chains_task
from .fees_task import fee_range_task
from .watch_task import replay_store_task

TaskFn = Callable[..., Awaitable[Any]]

TASKS: dict[str, TaskFn] = {
    "chains__active_chains_task": active_chains_task,
    "fees__fee_range_task": fee_range_task,
    "balances__balances_task": balances_task,
    "observers__replay_store_task": replay_store_task,
}
