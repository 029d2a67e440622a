from __future__ import annotations

import logging
import time
from dataclasses import asdict
from typing import Any

from wallet_state_engine.app.application.services.balances import (
    aggregate_balances,
    all_chains_updated,
    summarize_balances,
)
from wallet_state_engine.app.infrastructure.factories.store_reader_factory import store_reader_factory

logger = logging.getLogger(__name__)


async def balances_task(
    *,
    account_id: str | None = None,
    filter_text: str = "",
    expanded: bool = True,
    store_path: str | None = None,
    backend: str = "json",
) -> dict[str, Any]:
    """
    Task: aggregate an account's balances across chains.

    Uses the selected account when `account_id` is not given.
    """
    reader = store_reader_factory(backend=backend, path=store_path)

    account_id = account_id or reader.get_selected_account()
    if not account_id:
        raise ValueError("No account given and no account is selected")

    account = reader.get_account(account_id)
    address = account.address if account is not None else account_id

    now_ms = int(time.time() * 1000)
    chains = reader.get_chains()
    populated = reader.get_populated_chains(address)

    aggregate = aggregate_balances(
        reader.get_balances(address),
        reader.get_rates(),
        filter_text,
        chains=chains,
        chains_meta=reader.get_chains_meta(),
        populated_chains=populated,
        now_ms=now_ms,
    )
    summary = summarize_balances(
        aggregate,
        expanded=expanded,
        all_chains_updated=all_chains_updated(chains=chains, populated_chains=populated, now_ms=now_ms),
        signer_type=account.last_signer_type if account is not None else None,
    )

    logger.info(
        "Aggregated balances",
        extra={"address": address, "count": len(aggregate.balances)},
    )
    return asdict(summary)
