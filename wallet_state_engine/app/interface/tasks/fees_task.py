from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from wallet_state_engine.app.application.services.fee_range import (
    describe_fee_range,
    estimate_fee_range,
    fee_inputs_from_request,
)
from wallet_state_engine.app.domain.errors import ChainMetadataMissingError
from wallet_state_engine.app.infrastructure.factories.store_reader_factory import store_reader_factory

logger = logging.getLogger(__name__)


async def fee_range_task(
    *,
    chain_id: int,
    gas_limit: int | str,
    fee_basis: int | str,
    uses_fee_market: bool = True,
    store_path: str | None = None,
    backend: str = "json",
) -> dict[str, Any]:
    """
    Task: estimate the fee range of a transaction on a chain.

    - gas_limit / fee_basis accept ints or hex quantities,
    - native currency, its USD quote and the testnet flag come from the store.
    """
    data: dict[str, Any] = {
        "chainId": chain_id,
        "gasLimit": gas_limit,
        "type": "0x2" if uses_fee_market else "0x0",
        ("maxFeePerGas" if uses_fee_market else "gasPrice"): fee_basis,
    }
    inputs = fee_inputs_from_request(data)

    reader = store_reader_factory(backend=backend, path=store_path)
    meta = reader.get_chains_meta().get(inputs.chain_id)
    if meta is None or meta.native_currency is None:
        raise ChainMetadataMissingError(inputs.chain_id)
    chain = reader.get_chains().get(inputs.chain_id)

    fee_range = estimate_fee_range(inputs.gas_limit, inputs.fee_basis, inputs.uses_fee_market)
    display = describe_fee_range(
        fee_range,
        native_currency=meta.native_currency,
        is_testnet=chain.is_testnet if chain is not None else False,
    )

    logger.info(
        "Estimated fee range",
        extra={"chain_id": inputs.chain_id, "max_fee": str(fee_range.max_fee)},
    )
    return {"range": asdict(fee_range), "display": asdict(display)}
