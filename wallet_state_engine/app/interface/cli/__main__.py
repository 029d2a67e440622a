import asyncio
import inspect
import json
import logging
from typing import Any, List, Optional

import typer
from dotenv import load_dotenv
from InquirerPy import inquirer

from wallet_state_engine.app.config import settings
from wallet_state_engine.app.interface.tasks import TASKS
from wallet_state_engine.app.interface.tasks.balances_task import balances_task
from wallet_state_engine.app.interface.tasks.chains_task import active_chains_task
from wallet_state_engine.app.interface.tasks.fees_task import fee_range_task
from wallet_state_engine.app.interface.tasks.watch_task import replay_store_task


load_dotenv()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

app = typer.Typer()
state_app = typer.Typer(help="cli for deriving wallet state from store snapshots.")
app.add_typer(state_app, name="state")


def _echo(result: Any) -> None:
    typer.echo(json.dumps(result, indent=2, default=str))


@state_app.command("chains")
def chains(
    store_path: Optional[str] = typer.Option(None, "--store", help="JSON store dump."),
) -> None:
    _echo(asyncio.run(active_chains_task(store_path=store_path)))


@state_app.command("fees")
def fees(
    chain_id: int = typer.Option(1, "--chain-id"),
    gas_limit: str = typer.Option(..., "--gas-limit", help="Int or hex quantity."),
    fee_basis: str = typer.Option(..., "--fee", help="maxFeePerGas or gasPrice, in wei."),
    legacy: bool = typer.Option(False, "--legacy", help="Fee is a legacy gasPrice."),
    store_path: Optional[str] = typer.Option(None, "--store", help="JSON store dump."),
) -> None:
    _echo(
        asyncio.run(
            fee_range_task(
                chain_id=chain_id,
                gas_limit=gas_limit,
                fee_basis=fee_basis,
                uses_fee_market=not legacy,
                store_path=store_path,
            )
        )
    )


@state_app.command("balances")
def balances(
    account_id: Optional[str] = typer.Option(None, "--account"),
    filter_text: str = typer.Option("", "--filter"),
    collapsed: bool = typer.Option(False, "--collapsed"),
    store_path: Optional[str] = typer.Option(None, "--store", help="JSON store dump."),
) -> None:
    _echo(
        asyncio.run(
            balances_task(
                account_id=account_id,
                filter_text=filter_text,
                expanded=not collapsed,
                store_path=store_path,
            )
        )
    )


@state_app.command("watch")
def watch(store_paths: List[str] = typer.Argument(..., help="Store dumps, in mutation order.")) -> None:
    _echo(asyncio.run(replay_store_task(store_paths=store_paths)))


@state_app.command("run")
def run() -> None:
    task_name = inquirer.select(
        message="Select task:",
        choices=list(TASKS.keys()),
        pointer="❯",
        instruction="Use ↑/↓ to move, Enter to select",
    ).execute()

    task = TASKS[task_name]
    params = inspect.signature(task).parameters
    kwargs: dict[str, object] = {}

    if "store_path" in params:
        kwargs["store_path"] = inquirer.text(
            message="Store dump (JSON):",
            default=settings.store_snapshot_path or "",
        ).execute() or None
    if "store_paths" in params:
        raw_paths = inquirer.text(message="Store dumps, comma separated, in mutation order:").execute()
        kwargs["store_paths"] = [p.strip() for p in raw_paths.split(",") if p.strip()]
    if "chain_id" in params:
        kwargs["chain_id"] = int(
            inquirer.text(
                message="Chain ID (e.g. 1 for Ethereum mainnet):",
                default="1",
            ).execute()
        )
    if "gas_limit" in params:
        kwargs["gas_limit"] = inquirer.text(message="Gas limit:", default="21000").execute()
    if "fee_basis" in params:
        kwargs["fee_basis"] = inquirer.text(message="Max fee per gas (wei):").execute()
    if "uses_fee_market" in params:
        kwargs["uses_fee_market"] = inquirer.confirm(message="Fee-market (type 0x2) transaction?", default=True).execute()
    if "account_id" in params:
        kwargs["account_id"] = inquirer.text(
            message="Account (optional, empty = selected account):",
            default="",
        ).execute() or None
    if "filter_text" in params:
        kwargs["filter_text"] = inquirer.text(message="Filter (optional):", default="").execute()

    _echo(asyncio.run(task(**kwargs)))  # type: ignore


if __name__ == "__main__":
    typer.echo(f"--- {settings.project_name} CLI ---")
    app()
