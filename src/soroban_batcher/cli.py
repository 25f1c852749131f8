"""CLI entry point for soroban_batcher."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from soroban_batcher.config import load_config
from soroban_batcher.errors import BatcherError
from soroban_batcher.runner import run_batch
from soroban_batcher.stellar.provider import SorobanProvider
from soroban_batcher.storage.sqlite import SQLiteBatchStore


def _require_secret(cfg):
    """Exit with error if no keypair secret is configured."""
    if not cfg.keypair_secret:
        click.echo("Error: No keypair secret configured.", err=True)
        click.echo("Set SOROBAN_BATCHER_SECRET env var or keypair_secret in config.", err=True)
        sys.exit(1)


def _require_call(cfg):
    """Exit with error if the contract call is incomplete."""
    if not cfg.call.contract_id or not cfg.call.function:
        click.echo("Error: No contract call configured.", err=True)
        click.echo("Set [call] contract_id and function in config.", err=True)
        sys.exit(1)


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """soroban-batcher - nonce-sequenced transaction batches on block boundaries."""
    ctx.ensure_object(dict)
    cfg = load_config(config_path)
    ctx.obj["config"] = cfg

    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, cfg.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Batch ──────────────────────────────────────────────


@cli.command()
@click.option("--seed", type=int, default=None, help="Seed for the target-count RNG")
@click.option("--confirm/--no-confirm", default=None, help="Wait for inclusion after each tx")
@click.option("--no-history", is_flag=True, help="Do not record this run in the history DB")
@click.pass_context
def run(ctx: click.Context, seed: int | None, confirm: bool | None, no_history: bool) -> None:
    """Submit one batch of transactions and verify the resulting block.

    \b
    stellar-core accepts one pending transaction per source account. On a
    live network, without --confirm, the second submission is usually
    refused with TRY_AGAIN_LATER and the batch aborts. With --confirm the
    batch normally stops at the next ledger after one transaction.
    """
    cfg = ctx.obj["config"]
    _require_secret(cfg)
    _require_call(cfg)
    if seed is not None:
        cfg.seed = seed
    if confirm is not None:
        cfg.await_confirmation = confirm

    problems = cfg.validate()
    if problems:
        for p in problems:
            click.echo(f"Error: {p}", err=True)
        sys.exit(1)

    click.echo(f"Starting batch on {cfg.network} ({cfg.call.function})")
    try:
        report = asyncio.run(run_batch(cfg, record_history=not no_history))
    except BatcherError as exc:
        click.echo(f"\nBatch failed: {exc}", err=True)
        sys.exit(1)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Submitted:          {report.submitted_count}/{report.target_count}")
    click.echo(f"Nonces:             {report.nonces[0]}..{report.nonces[-1]}")
    click.echo(f"Stopped early:      {report.stopped_early}")
    click.echo(f"Verified block:     {report.verified_height}")
    click.echo(f"Block tx count:     {report.block_tx_count}")


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show effective configuration."""
    cfg = ctx.obj["config"]
    click.echo(f"Network:      {cfg.network}")
    click.echo(f"RPC URL:      {cfg.rpc_url}")
    click.echo(f"Contract:     {cfg.call.contract_id or '(not set)'}")
    click.echo(f"Function:     {cfg.call.function or '(not set)'}")
    click.echo(f"Args:         {' '.join(cfg.call.args) or '(none)'}")
    click.echo(f"Targets:      {cfg.min_target}-{cfg.max_target}")
    click.echo(f"Seed:         {cfg.seed if cfg.seed is not None else '(random)'}")
    click.echo(f"Poll:         {cfg.poll_interval}s")
    click.echo(f"Confirm:      {cfg.await_confirmation}")
    click.echo(f"DB path:      {cfg.db_path}")
    click.echo(f"Secret:       {'***configured***' if cfg.keypair_secret else '(not set)'}")


@cli.command()
@click.pass_context
def height(ctx: click.Context) -> None:
    """Print the node's current block (ledger) height."""
    cfg = ctx.obj["config"]

    async def _height() -> int:
        provider = SorobanProvider(cfg.rpc_url)
        try:
            return await provider.current_block_height()
        finally:
            await provider.close()

    try:
        click.echo(asyncio.run(_height()))
    except BatcherError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@cli.command()
@click.option("-n", "--limit", type=int, default=10, help="Number of recent batches to show")
@click.option("--nonces", is_flag=True, help="Also list the nonce log of each batch")
@click.pass_context
def history(ctx: click.Context, limit: int, nonces: bool) -> None:
    """Show recent batch runs."""
    cfg = ctx.obj["config"]

    async def _history():
        store = SQLiteBatchStore(cfg.db_path)
        await store.initialize()
        try:
            batches = await store.get_reports(limit)
            if not batches:
                click.echo("No batches recorded.")
                return

            for b in batches:
                line = (
                    f"  #{b.id} [{b.status:6s}] at={b.created_at} "
                    f"submitted={b.submitted_count}/{b.target_count} "
                    f"block={b.verified_height} block_txs={b.block_tx_count} "
                    f"early={b.stopped_early}"
                )
                if b.error:
                    line += f" error={b.error}"
                click.echo(line)
                if nonces:
                    for s in await store.get_submissions(b.id):
                        click.echo(f"      nonce={s.nonce} tx={s.tx_hash[:16]}...")
        finally:
            await store.close()

    asyncio.run(_history())


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
