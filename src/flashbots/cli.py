"""Command line access to the bundle relay.

Reads FLASHBOTS_NETWORK_ID, FLASHBOTS_PRIVATE_KEY and FLASHBOTS_RELAY_URL
from the environment or a .env file.

Usage:
    python -m src.flashbots.cli simulate 0x02f8... 0x02f8...
    python -m src.flashbots.cli submit --block 17000000 0x02f8...
    python -m src.flashbots.cli stats --block 17000000 0xbundlehash
"""

import sys
from argparse import ArgumentParser, Namespace
from asyncio import run

from rich.console import Console
from rich.table import Table

from src.flashbots.client import FlashbotsClient
from src.flashbots.errors import BundleExecutionError, FlashbotsError
from src.flashbots.models import BundleResult, BundleStats
from src.helpers.config import load_relay_settings


console = Console()


def build_parser() -> ArgumentParser:
    """Create the argument parser for all subcommands."""
    parser = ArgumentParser(description="Talk to a Flashbots bundle relay")
    parser.add_argument("--relay-url", help="Relay endpoint overriding the default")
    sub = parser.add_subparsers(dest="command", required=True)

    simulate = sub.add_parser("simulate", help="Simulate a bundle on latest state")
    simulate.add_argument("txs", nargs="+", help="Signed raw transactions (hex)")

    submit = sub.add_parser("submit", help="Submit a bundle for a target block")
    submit.add_argument("--block", type=int, required=True, help="Target block")
    submit.add_argument("txs", nargs="+", help="Signed raw transactions (hex)")

    stats = sub.add_parser("stats", help="Fetch stats for a submitted bundle")
    stats.add_argument("--block", type=int, required=True, help="Target block")
    stats.add_argument("bundle_hash", help="Bundle hash returned by submit")

    return parser


def render_bundle_result(result: BundleResult) -> Table:
    """Render a bundle result as one row per transaction."""
    table = Table(title=f"Bundle {result.bundle_hash or '(no hash)'}")
    table.add_column("#", justify="right")
    table.add_column("Tx hash")
    table.add_column("From")
    table.add_column("Gas used", justify="right")
    table.add_column("Coinbase diff", justify="right")
    table.add_column("Error")

    for idx, tx in enumerate(result.results):
        table.add_row(
            str(idx),
            tx.tx_hash,
            tx.from_address,
            str(tx.gas_used),
            tx.coinbase_diff,
            tx.error or tx.revert,
        )

    table.caption = (
        f"bundle gas price {result.bundle_gas_price or '-'}, "
        f"coinbase diff {result.coinbase_diff or '-'}"
    )
    return table


def render_bundle_stats(stats: BundleStats) -> Table:
    """Render bundle stats as a two-column table."""
    table = Table(title="Bundle stats")
    table.add_column("Field")
    table.add_column("Value")
    for name, value in stats.model_dump().items():
        table.add_row(name, "-" if value is None else str(value))
    return table


async def main(args: Namespace) -> int:
    """Run one relay call and print the outcome.

    Returns:
        Process exit status
    """
    try:
        settings = load_relay_settings(relay_url=args.relay_url)
        async with FlashbotsClient.from_settings(settings) as client:
            if args.command == "simulate":
                console.print(render_bundle_result(await client.simulate_bundle(args.txs)))
            elif args.command == "submit":
                result = await client.submit_bundle(args.txs, args.block)
                console.print(render_bundle_result(result))
            else:
                stats = await client.get_bundle_stats(args.bundle_hash, args.block)
                console.print(render_bundle_stats(stats))
    except BundleExecutionError as e:
        console.print(f"[red]Bundle reverted:[/red] {e}")
        return 1
    except FlashbotsError as e:
        console.print(f"[red]{type(e).__name__}:[/red] {e}")
        return 1
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        return 1
    return 0


def run_cli() -> None:
    """Console script entry point."""
    sys.exit(run(main(build_parser().parse_args())))


if __name__ == "__main__":
    run_cli()
