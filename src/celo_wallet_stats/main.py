"""
Main CLI application for Celo Wallet Stats.
"""

from .utils import format_number
from .models import WalletScore, WalletStats
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import json
from pathlib import Path

import requests
import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from web3 import Web3

from .config import Config
from .api_clients import CeloscanClient
from .exceptions import WalletStatsError
from .service import CeloscanService

# Logging setup
import logging
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="celo-stats",
    help="Compute activity and NFT trading stats for a Celo wallet."
)

console = Console()


def load_config() -> Config:
    """Load application configuration."""
    try:
        return Config.from_env()
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        console.print(
            "\n[yellow]Please create a .env file with your API key:[/yellow]")
        console.print("CELOSCAN_API_KEY=your_key_here")
        raise typer.Exit(1)


def display_address(address: str) -> str:
    """Checksummed form of an address for display."""
    try:
        return Web3.to_checksum_address(address)
    except ValueError:
        return address


def stats_to_dict(wallet_score: WalletScore) -> Dict[str, Any]:
    """Serialize a wallet score for JSON output."""
    stats = wallet_score.stats
    return {
        'address': wallet_score.address,
        'score': wallet_score.score,
        'generated_at': datetime.now(timezone.utc).isoformat(),
        'stats': {
            'no_data': stats.no_data,
            'balance': str(stats.balance),
            'wallet_age': stats.wallet_age,
            'total_transactions': stats.total_transactions,
            'min_transaction_time': stats.min_transaction_time,
            'max_transaction_time': stats.max_transaction_time,
            'average_transaction_time': stats.average_transaction_time,
            'wallet_turnover': str(stats.wallet_turnover),
            'last_month_transactions': stats.last_month_transactions,
            'time_from_last_transaction': stats.time_from_last_transaction,
            'nft_holding': stats.nft_holding,
            'nft_trading': str(stats.nft_trading),
            'nft_worth': str(stats.nft_worth),
            'deployed_contracts': stats.deployed_contracts,
            'tokens_holding': stats.tokens_holding,
        },
    }


def display_stats_table(wallet_score: WalletScore):
    """Display results in a rich table."""
    stats: WalletStats = wallet_score.stats

    console.print(Panel(
        f"Address: [yellow]{display_address(wallet_score.address)}[/yellow]\n"
        f"Score: [green]{wallet_score.score if wallet_score.score is not None else 'N/A'}[/green]",
        title="Celo Wallet",
        expand=False
    ))

    if stats.no_data:
        console.print(
            "[yellow]Not enough transaction history to compute stats.[/yellow]")
        return

    table = Table(title="\nWallet Stats")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="green", justify="right")

    rows = [
        ("Balance (CELO)", format_number(stats.balance, 4)),
        ("Wallet age (months)", str(stats.wallet_age)),
        ("Total transactions", f"{stats.total_transactions:,}"),
        ("Min time between txs (h)", f"{stats.min_transaction_time:.2f}"),
        ("Max time between txs (h)", f"{stats.max_transaction_time:.2f}"),
        ("Avg time between txs (h)", f"{stats.average_transaction_time:.2f}"),
        ("Turnover (CELO)", format_number(stats.wallet_turnover, 4)),
        ("Transactions last month", str(stats.last_month_transactions)),
        ("Months since last tx", str(stats.time_from_last_transaction)),
        ("NFTs holding", str(stats.nft_holding)),
        ("NFT trading (CELO)", format_number(stats.nft_trading, 4)),
        ("NFT worth (CELO)", format_number(stats.nft_worth, 4)),
        ("Deployed contracts", str(stats.deployed_contracts)),
        ("Tokens holding", str(stats.tokens_holding)),
    ]
    for metric, value in rows:
        table.add_row(metric, value)

    console.print(table)


def export_to_json(wallet_score: WalletScore, filepath: str):
    """Export results to JSON."""
    with open(filepath, 'w') as jsonfile:
        json.dump(stats_to_dict(wallet_score), jsonfile, indent=2, default=str)


@app.command()
def stats(
    address: str = typer.Argument(..., help="Celo wallet address (0x...)"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json"),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output file path"),
):
    """Compute stats for a Celo wallet."""

    config = load_config()
    if output_format:
        config.output_format = output_format

    if output_file and config.output_format != "json":
        raise typer.BadParameter(
            "only json output can be written to a file", param_hint="'--format'")

    logging.basicConfig(level=getattr(logging, config.log_level, logging.WARNING))

    service = CeloscanService(CeloscanClient(config))

    console.print(f"[cyan]Fetching wallet data for {address}...[/cyan]")
    try:
        result = service.get_wallet_stats(address)
    except WalletStatsError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)
    except requests.RequestException as e:
        console.print(f"[red]Request to Celoscan failed: {e}[/red]")
        raise typer.Exit(1)

    wallet_score = result.data

    if output_file:
        export_to_json(wallet_score, output_file)
        console.print(f"[green]Results exported to {output_file}[/green]")
    elif config.output_format == "json":
        console.print_json(json.dumps(stats_to_dict(wallet_score), default=str))
    else:
        display_stats_table(wallet_score)


@app.command()
def setup():
    """Setup the application by creating a .env file template."""
    env_content = """# Celo Wallet Stats Configuration

# Required: Celoscan API Key (get from https://celoscan.io/apis)
CELOSCAN_API_KEY=your_celoscan_api_key_here

# Request Settings
MAX_TRANSACTIONS_PER_REQUEST=10000
RATE_LIMIT_DELAY=0.2
REQUEST_TIMEOUT=30

# Output Settings
OUTPUT_FORMAT=table
LOG_LEVEL=WARNING
"""

    env_path = Path(".env")
    if env_path.exists():
        console.print("[yellow].env file already exists![/yellow]")
        if not typer.confirm("Overwrite existing .env file?"):
            return

    with open(env_path, 'w') as f:
        f.write(env_content)

    console.print(f"[green]Created .env file at {env_path.absolute()}[/green]")
    console.print(
        "\n[yellow]Please edit the .env file and add your API key:[/yellow]")
    console.print("1. Get a Celoscan API key from https://celoscan.io/apis")
    console.print(
        "2. Replace 'your_celoscan_api_key_here' with your real key")
    console.print("3. Run: celo-stats stats <address>")


if __name__ == "__main__":
    app()
