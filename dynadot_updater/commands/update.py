"""Update command: publish the current IP to Dynadot."""

import typer
from pydantic import ValidationError
from rich.console import Console

from dynadot_updater.commands.records import records_table
from dynadot_updater.config import ConfigurationError, UpdaterConfig, load_config
from dynadot_updater.errors import UpdaterError
from dynadot_updater.log import setup_logging
from dynadot_updater.updater import run_update

console = Console()


def get_config() -> UpdaterConfig:
    """Load the configuration or exit with a readable message."""
    try:
        return load_config()
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] {e}")
        console.print("  Set DYNADOT_API_KEY and DYNADOT_UPDT_DOMAINS")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid configuration: {e}")
        raise typer.Exit(1)


def run(
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Compute the records to publish without pushing them"
    ),
) -> None:
    """Synchronize the domain's records with the current public IP."""
    config = get_config()
    setup_logging(config.log_verbose)

    try:
        result = run_update(config, dry_run=dry_run)
    except UpdaterError:
        # Already logged with the run's correlation id.
        raise typer.Exit(1)

    if dry_run:
        console.print(
            records_table(
                result.reconciled.records,
                title=f"Records to publish for {config.domain}",
            )
        )
    else:
        console.print(f"[green]✓[/green] {config.domain} updated to {result.ip}")
