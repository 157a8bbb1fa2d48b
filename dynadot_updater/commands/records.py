"""Record listing command."""

import typer
from rich.console import Console
from rich.table import Table

from dynadot_updater.errors import FetchError
from dynadot_updater.log import get_run_logger, setup_logging
from dynadot_updater.models import RecordSet
from dynadot_updater.providers import DynadotProvider

console = Console()


def records_table(records: RecordSet, title: str | None = None) -> Table:
    """Render apex and subdomain records as one table."""
    table = Table(title=title)
    table.add_column("Host")
    table.add_column("Type")
    table.add_column("Value")

    for record in records.apex:
        table.add_row("@", record.record_type.upper(), record.value)
    for record in records.subdomains:
        table.add_row(record.host, record.record_type.upper(), record.value)

    return table


def show() -> None:
    """List the records Dynadot currently holds for the domain."""
    from dynadot_updater.commands.update import get_config

    config = get_config()
    setup_logging(config.log_verbose)

    provider = DynadotProvider(
        api_key=config.api_key,
        timeout=config.request_timeout,
        log_api_url=config.log_api_url,
        logger=get_run_logger(),
    )

    console.print(f"[bold]DNS records for {config.domain}[/bold]")

    try:
        records = provider.fetch_records(config.domain)
    except FetchError as e:
        console.print(f"[red]✗[/red] Failed to list records: {e}")
        raise typer.Exit(1)

    if not records.apex and not records.subdomains:
        console.print("  No records found")
        return

    console.print(records_table(records))
