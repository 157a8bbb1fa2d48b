"""CLI entry point for the Dynadot updater."""

import typer
from rich.console import Console

from dynadot_updater import __version__
from dynadot_updater.commands import records, update

app = typer.Typer(
    name="dynadot-updater",
    help="Keep Dynadot DNS records pointed at this machine's public IP.",
    no_args_is_help=True,
)
console = Console()

app.command(name="run")(update.run)
app.command(name="records")(records.show)


@app.command()
def version() -> None:
    """Show the updater version."""
    console.print(f"Dynadot Updater v{__version__}")


@app.callback()
def main() -> None:
    """Dynadot Updater - dynamic DNS for Dynadot domains."""
    pass


if __name__ == "__main__":
    app()
