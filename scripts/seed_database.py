"""Load the starter solutions, use cases and prerequisites into the store."""

import sys

import click
from rich.console import Console
from rich.table import Table

from services.common.config import configure_logging
from services.common.factory import BACKENDS, build_store
from services.common.seed_data import SEED_SOLUTIONS
from services.core.catalog import CatalogService

console = Console()


@click.command()
@click.option("--backend", type=click.Choice(BACKENDS), default=None, help="Store backend (default: POC_STORE_BACKEND).")
@click.option("--store-dir", type=click.Path(file_okay=False), default=None, help="Directory for the local JSON store.")
@click.option("--force", is_flag=True, help="Seed even when solutions already exist.")
def main(backend, store_dir, force):
    """Seed the catalog with the starter dataset."""
    configure_logging()
    catalog = CatalogService(build_store(backend, store_dir=store_dir))
    console.print("[blue]🌱 Seeding database...[/blue]")

    res = catalog.seed_initial_data(SEED_SOLUTIONS, force=force)
    if not res.success:
        console.print(f"[red]❌ Error seeding database: {res.error}[/red]")
        sys.exit(1)
    if not res.item:
        console.print(f"[yellow]ℹ️  {res.message}. Use --force to add the starter data anyway.[/yellow]")
        return

    table = Table(title="Seeded")
    table.add_column("Collection")
    table.add_column("Documents", justify="right")
    for label, count in res.item.items():
        table.add_row(label.replace("_", " "), str(count))
    console.print(table)
    console.print(f"[green]✅ {res.message}[/green]")


if __name__ == "__main__":
    main()
