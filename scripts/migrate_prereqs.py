"""Move prerequisites from the legacy ``prerequisites`` collection to ``solutionPrerequisites``."""

import sys

import click
from rich.console import Console

from services.common.config import LEGACY_PREREQS_COLLECTION, SOLUTION_PREREQS_COLLECTION, configure_logging
from services.common.factory import BACKENDS, build_store
from services.core.migration import migrate_legacy_prerequisites

console = Console()


@click.command()
@click.option("--backend", type=click.Choice(BACKENDS), default=None, help="Store backend (default: POC_STORE_BACKEND).")
@click.option("--store-dir", type=click.Path(file_okay=False), default=None, help="Directory for the local JSON store.")
@click.option("--delete-legacy", is_flag=True, help="Delete the legacy documents after a successful copy.")
def main(backend, store_dir, delete_legacy):
    """Migrate legacy prerequisite documents."""
    configure_logging()
    store = build_store(backend, store_dir=store_dir)
    console.print("[blue]🔄 Starting prerequisite migration...[/blue]")

    def _report(record):
        console.print(f"   Migrating: {str(record.get('text', ''))[:60]}...")

    res = migrate_legacy_prerequisites(store, delete_legacy=delete_legacy, on_copy=_report)
    if not res.success:
        console.print(f"[red]❌ Error during migration: {res.error}[/red]")
        sys.exit(1)

    counts = res.item
    if counts["legacy"] == 0:
        console.print(f'[yellow]ℹ️  {res.message}.[/yellow]')
        console.print(f'[green]✅ Found {counts["current"]} prerequisites in "{SOLUTION_PREREQS_COLLECTION}" collection.[/green]')
        if counts["current"] == 0:
            console.print("[yellow]⚠️  No prerequisites found in either collection![/yellow]")
            console.print("   Run the seed script: python scripts/seed_database.py")
        return

    console.print(f"[green]✅ {res.message}.[/green]")
    if counts["deleted"]:
        console.print(f'   Deleted {counts["deleted"]} documents from "{LEGACY_PREREQS_COLLECTION}".')
    else:
        console.print(f'[yellow]⚠️  Old prerequisites still exist in "{LEGACY_PREREQS_COLLECTION}" collection.[/yellow]')
        console.print("   Re-run with --delete-legacy to remove them.")


if __name__ == "__main__":
    main()
