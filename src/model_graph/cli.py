"""
Command line entry points for seeding, importing and serving.
"""
from pathlib import Path
from typing import Optional

import click

from .config import Config, configure_logging
from .ingest import SeedPipeline, get_seed_relationships, import_relationships_csv, load_candidates
from .schema import SeedOutcome, SeedSummary
from .storage import RelationshipStore, RelationshipStoreClient, create_store_engine


def _build_store(config: Config) -> RelationshipStore:
    engine = create_store_engine(config.database_url, config.store_timeout_seconds)
    client = RelationshipStoreClient(engine)
    client.create_tables()
    return RelationshipStore(client, config)


def _report(summary: SeedSummary) -> None:
    verb = "validated" if summary.dry_run else "created"
    click.echo(f"Seeding complete: {summary.success_count} {verb}, {summary.error_count} errors")
    for failure in summary.failures:
        click.echo(
            f"  #{failure.index} {failure.relationship_id or '-'} [{failure.kind}] {failure.message}",
            err=True,
        )
    if summary.outcome is SeedOutcome.EMPTY:
        click.echo("No relationships to seed. Add reviewed relationships through the API.")
    elif summary.outcome is SeedOutcome.COMPLETE:
        click.echo("All relationships seeded successfully.")


def _exit_code(summary: SeedSummary) -> int:
    return 0 if summary.outcome in (SeedOutcome.EMPTY, SeedOutcome.COMPLETE) else 1


@click.group()
def cli():
    """Mental model relationship catalog."""
    pass


@cli.command()
@click.option('--seed-file', '-f', type=click.Path(exists=True, dir_okay=False), help='YAML file of relationship candidates')
@click.option('--dry-run', is_flag=True, help='Validate candidates without writing')
def seed(seed_file: Optional[str], dry_run: bool):
    """Seed relationships from a YAML file or the built-in list."""
    config = Config.default()
    configure_logging(config)

    path = Path(seed_file) if seed_file else config.seed_file
    candidates = load_candidates(path) if path else get_seed_relationships()

    summary = SeedPipeline(_build_store(config)).run(candidates, dry_run=dry_run)
    _report(summary)
    raise SystemExit(_exit_code(summary))


@cli.command('import-csv')
@click.argument('csv_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--dry-run', is_flag=True, help='Validate rows without writing')
def import_csv(csv_file: str, dry_run: bool):
    """Import relationships from a CSV file."""
    config = Config.default()
    configure_logging(config)

    text = Path(csv_file).read_text(encoding="utf-8")
    summary = import_relationships_csv(_build_store(config), text, dry_run=dry_run)
    _report(summary)
    raise SystemExit(_exit_code(summary))


@cli.command()
@click.option('--host', default=None, help='Bind address (default from config)')
@click.option('--port', type=int, default=None, help='Port (default from config)')
def serve(host: Optional[str], port: Optional[int]):
    """Run the HTTP API."""
    import uvicorn

    config = Config.default()
    uvicorn.run(
        "model_graph.api.main:app",
        host=host or config.api_host,
        port=port or config.api_port,
    )


if __name__ == '__main__':
    cli()
