"""CLI interface for the shipping rate report.

Usage:
    python -m rate_report.cli run                    # Write output/report.xlsx
    python -m rate_report.cli run --output out.xlsx  # Write somewhere else
    python -m rate_report.cli preview                # List sheets, write nothing
    python -m rate_report.cli --db data/rates.db seed   # Load sample rates locally
"""

import logging
import sys
from pathlib import Path

import click

from rate_report.config import load_settings
from rate_report.database import RateDatabase
from rate_report.pipeline import ReportPipeline
from rate_report.seed import load_rate_seed

logger = logging.getLogger(__name__)


def _fail(error: Exception):
    """Single exit point for a failed run."""
    logger.error(f"Report generation failed: {type(error).__name__}: {error}")
    click.echo(f"Report could not be generated. Details: {error}.", err=True)
    sys.exit(1)


@click.group()
@click.option("--config", "config_path", default=None, type=click.Path(path_type=Path),
              help="Report layout YAML (default: config/report.yaml)")
@click.option("--db", default=None, type=click.Path(path_type=Path),
              help="Local SQLite rates database (overrides RATES_DB_PATH)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path, db, verbose):
    """Shipping Rate Report Generator"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = load_settings(config_path)
    except Exception as e:
        _fail(e)
    ctx.obj["db_path"] = db


@cli.command()
@click.option("--client-id", default=None, type=int, help="Client whose rates to report")
@click.option("--output", default=None, type=click.Path(path_type=Path),
              help="Output workbook path (default: output/report.xlsx)")
@click.pass_context
def run(ctx, client_id, output):
    """Generate the rate workbook."""
    settings = ctx.obj["settings"]
    db = RateDatabase(ctx.obj["db_path"], settings=settings.connection)
    try:
        pipeline = ReportPipeline(db, settings.layout)
        result = pipeline.run(client_id=client_id, output_path=output)
    except Exception as e:
        _fail(e)
    finally:
        db.close()

    click.echo("\n--- Rate Report ---")
    click.echo(f"  Rows: {result['rows_fetched']} fetched, {result['rows_skipped']} skipped")
    for title in result["sheets"]:
        click.echo(f"  {title}")
    click.echo(f"\nWrote {len(result['sheets'])} sheets to {result['output_path']}")


@cli.command()
@click.option("--client-id", default=None, type=int, help="Client whose rates to report")
@click.pass_context
def preview(ctx, client_id):
    """List the sheets the report would contain, without writing it."""
    settings = ctx.obj["settings"]
    db = RateDatabase(ctx.obj["db_path"], settings=settings.connection)
    try:
        pipeline = ReportPipeline(db, settings.layout)
        tables = pipeline.build_tables(client_id)
    except Exception as e:
        _fail(e)
    finally:
        db.close()

    click.echo("--- Sheets ---\n")
    for table in tables:
        zones = len(table.header) - 2
        click.echo(f"  {table.title}: {len(table.data_rows)} weight tiers, {zones} zones")
    click.echo(f"\nTotal: {len(tables)} sheets")


@cli.command()
@click.option("--seed-file", default=None, type=click.Path(path_type=Path),
              help="YAML seed file (default: data/seed/sample_rates.yaml)")
@click.pass_context
def seed(ctx, seed_file):
    """Load sample rates into a local SQLite database."""
    settings = ctx.obj["settings"]
    db = RateDatabase(ctx.obj["db_path"], settings=settings.connection)
    if not db.is_sqlite:
        click.echo("Error: seed needs a local database (--db or RATES_DB_PATH).", err=True)
        sys.exit(1)
    try:
        counts = load_rate_seed(db, seed_file)
        total = db.count_rates(counts["client_id"])
    except Exception as e:
        _fail(e)
    finally:
        db.close()

    click.echo(f"Loaded {counts['rows_loaded']} rate rows ({counts['tiers_loaded']} tiers) "
               f"into {db.db_path}")
    click.echo(f"Client {counts['client_id']} now has {total} rate rows")


if __name__ == "__main__":
    cli()
