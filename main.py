#!/usr/bin/env python3
"""
CTDB - Consulting timesheet database importer
==============================================

Run the API server:   python main.py
Import from the CLI:  flask --app main import-data --mode upsert [--truncate]

See config.py for all environment-variable tunables.
"""

import logging

import click
from flask import Flask

import config
from db import init_db
from api import api_bp
from import_engine import (
    ImportMode, ImportOptions, ImportReport, format_bytes, run_import,
)


def create_app(overrides: dict | None = None) -> Flask:
    """Flask application factory."""

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = config.SECRET
    app.config.update(
        CTDB_DB_URL=config.DB_URL,
        CTDB_DATA_DIR=config.DATA_DIR,
    )
    if overrides:
        app.config.update(overrides)

    # ── Initialise database ─────────────────────────────────────────
    init_db(app.config["CTDB_DB_URL"])

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    # ── CLI ─────────────────────────────────────────────────────────
    @app.cli.command("import-data")
    @click.option("--mode", type=click.Choice([m.value for m in ImportMode]),
                  default=config.IMPORT_MODE, show_default=True)
    @click.option("--truncate/--no-truncate", default=config.IMPORT_TRUNCATE,
                  help="Empty each table before importing it.")
    def import_data(mode, truncate):
        """Import every <TABLE>.csv found in the data directory."""
        options = ImportOptions.from_values(mode, truncate)
        report = run_import(options, data_dir=app.config["CTDB_DATA_DIR"])
        print_report(report)

    return app


def print_report(report: ImportReport, echo=click.echo) -> None:
    """Console rendering of an ImportReport."""
    echo(f"  Files found: {len(report.files)}")
    for table, info in report.files.items():
        echo(f"    {info.path.name} - {info.rows} rows ({format_bytes(info.size)})")
    if report.missing:
        echo(f"  Missing: {', '.join(report.missing)}")

    for event in report.events:
        where = event.table or "-"
        if event.row is not None:
            where += f" row {event.row}"
        echo(f"  [{event.level}] {where}: {event.message}")

    for table, t in report.tables.items():
        if t.status == "missing":
            continue
        s = t.stats
        echo(f"  {table:<20} {t.status:<9} processed={s.processed} "
             f"inserted={s.inserted} updated={s.updated} "
             f"errors={s.errors} skipped={s.skipped}")

    s = report.stats
    echo(f"  Total: {s.processed} processed, {s.inserted} inserted, "
         f"{s.updated} updated, {s.errors} errors, {s.skipped} skipped "
         f"({s.success_rate}% written)")
    if report.success:
        echo("  Import completed without errors.")
    else:
        echo("  WARNING: errors were detected, see details above.")


def main():
    print("=" * 56)
    print("  CTDB - Import API")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_URL}")
    print(f"  Data dir: {config.DATA_DIR}")
    print(f"\n  http://{config.HOST}:{config.PORT}/api/v1/import")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
