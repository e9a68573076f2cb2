"""CLI commands for database setup."""

from __future__ import annotations

import click

from clubledger.infrastructure.bootstrap import settings
from clubledger.infrastructure.cli.errors import reporting_errors
from clubledger.infrastructure.persistence.sqlite_db import init_schema


@click.command("init")
def db_init() -> None:
    """Create the ledger tables if they do not exist."""
    db_path = settings().db_path
    with reporting_errors():
        init_schema(db_path)
    click.echo(f"Database ready at {db_path}")
