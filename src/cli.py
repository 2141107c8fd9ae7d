#!/usr/bin/env python3
"""Command Line Interface for the Realty CRM API.

Usage:
    cd src
    python cli.py server       # Start API server
    python cli.py init-db      # Create missing tables
    python cli.py seed         # Insert demo data
    python cli.py dashboard    # Print a realtor's dashboard numbers
    python cli.py info         # Show configuration
"""
from __future__ import annotations

import json
from typing import Optional

import typer
import uvicorn

from core.config import get_settings
from core.logging_config import get_logger, setup_logging
from core.db import get_session

LOGGER = get_logger(__name__)
SETTINGS = get_settings()

app = typer.Typer(help="Realty CRM API CLI")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """Realty CRM - listings, leads and messaging for realtors."""
    log_level = "DEBUG" if verbose else SETTINGS.log_level
    setup_logging(level=log_level, json_format=SETTINGS.log_format == "json")


@app.command("server")
def run_server(
    host: str = typer.Option(SETTINGS.server_host, help="Host to bind to"),
    port: int = typer.Option(SETTINGS.server_port, help="Port to bind to"),
    reload: bool = typer.Option(False, help="Enable auto-reload for development"),
) -> None:
    """Start the API server."""
    typer.echo(f"Starting API server on {host}:{port}...")
    uvicorn.run("api.app:app", host=host, port=port, reload=reload)


# =============================================================================
# Database Commands
# =============================================================================


@app.command("init-db")
def init_database() -> None:
    """Create any missing tables."""
    from core.db import init_db

    result = init_db()
    if result["tables_created"]:
        typer.secho(f"✓ Created tables: {', '.join(result['tables_created'])}", fg="green")
    else:
        typer.secho("✓ All tables already exist", fg="green")
    for warning in result["warnings"]:
        typer.secho(f"  ! {warning}", fg="yellow")


@app.command("seed")
def seed() -> None:
    """Insert demo data. Kinds that already have rows are left alone."""
    from core.bootstrap import bootstrap_application

    typer.echo("Seeding demo data...")
    try:
        result = bootstrap_application(seed=True)
    except Exception as e:
        typer.secho(f"✗ Seeding failed: {e}", fg="red")
        raise typer.Exit(1)

    if result["seeded"]:
        for kind, count in result["seeded"].items():
            typer.echo(f"  {kind}: {count}")
        typer.secho("✓ Demo data seeded", fg="green")
    else:
        typer.secho("✓ Nothing to seed", fg="green")


@app.command("dashboard")
def show_dashboard(
    username: Optional[str] = typer.Option(None, "--user", "-u", help="Realtor username"),
) -> None:
    """Print the dashboard numbers for a realtor."""
    from core.exceptions import NotFoundError
    from domain.dashboard import DashboardService
    from domain.users import UserService

    with get_session() as session:
        try:
            user = UserService(session).get_by_username(username or SETTINGS.default_username)
        except NotFoundError as e:
            typer.secho(f"✗ {e}", fg="red")
            raise typer.Exit(1)
        name = user.name
        summary = DashboardService(session).as_dict(user.id)

    typer.echo(f"Dashboard for {name}:")
    typer.echo(json.dumps(summary, indent=2))


# =============================================================================
# Utility Commands
# =============================================================================


@app.command("info")
def show_info() -> None:
    """Show application configuration info."""
    typer.echo("Realty CRM Configuration:")
    typer.echo(f"  Environment: {SETTINGS.environment}")
    typer.echo(f"  Database: {SETTINGS.database_url}")
    typer.echo(f"  API Prefix: {SETTINGS.api_prefix or '/'}")
    typer.echo(f"  Default User: {SETTINGS.default_username}")
    typer.echo(f"  Log Level: {SETTINGS.log_level} ({SETTINGS.log_format})")
    typer.echo(f"  New Lead Window: {SETTINGS.new_lead_window_days} days")
    typer.echo(f"  Seed Demo Data: {SETTINGS.seed_demo_data}")


if __name__ == "__main__":
    app()
