"""CLI commands for event RSVP management."""

import asyncio
from pathlib import Path

import typer
import uvicorn

from src.admins.auth.config import get_auth_config
from src.admins.dtos import AdminAlreadyExistsError, AdminProvisioningError, AdminRole
from src.admins.features.create_admin.write_model import RepositoryCreateAdminWriteModel
from src.admins.features.dashboard.export import rsvps_csv
from src.admins.features.dashboard.stats import StatsService
from src.admins.repository.read_models import SqlAdminReadModel
from src.admins.repository.write_models import SqlAdminWriteModel
from src.config.logging import setup_logging
from src.config.settings import settings
from src.guests.dtos import AddressDTO
from src.guests.features.create_guest.write_model import SqlGuestCreateWriteModel
from src.guests.features.import_guests.importer import (
    GuestImportError,
    import_guests as import_guest_rows,
    parse_guest_csv,
)
from src.guests.invite import normalize_max_party_size, parse_household_members
from src.guests.repository.read_models import SqlGuestReadModel, SqlRSVPReadModel

app = typer.Typer(help="CLI commands for event RSVP management")


@app.callback()
def main():
    setup_logging()


@app.command()
def serve(
    host: str = typer.Option(settings.app_host, "--host", help="Interface to bind"),
    port: int = typer.Option(settings.app_port, "--port", "-p", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the API server."""
    uvicorn.run("src.main:app", host=host, port=port, reload=reload)


@app.command()
def create_admin(
    email: str = typer.Option(..., "--email", "-e", help="Admin email (must be allow-listed)"),
    name: str = typer.Option(..., "--name", "-n", help="Admin display name"),
    role: str = typer.Option(AdminRole.ADMIN.value, "--role", "-r", help="admin or viewer"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Admin password"
    ),
):
    """Create an admin account."""
    write_model = RepositoryCreateAdminWriteModel(
        config=get_auth_config(),
        read_model=SqlAdminReadModel(),
        write_model=SqlAdminWriteModel(),
    )

    try:
        admin = asyncio.run(write_model.create_admin(email, name, role, password))
    except (AdminProvisioningError, AdminAlreadyExistsError) as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Admin created!", fg=typer.colors.GREEN)
    typer.secho(f"  Email: {admin.email}", fg=typer.colors.BLUE)
    typer.secho(f"  Name: {admin.name}", fg=typer.colors.BLUE)
    typer.secho(f"  Role: {admin.role.value}", fg=typer.colors.CYAN)


@app.command()
def create_guest(
    primary_guest: str = typer.Argument(..., help="Name the invitation is addressed to"),
    household_members: str = typer.Option(
        "", "--household", "-h", help="Other household members, separated by semicolons"
    ),
    max_party_size: str = typer.Option("1", "--max-party-size", "-m", help="Most people allowed"),
    email: str = typer.Option(None, "--email", "-e", help="Contact email"),
):
    """Create a single guest with a new invitation code."""
    write_model = SqlGuestCreateWriteModel()
    try:
        guest = asyncio.run(
            write_model.create_guest(
                primary_guest=primary_guest,
                household_members=parse_household_members(household_members),
                max_party_size=normalize_max_party_size(max_party_size),
                email=email,
                address=AddressDTO(),
            )
        )
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Guest created!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {guest.primary_guest}", fg=typer.colors.BLUE)
    typer.secho(f"  Code: {guest.invitation_code}", fg=typer.colors.CYAN)
    typer.secho(f"  Guest ID: {guest.id}", fg=typer.colors.CYAN)


@app.command()
def import_guests(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV guest list"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Validate the CSV and show what would be imported"
    ),
):
    """Import guests from a CSV file with a header row."""
    try:
        with file.open(newline="", encoding="utf-8-sig") as stream:
            rows = parse_guest_csv(stream)
    except GuestImportError as e:
        typer.secho(f"Failed to parse CSV: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.echo(f"Parsed {len(rows)} guests from CSV")

    if dry_run:
        typer.echo()
        typer.secho("Dry run - guests that would be imported:", fg=typer.colors.YELLOW)
        for row in rows:
            typer.secho(f"  Name: {row.primary_guest}", fg=typer.colors.BLUE)
            typer.echo(f"  Party Size: {row.max_party_size}")
            if row.household_members:
                typer.echo(f"  Household: {', '.join(row.household_members)}")
            if row.email:
                typer.echo(f"  Email: {row.email}")
            typer.echo()
        typer.echo(f"Total: {len(rows)} guests would be imported")
        return

    result = asyncio.run(import_guest_rows(rows, SqlGuestCreateWriteModel()))

    for guest in result.created:
        typer.secho(f"Created: {guest.primary_guest} (Code: {guest.invitation_code})", fg=typer.colors.GREEN)
    for row, reason in result.failed:
        typer.secho(f"Failed row {row.row_number} ({row.primary_guest}): {reason}", fg=typer.colors.RED)

    typer.echo(f"Import complete: {len(result.created)} succeeded, {len(result.failed)} failed")
    if result.failed:
        raise typer.Exit(1)


@app.command()
def export_rsvps(
    output: Path = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
):
    """Export every guest and their RSVP as CSV."""
    stats_service = StatsService(
        guest_read_model=SqlGuestReadModel(), rsvp_read_model=SqlRSVPReadModel()
    )
    content = rsvps_csv(asyncio.run(stats_service.get_guests_with_rsvps()))

    if output is None:
        typer.echo(content, nl=False)
        return

    output.write_text(content, encoding="utf-8")
    typer.secho(f"Exported RSVPs to {output}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
