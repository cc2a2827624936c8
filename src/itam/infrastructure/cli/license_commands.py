"""CLI commands for license seat management."""

from __future__ import annotations

import click

from itam.application.create_license import CreateLicenseHandler
from itam.application.license_seats import AssignSeatHandler, UnassignSeatHandler
from itam.application.set_license_seats import SetLicenseSeatsHandler
from itam.application.show_license import LicenseSummaryHandler, ShowLicenseHandler
from itam.domain.exceptions import DomainException
from itam.infrastructure.bootstrap import Container


def _display_license(dto) -> None:
    util = dto.utilization
    click.echo(f"License {dto.id}  ({dto.name})")
    if dto.vendor:
        click.echo(f"Vendor:     {dto.vendor}")
    click.echo(
        f"Seats:      {util.used} used / {util.capacity} total "
        f"({util.available} available, {util.utilization_rate:.2f}%)"
    )
    click.echo(f"Compliance: {util.compliance}")
    if dto.is_over_committed:
        click.echo(
            f"WARNING: over-committed by {-util.available} seat(s); "
            f"unassign users or add seats"
        )
    if dto.assigned_users:
        click.echo("Assigned:")
        for user in dto.assigned_users:
            click.echo(f"  {user}")


@click.command("create")
@click.option("--id", "license_id", required=True, help="License ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--seats", required=True, type=int, help="Total seats purchased.")
@click.option("--vendor", default="", help="Vendor name.")
@click.pass_obj
def license_create(
    container: Container, license_id: str, name: str, seats: int, vendor: str
) -> None:
    """Register a license."""
    handler = CreateLicenseHandler(license_repo=container.license_repo)

    try:
        dto = handler.handle(license_id, name, seats, vendor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_license(dto)


@click.command("assign")
@click.argument("license_id")
@click.argument("user_id")
@click.option("--actor", default=None, help="Who is making the change.")
@click.option("--reason", default=None, help="Why, for the assignment history.")
@click.pass_obj
def license_assign(
    container: Container,
    license_id: str,
    user_id: str,
    actor: str | None,
    reason: str | None,
) -> None:
    """Give USER_ID a seat on LICENSE_ID."""
    handler = AssignSeatHandler(
        license_repo=container.license_repo,
        allocator=container.seat_allocator(),
    )

    try:
        dto = handler.handle(license_id, user_id, actor=actor, reason=reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_license(dto)


@click.command("unassign")
@click.argument("license_id")
@click.argument("user_id")
@click.option("--actor", default=None, help="Who is making the change.")
@click.pass_obj
def license_unassign(
    container: Container, license_id: str, user_id: str, actor: str | None
) -> None:
    """Free USER_ID's seat on LICENSE_ID."""
    handler = UnassignSeatHandler(
        license_repo=container.license_repo,
        allocator=container.seat_allocator(),
    )

    try:
        dto = handler.handle(license_id, user_id, actor=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_license(dto)


@click.command("show")
@click.argument("license_id")
@click.pass_obj
def license_show(container: Container, license_id: str) -> None:
    """Show seat utilization for a license."""
    handler = ShowLicenseHandler(license_repo=container.license_repo)

    try:
        dto = handler.handle(license_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_license(dto)


@click.command("set-seats")
@click.argument("license_id")
@click.argument("seats", type=int)
@click.pass_obj
def license_set_seats(container: Container, license_id: str, seats: int) -> None:
    """Change the number of seats on a license."""
    handler = SetLicenseSeatsHandler(license_repo=container.license_repo)

    try:
        dto = handler.handle(license_id, seats)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_license(dto)


@click.command("summary")
@click.pass_obj
def license_summary(container: Container) -> None:
    """Seat totals across all licenses."""
    dto = LicenseSummaryHandler(license_repo=container.license_repo).handle()

    click.echo(f"Licenses:    {dto.license_count}")
    click.echo(f"Total seats: {dto.total_seats}")
    click.echo(f"Used:        {dto.used_seats}")
    click.echo(f"Available:   {dto.available_seats}")
    click.echo(f"Utilization: {dto.utilization_rate:.2f}%")
    if dto.over_committed:
        click.echo(f"Over-committed: {', '.join(dto.over_committed)}")
