"""CLI commands for asset groups and stock alerts."""

from __future__ import annotations

import click

from itam.application.create_asset_group import CreateAssetGroupHandler
from itam.application.group_membership import (
    AddAssetsToGroupHandler,
    RemoveAssetsFromGroupHandler,
    SetMinStockHandler,
)
from itam.application.show_asset_group import LowStockAlertsHandler, ShowAssetGroupHandler
from itam.domain.exceptions import DomainException
from itam.infrastructure.bootstrap import Container


def _display_group(dto) -> None:
    click.echo(f"Group {dto.id}  ({dto.name})")
    if dto.category:
        click.echo(f"Category: {dto.category}")
    if dto.location:
        click.echo(f"Location: {dto.location}")
    click.echo(f"Stock:    {dto.current_stock} (minimum {dto.min_stock})")
    if dto.assets:
        click.echo(f"Assets:   {', '.join(dto.assets)}")


@click.command("create")
@click.option("--id", "group_id", required=True, help="Group ID.")
@click.option("--name", required=True, help="Group name.")
@click.option("--category", default="", help="Category, e.g. Laptops.")
@click.option("--min-stock", default=0, type=int, help="Low-stock threshold.")
@click.option("--location", default="", help="Where the stock is kept.")
@click.pass_obj
def group_create(
    container: Container,
    group_id: str,
    name: str,
    category: str,
    min_stock: int,
    location: str,
) -> None:
    """Create an asset group."""
    handler = CreateAssetGroupHandler(group_repo=container.group_repo)

    try:
        dto = handler.handle(group_id, name, category, min_stock, location)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_group(dto)


@click.command("add")
@click.argument("group_id")
@click.argument("asset_ids", nargs=-1, required=True)
@click.option("--actor", default=None, help="Who is making the change.")
@click.pass_obj
def group_add(
    container: Container, group_id: str, asset_ids: tuple[str, ...], actor: str | None
) -> None:
    """Add ASSET_IDS to GROUP_ID."""
    handler = AddAssetsToGroupHandler(
        group_repo=container.group_repo,
        asset_repo=container.asset_repo,
        tracker=container.stock_tracker(),
    )

    try:
        dto = handler.handle(group_id, list(asset_ids), actor=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_group(dto)


@click.command("remove")
@click.argument("group_id")
@click.argument("asset_ids", nargs=-1, required=True)
@click.option("--actor", default=None, help="Who is making the change.")
@click.pass_obj
def group_remove(
    container: Container, group_id: str, asset_ids: tuple[str, ...], actor: str | None
) -> None:
    """Remove ASSET_IDS from GROUP_ID."""
    handler = RemoveAssetsFromGroupHandler(
        group_repo=container.group_repo,
        tracker=container.stock_tracker(),
    )

    try:
        dto = handler.handle(group_id, list(asset_ids), actor=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_group(dto)


@click.command("show")
@click.argument("group_id")
@click.pass_obj
def group_show(container: Container, group_id: str) -> None:
    """Show a group and its stock."""
    handler = ShowAssetGroupHandler(group_repo=container.group_repo)

    try:
        dto = handler.handle(group_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_group(dto)


@click.command("set-min-stock")
@click.argument("group_id")
@click.argument("min_stock", type=int)
@click.pass_obj
def group_set_min_stock(container: Container, group_id: str, min_stock: int) -> None:
    """Change a group's low-stock threshold."""
    handler = SetMinStockHandler(
        group_repo=container.group_repo,
        tracker=container.stock_tracker(),
    )

    try:
        dto = handler.handle(group_id, min_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_group(dto)


@click.command("alerts")
@click.pass_obj
def group_alerts(container: Container) -> None:
    """List groups below their minimum stock, most depleted first."""
    alerts = LowStockAlertsHandler(group_repo=container.group_repo).handle()

    if not alerts:
        click.echo("All groups are at or above minimum stock.")
        return

    click.echo(f"{'Group':<20} {'Stock':>6} {'Min':>6} {'Severity':>10}")
    click.echo("-" * 45)
    for alert in alerts:
        click.echo(
            f"{alert.group_name:<20} {alert.current_stock:>6} {alert.min_stock:>6} {alert.severity:>10}"
        )
