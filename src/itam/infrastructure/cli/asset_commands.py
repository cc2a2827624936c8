"""CLI commands for the Asset aggregate."""

from __future__ import annotations

import click

from itam.application.archive_asset import ArchiveAssetHandler
from itam.application.receive_asset import ReceiveAssetHandler
from itam.application.show_asset import ShowAssetHandler
from itam.application.transition_asset import TransitionAssetHandler
from itam.domain.exceptions import DomainException
from itam.infrastructure.bootstrap import Container


def _display_asset(dto) -> None:
    click.echo(f"Asset {dto.id}  (status={dto.status})")
    click.echo(f"Name:   {dto.name}")
    click.echo(f"Owner:  {dto.owner_id or '-'}")
    if dto.archived:
        click.echo("Archived")
    click.echo(f"Groups: {', '.join(dto.group_ids) or '-'}")
    click.echo(f"Next:   {', '.join(dto.valid_next_states) or '(terminal)'}")


@click.command("receive")
@click.option("--id", "asset_id", required=True, help="Asset tag.")
@click.option("--name", required=True, help="Asset name.")
@click.option("--owner", default=None, help="User the asset is issued to.")
@click.pass_obj
def asset_receive(container: Container, asset_id: str, name: str, owner: str | None) -> None:
    """Register an expected asset."""
    handler = ReceiveAssetHandler(
        asset_repo=container.asset_repo,
        table=container.table,
    )

    try:
        dto = handler.handle(asset_id=asset_id, name=name, owner_id=owner)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_asset(dto)


@click.command("show")
@click.argument("asset_id")
@click.pass_obj
def asset_show(container: Container, asset_id: str) -> None:
    """Show an asset and its valid next states."""
    handler = ShowAssetHandler(
        asset_repo=container.asset_repo,
        group_repo=container.group_repo,
        table=container.table,
    )

    try:
        dto = handler.handle(asset_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_asset(dto)


@click.command("transition")
@click.argument("asset_id")
@click.argument("status")
@click.option("--actor", default=None, help="Who is making the change.")
@click.option("--reason", default=None, help="Why, for the audit trail.")
@click.pass_obj
def asset_transition(
    container: Container,
    asset_id: str,
    status: str,
    actor: str | None,
    reason: str | None,
) -> None:
    """Move an asset to STATUS."""
    handler = TransitionAssetHandler(
        asset_repo=container.asset_repo,
        group_repo=container.group_repo,
        manager=container.lifecycle_manager(),
    )

    try:
        dto = handler.handle(asset_id, status, actor=actor, reason=reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_asset(dto)


@click.command("next-states")
@click.argument("asset_id")
@click.pass_obj
def asset_next_states(container: Container, asset_id: str) -> None:
    """List the statuses an asset may move to."""
    manager = container.lifecycle_manager()

    try:
        states = manager.get_valid_next_states(asset_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not states:
        click.echo("No further transitions (terminal status).")
        return
    for state in states:
        click.echo(state.value)


@click.command("archive")
@click.argument("asset_id")
@click.pass_obj
def asset_archive(container: Container, asset_id: str) -> None:
    """Soft-delete an asset that no group still holds."""
    handler = ArchiveAssetHandler(
        asset_repo=container.asset_repo,
        group_repo=container.group_repo,
    )

    try:
        handler.handle(asset_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Asset {asset_id} archived")
