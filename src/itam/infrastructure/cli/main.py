import click

from itam.domain.exceptions import DomainException
from itam.infrastructure import bootstrap
from itam.infrastructure.cli.asset_commands import (
    asset_archive,
    asset_next_states,
    asset_receive,
    asset_show,
    asset_transition,
)
from itam.infrastructure.cli.group_commands import (
    group_add,
    group_alerts,
    group_create,
    group_remove,
    group_set_min_stock,
    group_show,
)
from itam.infrastructure.cli.license_commands import (
    license_assign,
    license_create,
    license_set_seats,
    license_show,
    license_summary,
    license_unassign,
)
from itam.infrastructure.config import Settings, configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """ITAM — asset lifecycle, license seats and group stock"""
    if ctx.obj is None:
        try:
            settings = Settings.from_env()
        except DomainException as exc:
            raise click.ClickException(str(exc))
        configure_logging(settings)
        ctx.obj = bootstrap.build(settings)


@cli.group()
def asset() -> None:
    """Manage asset lifecycles."""


@cli.group()
def license() -> None:
    """Manage license seats."""


@cli.group()
def group() -> None:
    """Manage asset groups and stock."""


# Register subcommands
asset.add_command(asset_archive)
asset.add_command(asset_next_states)
asset.add_command(asset_receive)
asset.add_command(asset_show)
asset.add_command(asset_transition)
license.add_command(license_assign)
license.add_command(license_create)
license.add_command(license_set_seats)
license.add_command(license_show)
license.add_command(license_summary)
license.add_command(license_unassign)
group.add_command(group_add)
group.add_command(group_alerts)
group.add_command(group_create)
group.add_command(group_remove)
group.add_command(group_set_min_stock)
group.add_command(group_show)
