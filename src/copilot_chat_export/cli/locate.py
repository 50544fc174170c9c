"""Show which chat sessions directory an export would read."""

import click

from ..environment import LocalEnvironment
from ..parsers import locate_workspace_sessions
from .options import locator_options, resolve_edition, resolve_workspace


@click.command("locate")
@locator_options
def locate_cmd(workspace, storage_root, insiders, max_age_days):
    """Print the discovery steps without exporting anything."""
    env = LocalEnvironment(resolve_workspace(workspace))
    sessions_dir, log = locate_workspace_sessions(
        env,
        storage_root=storage_root,
        edition=resolve_edition(insiders),
        max_age_days=max_age_days,
    )
    for line in log:
        click.echo(f"  {line}")

    if sessions_dir is None:
        click.echo("No chat sessions directory found.")
    else:
        click.echo(f"Chat sessions: {sessions_dir}")
