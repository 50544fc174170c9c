"""CLI commands for copilot-chat-export."""

import click
from click_default_group import DefaultGroup

from .export_cmd import export_cmd
from .locate import locate_cmd


@click.group(cls=DefaultGroup, default="export", default_if_no_args=True)
@click.version_option(None, "-v", "--version", package_name="copilot-chat-export")
def cli():
    """Export GitHub Copilot Chat history from VS Code to JSON or CSV.

    Runs the export by default; use `locate` to see which workspace
    storage directory would be read.
    """
    pass


cli.add_command(export_cmd, "export")
cli.add_command(locate_cmd, "locate")


def main():
    cli()


__all__ = [
    "cli",
    "main",
    "export_cmd",
    "locate_cmd",
]
