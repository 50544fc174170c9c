"""Options shared by the export and locate commands."""

from pathlib import Path

import click

from ..parsers import DEFAULT_EDITION, DEFAULT_MAX_AGE_DAYS, INSIDERS_EDITION

EXPORTS_DIRNAME = "copilot_exports"


def locator_options(func):
    """Attach the workspace/storage options used to find chat sessions."""
    options = [
        click.option(
            "--workspace",
            type=click.Path(exists=True, file_okay=False, path_type=Path),
            help="Active workspace folder (default: current directory).",
        ),
        click.option(
            "--storage-root",
            type=click.Path(file_okay=False, path_type=Path),
            help="VS Code workspaceStorage directory. Computed for this platform if not specified.",
        ),
        click.option(
            "--insiders",
            is_flag=True,
            help="Read VS Code Insiders storage instead of stable VS Code.",
        ),
        click.option(
            "--max-age-days",
            default=DEFAULT_MAX_AGE_DAYS,
            type=click.IntRange(min=1),
            help=f"Only pick a workspace with chat activity this recent (default: {DEFAULT_MAX_AGE_DAYS}).",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def resolve_workspace(workspace):
    return Path(workspace) if workspace else Path.cwd()


def resolve_edition(insiders):
    return INSIDERS_EDITION if insiders else DEFAULT_EDITION


def default_output_dir(workspace):
    """Exports go inside the workspace, or the home directory without one."""
    if workspace:
        return Path(workspace) / EXPORTS_DIRNAME
    return Path.home() / EXPORTS_DIRNAME
