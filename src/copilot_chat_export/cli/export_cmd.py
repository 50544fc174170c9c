"""Export chat sessions of the active workspace to JSON or CSV."""

import webbrowser
from pathlib import Path

import click
import questionary

from ..environment import LocalEnvironment
from ..export import EXPORT_FORMATS, ExportError
from ..exporter import run_export
from .options import (
    default_output_dir,
    locator_options,
    resolve_edition,
    resolve_workspace,
)


@click.command("export")
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (default: ./copilot_exports inside the workspace).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(EXPORT_FORMATS),
    default="json",
    help="Output format: json (default) or csv.",
)
@click.option(
    "--ask",
    is_flag=True,
    help="Prompt for the output directory before exporting.",
)
@click.option(
    "--open",
    "open_file",
    is_flag=True,
    help="Open the written file when the export finishes.",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Print every discovery step, even when the export succeeds.",
)
@locator_options
def export_cmd(
    output,
    output_format,
    ask,
    open_file,
    verbose,
    workspace,
    storage_root,
    insiders,
    max_age_days,
):
    """Export Copilot Chat history of the current workspace.

    Finds the VS Code storage directory with recent chat activity, extracts
    prompt/response pairs and writes them to a timestamped file. If nothing
    is found, a diagnostics report is written instead.
    """
    workspace = resolve_workspace(workspace)
    output = output or default_output_dir(workspace)

    if ask:
        answer = questionary.path(
            "Select output folder:",
            default=str(output),
            only_directories=True,
        ).ask()
        if not answer:
            click.echo("Export cancelled.")
            return
        output = Path(answer).expanduser()

    click.echo("Searching for Copilot chat sessions...")
    try:
        result = run_export(
            LocalEnvironment(workspace),
            output,
            output_format=output_format,
            storage_root=storage_root,
            edition=resolve_edition(insiders),
            max_age_days=max_age_days,
        )
    except ExportError as e:
        raise click.ClickException(f"Copilot export failed: {e}")

    if verbose:
        for line in result["diagnostics"]:
            click.echo(f"  {line}")

    output_path = result["output_path"]
    if result["is_diagnostics_report"]:
        click.echo("No Copilot chat entries found for this workspace.")
        click.echo(f"Diagnostics written to {output_path}")
    else:
        click.echo(
            f"Copilot export complete! {result['entries']} entries exported to {output_path}"
        )

    if open_file:
        webbrowser.open(Path(output_path).resolve().as_uri())
