"""End-to-end export run: locate, extract, then write."""

from .diagnostics import DiagnosticLog
from .export import EXPORT_FORMATS, write_diagnostics_report, write_export
from .parsers import (
    DEFAULT_EDITION,
    DEFAULT_MAX_AGE_DAYS,
    extract_entries,
    extract_interactions,
    locate_workspace_sessions,
)


def run_export(
    env,
    output_dir,
    output_format="json",
    storage_root=None,
    edition=DEFAULT_EDITION,
    max_age_days=DEFAULT_MAX_AGE_DAYS,
    now=None,
    file_timestamp=None,
):
    """Export the active workspace's chat sessions.

    When no entries are found a diagnostics report is written instead of an
    export file. Failures to create the output directory or write the file
    raise ExportError.

    Args:
        env: Environment for host and filesystem reads.
        output_dir: Directory for the export or diagnostics file.
        output_format: "json" or "csv".
        storage_root: Optional override for the workspaceStorage directory.
        edition: Editor data folder name ('Code' or 'Code - Insiders').
        max_age_days: Recency window used to pick the workspace.
        now: Current time in epoch seconds for the recency check.
        file_timestamp: datetime used in output filenames.

    Returns:
        dict with keys: entries (count), output_path, workspace, sessions_dir,
        diagnostics (DiagnosticLog) and is_diagnostics_report.
    """
    if output_format not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {output_format}")

    log = DiagnosticLog()
    sessions_dir, log = locate_workspace_sessions(
        env,
        log,
        storage_root=storage_root,
        edition=edition,
        max_age_days=max_age_days,
        now=now,
    )

    records = []
    workspace = None
    if sessions_dir is not None:
        workspace = sessions_dir.parent.name
        if output_format == "csv":
            records, log = extract_interactions(env, sessions_dir, log)
        else:
            records, log = extract_entries(env, sessions_dir, log, workspace)

    if records:
        output_path = write_export(records, output_dir, output_format, file_timestamp)
    else:
        output_path = write_diagnostics_report(
            log, output_dir, max_age_days, file_timestamp
        )

    return {
        "entries": len(records),
        "output_path": output_path,
        "workspace": workspace,
        "sessions_dir": sessions_dir,
        "diagnostics": log,
        "is_diagnostics_report": not records,
    }
