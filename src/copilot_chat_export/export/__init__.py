"""Export file writers (JSON, CSV and the diagnostics report)."""

from .writer import (
    CSV_HEADER,
    DIAGNOSTICS_PREFIX,
    EXPORT_FORMATS,
    EXPORT_PREFIX,
    ExportError,
    ensure_output_dir,
    export_filename,
    format_timestamp,
    get_template,
    render_csv,
    render_diagnostics,
    render_json,
    write_csv_export,
    write_diagnostics_report,
    write_export,
    write_json_export,
)

__all__ = [
    "CSV_HEADER",
    "DIAGNOSTICS_PREFIX",
    "EXPORT_FORMATS",
    "EXPORT_PREFIX",
    "ExportError",
    "ensure_output_dir",
    "export_filename",
    "format_timestamp",
    "get_template",
    "render_csv",
    "render_diagnostics",
    "render_json",
    "write_csv_export",
    "write_diagnostics_report",
    "write_export",
    "write_json_export",
]
