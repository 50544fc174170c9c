"""Export file writing.

Entries are written to ``copilot_export_<timestamp>.json`` (or ``.csv``);
an empty run writes ``copilot_export_diagnostics_<timestamp>.md`` instead.
Every file is written to a temporary name first and moved into place, so a
failed write never leaves a partial export behind.
"""

import csv
import io
import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, PackageLoader

from ..parsers.discovery import DEFAULT_MAX_AGE_DAYS

EXPORT_PREFIX = "copilot_export"
DIAGNOSTICS_PREFIX = "copilot_export_diagnostics"
EXPORT_FORMATS = ("json", "csv")
CSV_HEADER = ["Timestamp", "File", "Language", "Prompt", "Response"]

_jinja_env = Environment(
    loader=PackageLoader("copilot_chat_export", "templates"),
    keep_trailing_newline=True,
)


class ExportError(Exception):
    """Raised when the output directory or export file cannot be written."""

    pass


def get_template(name):
    """Get a Jinja2 template by name."""
    return _jinja_env.get_template(name)


def format_timestamp(now=None):
    """Return a filesystem-safe ISO-8601 timestamp, e.g. 2025-09-24T10-45-39-123Z.

    Milliseconds are kept so two exports in the same second get distinct names.
    """
    now = now or datetime.now(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return stamp.replace(":", "-").replace(".", "-")


def export_filename(extension, now=None, prefix=EXPORT_PREFIX):
    return f"{prefix}_{format_timestamp(now)}.{extension}"


def ensure_output_dir(output_dir):
    """Create the output directory and its parents."""
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExportError(f"Cannot create output directory {output_dir}: {e}") from e
    return output_dir


def _atomic_write(path, text):
    """Write text to path via a temporary file in the same directory."""
    path = Path(path)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException as e:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
        # UnicodeEncodeError (a lone surrogate in the text) is a ValueError.
        if isinstance(e, (OSError, ValueError)):
            raise ExportError(f"Failed to write {path}: {e}") from e
        raise
    return path


def render_json(entries):
    """Serialize entries as a pretty-printed JSON array."""
    return json.dumps(list(entries), indent=2, ensure_ascii=False)


def render_csv(records):
    """Serialize interaction records as CSV with every data field quoted."""
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADER) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        writer.writerow([record.get(column, "") for column in CSV_HEADER])
    return buffer.getvalue()


def render_diagnostics(log, max_age_days=DEFAULT_MAX_AGE_DAYS, now=None):
    """Render the diagnostics report for an export that found nothing."""
    now = now or datetime.now(timezone.utc)
    return get_template("diagnostics.md").render(
        lines=list(log),
        max_age_days=max_age_days,
        generated=now.strftime("%Y-%m-%d %H:%M:%S %Z").strip(),
    )


def write_json_export(entries, output_dir, now=None):
    output_dir = ensure_output_dir(output_dir)
    path = output_dir / export_filename("json", now)
    return _atomic_write(path, render_json(entries))


def write_csv_export(records, output_dir, now=None):
    output_dir = ensure_output_dir(output_dir)
    path = output_dir / export_filename("csv", now)
    return _atomic_write(path, render_csv(records))


def write_diagnostics_report(log, output_dir, max_age_days=DEFAULT_MAX_AGE_DAYS, now=None):
    """Write the diagnostics report and return its path."""
    output_dir = ensure_output_dir(output_dir)
    path = output_dir / export_filename("md", now, prefix=DIAGNOSTICS_PREFIX)
    return _atomic_write(path, render_diagnostics(log, max_age_days, now))


def write_export(entries, output_dir, output_format="json", now=None):
    """Write entries in the requested format and return the file path.

    Args:
        entries: Export entries for "json", interaction records for "csv".
        output_dir: Directory to write into; created if missing.
        output_format: "json" or "csv".
        now: Timestamp for the filename (defaults to the current UTC time).

    Raises:
        ValueError: for an unknown format.
        ExportError: if the directory or file cannot be written.
    """
    if output_format == "json":
        return write_json_export(entries, output_dir, now)
    if output_format == "csv":
        return write_csv_export(entries, output_dir, now)
    raise ValueError(f"Unknown export format: {output_format}")
