"""Export GitHub Copilot Chat sessions stored by VS Code to JSON or CSV."""

from .diagnostics import DiagnosticLog
from .environment import Environment, LocalEnvironment
from .text import clean_text, first_code_language

# Workspace discovery and session parsing
from .parsers import (
    CHAT_SESSIONS_DIRNAME,
    DEFAULT_EDITION,
    DEFAULT_MAX_AGE_DAYS,
    INSIDERS_EDITION,
    MIN_TEXT_LENGTH,
    NO_RESPONSE,
    Absent,
    PartList,
    SingleText,
    extract_entries,
    extract_interactions,
    extract_response_text,
    find_workspace_candidates,
    format_session_date,
    get_storage_root,
    join_response_parts,
    locate_workspace_sessions,
    parse_session_file,
    resolve_response,
    select_recent_candidate,
)

# Export writers
from .export import (
    CSV_HEADER,
    ExportError,
    export_filename,
    format_timestamp,
    render_csv,
    render_json,
    write_csv_export,
    write_diagnostics_report,
    write_export,
    write_json_export,
)

from .exporter import run_export

from .cli import cli, main
