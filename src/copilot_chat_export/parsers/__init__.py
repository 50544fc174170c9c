"""Workspace discovery and chat session parsing.

This package locates the chatSessions directory for the active workspace
and turns its session files into export entries.
"""

from .discovery import (
    CHAT_SESSIONS_DIRNAME,
    DEFAULT_EDITION,
    DEFAULT_MAX_AGE_DAYS,
    INSIDERS_EDITION,
    find_workspace_candidates,
    get_storage_root,
    list_session_files,
    locate_workspace_sessions,
    select_recent_candidate,
)

from .session import (
    MIN_TEXT_LENGTH,
    NO_RESPONSE,
    Absent,
    PartList,
    SingleText,
    build_entry,
    build_interaction,
    extract_entries,
    extract_interactions,
    extract_response_text,
    format_session_date,
    iter_conversation_pairs,
    join_response_parts,
    parse_session_file,
    resolve_response,
)

__all__ = [
    # Workspace discovery
    "CHAT_SESSIONS_DIRNAME",
    "DEFAULT_EDITION",
    "DEFAULT_MAX_AGE_DAYS",
    "INSIDERS_EDITION",
    "find_workspace_candidates",
    "get_storage_root",
    "list_session_files",
    "locate_workspace_sessions",
    "select_recent_candidate",
    # Session parsing
    "MIN_TEXT_LENGTH",
    "NO_RESPONSE",
    "Absent",
    "PartList",
    "SingleText",
    "build_entry",
    "build_interaction",
    "extract_entries",
    "extract_interactions",
    "extract_response_text",
    "format_session_date",
    "iter_conversation_pairs",
    "join_response_parts",
    "parse_session_file",
    "resolve_response",
]
