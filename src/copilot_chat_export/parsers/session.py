"""Chat session file parsing.

Handles the JSON documents VS Code writes to ``chatSessions/``. Each document
carries a ``sessionId``, a ``creationDate`` and a ``requests`` list; each
request holds the prompt under ``message.text`` and the reply under
``response``, usually as a list of parts with a ``value`` string.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from ..diagnostics import DiagnosticLog
from ..text import clean_text, first_code_language
from .discovery import list_session_files

MIN_TEXT_LENGTH = 10
NO_RESPONSE = "No response"
UNKNOWN_DATE = "Unknown date"
SESSION_PREFIX_LENGTH = 8
ENTRY_TYPE = "conversation"


@dataclass(frozen=True)
class SingleText:
    """Response stored as one plain string."""

    text: str


@dataclass(frozen=True)
class PartList:
    """Response stored as a list of parts; holds the usable string values."""

    values: tuple


@dataclass(frozen=True)
class Absent:
    """No response recorded."""


def resolve_response(raw):
    """Classify a raw ``response`` field as SingleText, PartList or Absent."""
    if isinstance(raw, list):
        values = tuple(
            part["value"]
            for part in raw
            if isinstance(part, dict)
            and isinstance(part.get("value"), str)
            and part["value"]
        )
        return PartList(values)
    if isinstance(raw, str):
        return SingleText(raw)
    return Absent()


def join_response_parts(values):
    """Concatenate response part values in order, separated by single spaces."""
    return " ".join(values)


def extract_response_text(response):
    """Return the cleaned assistant text for a resolved response.

    Only part lists carry exported text. A part list without usable values,
    a plain string, or a missing response all yield the literal
    ``"No response"`` placeholder, which is not cleaned.
    """
    if isinstance(response, PartList) and response.values:
        return clean_text(join_response_parts(response.values))
    return NO_RESPONSE


def format_session_date(value):
    """Format a session creation date as ``M/D/YYYY`` in UTC.

    Accepts epoch milliseconds (as VS Code stores them) or an ISO-8601
    string. Returns "Unknown date" when the value cannot be read.
    """
    try:
        if isinstance(value, bool):
            raise ValueError(value)
        if isinstance(value, (int, float)):
            moment = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        elif isinstance(value, str) and value.strip():
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            moment = datetime.fromisoformat(text)
            if moment.tzinfo is None:
                moment = moment.replace(tzinfo=timezone.utc)
            moment = moment.astimezone(timezone.utc)
        else:
            return UNKNOWN_DATE
    except (ValueError, OverflowError, OSError):
        return UNKNOWN_DATE
    return f"{moment.month}/{moment.day}/{moment.year}"


def parse_session_file(env, filepath):
    """Read and decode one session document.

    Raises OSError if the file cannot be read and ValueError if it is not a
    JSON object (json.JSONDecodeError and UnicodeDecodeError are both
    ValueErrors).
    """
    data = json.loads(env.read_text(filepath))
    if not isinstance(data, dict):
        raise ValueError("session document is not a JSON object")
    return data


def iter_conversation_pairs(env, sessions_dir, log=None):
    """Yield cleaned request/response pairs from every session file.

    Files that cannot be read or parsed are logged and skipped. Pairs where
    either side is 10 characters or shorter are dropped.

    Yields dicts with keys: index (1-based request ordinal), session_id,
    date, file, human, copilot, language.
    """
    log = log if log is not None else DiagnosticLog()
    sessions_dir = Path(sessions_dir)

    if not env.is_dir(sessions_dir):
        log.add(f"Chat sessions directory does not exist: {sessions_dir}")
        return

    try:
        session_files = list_session_files(env, sessions_dir)
    except OSError as e:
        log.add(f"Could not list chat sessions directory {sessions_dir}: {e}")
        return
    log.add(f"Found {len(session_files)} session file(s) in {sessions_dir}")

    for session_file in session_files:
        try:
            session = parse_session_file(env, session_file)
        except (OSError, ValueError) as e:
            log.add(f"Failed to read {session_file.name}: {e}")
            continue

        requests = session.get("requests")
        if not isinstance(requests, list) or not requests:
            log.add(f"{session_file.name}: no requests")
            continue

        session_id = str(session.get("sessionId") or session_file.stem)
        date = format_session_date(session.get("creationDate"))

        for i, request in enumerate(requests):
            if not isinstance(request, dict):
                continue
            message = request.get("message")
            if not isinstance(message, dict) or not message.get("text"):
                continue

            human = clean_text(str(message["text"]))
            response = resolve_response(request.get("response"))
            copilot = extract_response_text(response)

            if len(human) <= MIN_TEXT_LENGTH or len(copilot) <= MIN_TEXT_LENGTH:
                continue

            language = ""
            if isinstance(response, PartList):
                language = first_code_language(join_response_parts(response.values))

            yield {
                "index": i + 1,
                "session_id": session_id,
                "date": date,
                "file": session_file.name,
                "human": human,
                "copilot": copilot,
                "language": language,
            }


def build_entry(pair, workspace):
    """Build an export entry from a conversation pair."""
    return {
        "key": f"conversation-{pair['index']}",
        "content": {
            "session": pair["session_id"][:SESSION_PREFIX_LENGTH],
            "date": pair["date"],
            "human": pair["human"],
            "copilot": pair["copilot"],
        },
        "workspace": workspace,
        "type": ENTRY_TYPE,
    }


def build_interaction(pair):
    """Build a CSV interaction record from a conversation pair."""
    return {
        "Timestamp": pair["date"],
        "File": pair["file"],
        "Language": pair["language"],
        "Prompt": pair["human"],
        "Response": pair["copilot"],
    }


def extract_entries(env, sessions_dir, log=None, workspace=None):
    """Extract export entries from a chatSessions directory.

    Args:
        env: Environment used for listing and reading files.
        sessions_dir: Path to the chatSessions directory.
        log: DiagnosticLog to append to; a new one is created if omitted.
        workspace: Workspace identifier stamped on each entry. Defaults to
            the name of the directory containing ``sessions_dir``.

    Returns:
        (entries, log)
    """
    log = log if log is not None else DiagnosticLog()
    sessions_dir = Path(sessions_dir)
    if workspace is None:
        workspace = sessions_dir.parent.name

    entries = [
        build_entry(pair, workspace)
        for pair in iter_conversation_pairs(env, sessions_dir, log)
    ]
    log.add(f"Extracted {len(entries)} valid conversation entries")
    return entries, log


def extract_interactions(env, sessions_dir, log=None):
    """Extract CSV interaction records from a chatSessions directory.

    Returns:
        (records, log)
    """
    log = log if log is not None else DiagnosticLog()
    records = [
        build_interaction(pair)
        for pair in iter_conversation_pairs(env, sessions_dir, log)
    ]
    log.add(f"Extracted {len(records)} valid conversation entries")
    return records, log
