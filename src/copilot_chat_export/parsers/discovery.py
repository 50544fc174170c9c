"""Workspace storage discovery.

VS Code keeps per-workspace state in hashed directories under a
``workspaceStorage`` folder. The hash for the open folder is not recomputed
here; instead the first workspace directory with recent chat activity is
taken as the active one.
"""

import time
from datetime import datetime
from pathlib import Path

from ..diagnostics import DiagnosticLog

CHAT_SESSIONS_DIRNAME = "chatSessions"
DEFAULT_EDITION = "Code"
INSIDERS_EDITION = "Code - Insiders"
DEFAULT_MAX_AGE_DAYS = 30


def get_storage_root(platform_name, home, edition=DEFAULT_EDITION):
    """Return the workspaceStorage directory for a platform.

    Windows and macOS have their own layouts; anything else is treated as
    Linux.

    Args:
        platform_name: OS identifier such as 'Windows', 'Darwin', 'Linux',
            or a ``sys.platform`` style value ('win32', 'darwin').
        home: The user's home directory.
        edition: Editor data folder name, 'Code' or 'Code - Insiders'.
    """
    home = Path(home)
    name = (platform_name or "").lower()
    if name.startswith("win"):
        base = home / "AppData" / "Roaming"
    elif name in ("darwin", "macos", "mac"):
        base = home / "Library" / "Application Support"
    else:
        base = home / ".config"
    return base / edition / "User" / "workspaceStorage"


def _format_mtime(timestamp):
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


def list_session_files(env, sessions_dir):
    """Return paths of ``.json`` files in a chat sessions directory."""
    sessions_dir = Path(sessions_dir)
    return [
        sessions_dir / name
        for name in env.list_dir(sessions_dir)
        if name.endswith(".json")
    ]


def find_workspace_candidates(env, storage_root, log=None):
    """Enumerate workspace directories that hold chat session files.

    Returns a list of dicts, in enumeration order, with keys:
    - name: workspace directory name (the workspace hash)
    - sessions_dir: Path to its chatSessions directory
    - session_count: number of .json session files
    - latest_mtime: most recent modification time among those files
    """
    log = log if log is not None else DiagnosticLog()
    storage_root = Path(storage_root)
    candidates = []

    try:
        names = env.list_dir(storage_root)
    except OSError as e:
        log.add(f"Could not list workspace storage directory {storage_root}: {e}")
        return candidates

    for name in names:
        workspace_dir = storage_root / name
        if not env.is_dir(workspace_dir):
            continue
        sessions_dir = workspace_dir / CHAT_SESSIONS_DIRNAME
        if not env.is_dir(sessions_dir):
            continue

        try:
            session_files = list_session_files(env, sessions_dir)
        except OSError as e:
            log.add(f"Could not list chat sessions in {name}: {e}")
            continue
        if not session_files:
            continue

        latest_mtime = 0
        for session_file in session_files:
            try:
                latest_mtime = max(latest_mtime, env.mtime(session_file))
            except OSError as e:
                log.add(f"Could not stat {session_file.name} in {name}: {e}")

        log.add(
            f"Workspace {name}: {len(session_files)} session file(s), "
            f"last modified {_format_mtime(latest_mtime)}"
        )
        candidates.append(
            {
                "name": name,
                "sessions_dir": sessions_dir,
                "session_count": len(session_files),
                "latest_mtime": latest_mtime,
            }
        )

    return candidates


def select_recent_candidate(candidates, max_age_days=DEFAULT_MAX_AGE_DAYS, now=None):
    """Return the first candidate modified within ``max_age_days``, or None.

    Candidates are checked in the order given; the first match wins even if a
    later one is more recent.
    """
    now = time.time() if now is None else now
    cutoff = now - max_age_days * 24 * 60 * 60
    for candidate in candidates:
        if candidate["latest_mtime"] > cutoff:
            return candidate
    return None


def locate_workspace_sessions(
    env,
    log=None,
    storage_root=None,
    edition=DEFAULT_EDITION,
    max_age_days=DEFAULT_MAX_AGE_DAYS,
    now=None,
):
    """Find the chatSessions directory for the active workspace.

    Args:
        env: Environment used for every host and filesystem query.
        log: DiagnosticLog to append to; a new one is created if omitted.
        storage_root: Override for the computed workspaceStorage directory.
        edition: Editor data folder name used to compute the storage root.
        max_age_days: Recency window for selecting a workspace.
        now: Current time in epoch seconds (defaults to time.time()).

    Returns:
        (sessions_dir, log) where sessions_dir is a Path or None.
    """
    log = log if log is not None else DiagnosticLog()

    if storage_root is None:
        storage_root = get_storage_root(env.platform(), env.home_dir(), edition)
    storage_root = Path(storage_root)
    log.add(f"Workspace storage directory: {storage_root}")

    workspace_root = env.active_workspace_root()
    if workspace_root is None:
        log.add("No workspace folder is open")
        return None, log
    log.add(f"Active workspace: {workspace_root}")

    if not env.exists(storage_root):
        log.add(f"Workspace storage directory does not exist: {storage_root}")
        return None, log

    candidates = find_workspace_candidates(env, storage_root, log)
    log.add(f"Found {len(candidates)} workspace(s) with chat sessions")

    selected = select_recent_candidate(candidates, max_age_days, now)
    if selected is None:
        log.add(
            f"No workspace with chat activity in the last {max_age_days} days "
            f"({len(candidates)} candidate(s) examined)"
        )
        return None, log

    log.add(
        f"Selected workspace {selected['name']} "
        f"({selected['session_count']} session file(s), "
        f"last modified {_format_mtime(selected['latest_mtime'])})"
    )
    return selected["sessions_dir"], log
