"""Pytest configuration and fixtures for copilot-chat-export tests."""

import json
import time
import webbrowser
from pathlib import Path, PurePosixPath

import pytest

from copilot_chat_export import Environment


@pytest.fixture(autouse=True)
def mock_webbrowser_open(monkeypatch):
    """Record URLs passed to webbrowser.open instead of launching a viewer (--open)."""
    opened_urls = []

    def mock_open(url):
        opened_urls.append(url)
        return True

    monkeypatch.setattr(webbrowser, "open", mock_open)
    return opened_urls


class FakeEnvironment(Environment):
    """In-memory environment; directories list children in insertion order."""

    def __init__(self, workspace_root="/work/project", platform="Linux", home="/home/dev"):
        self.workspace_root = Path(workspace_root) if workspace_root else None
        self.platform_name = platform
        self.home = Path(home)
        self.files = {}  # path -> (text, mtime)
        self.dirs = {}  # path -> list of child names
        self.unreadable = set()
        self.unlistable = set()

    def _add_to_parent(self, path):
        """Register every component of path with its parent directory."""
        node = PurePosixPath(path)
        while node != node.parent:
            children = self.dirs.setdefault(str(node.parent), [])
            if node.name not in children:
                children.append(node.name)
            node = node.parent

    def add_dir(self, path):
        self._add_to_parent(path)
        self.dirs.setdefault(str(PurePosixPath(path)), [])

    def add_file(self, path, text="", mtime=None):
        self._add_to_parent(path)
        self.files[str(PurePosixPath(path))] = (
            text,
            time.time() if mtime is None else mtime,
        )

    def active_workspace_root(self):
        return self.workspace_root

    def platform(self):
        return self.platform_name

    def home_dir(self):
        return self.home

    def exists(self, path):
        key = str(PurePosixPath(path))
        return key in self.dirs or key in self.files

    def is_dir(self, path):
        return str(PurePosixPath(path)) in self.dirs

    def list_dir(self, path):
        key = str(PurePosixPath(path))
        if key in self.unlistable:
            raise PermissionError(f"Permission denied: {key}")
        if key not in self.dirs:
            raise FileNotFoundError(key)
        return list(self.dirs[key])

    def mtime(self, path):
        key = str(PurePosixPath(path))
        if key not in self.files:
            raise FileNotFoundError(key)
        return self.files[key][1]

    def read_text(self, path):
        key = str(PurePosixPath(path))
        if key in self.unreadable:
            raise PermissionError(f"Permission denied: {key}")
        if key not in self.files:
            raise FileNotFoundError(key)
        return self.files[key][0]


@pytest.fixture
def fake_env():
    return FakeEnvironment()


def make_session(session_id="0123456789abcdef", creation_date="2025-01-01T00:00:00Z", requests=None):
    """Build a chat session document."""
    return {
        "version": 3,
        "sessionId": session_id,
        "creationDate": creation_date,
        "requests": requests if requests is not None else [],
    }


def make_request(text, *values):
    """Build a request whose response is a list of ``value`` parts."""
    return {
        "message": {"text": text},
        "response": [{"value": value} for value in values],
    }


@pytest.fixture
def storage_root(tmp_path):
    """A workspaceStorage directory on the real filesystem."""
    root = tmp_path / "workspaceStorage"
    root.mkdir()
    return root


@pytest.fixture
def write_session(storage_root):
    """Write a session document into ``<storage_root>/<workspace>/chatSessions``."""

    def _write(workspace, name, document):
        sessions_dir = storage_root / workspace / "chatSessions"
        sessions_dir.mkdir(parents=True, exist_ok=True)
        path = sessions_dir / name
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write
