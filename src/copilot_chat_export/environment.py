"""Host environment access.

The locator and extractor only talk to the host through this interface, so
tests can swap in an in-memory implementation.
"""

import os
import platform as _platform
from pathlib import Path


class Environment:
    """Narrow view of the host: workspace, platform, home and file reads."""

    def active_workspace_root(self):
        """Return the open workspace folder as a Path, or None."""
        raise NotImplementedError

    def platform(self):
        """Return the OS identifier, e.g. 'Windows', 'Darwin' or 'Linux'."""
        raise NotImplementedError

    def home_dir(self):
        raise NotImplementedError

    def exists(self, path):
        raise NotImplementedError

    def is_dir(self, path):
        raise NotImplementedError

    def list_dir(self, path):
        """Return entry names of a directory in enumeration order."""
        raise NotImplementedError

    def mtime(self, path):
        """Return modification time in seconds since the epoch."""
        raise NotImplementedError

    def read_text(self, path):
        raise NotImplementedError


class LocalEnvironment(Environment):
    """Environment backed by the real filesystem.

    Args:
        workspace_root: Path of the open workspace, or None when no folder
            is open.
    """

    def __init__(self, workspace_root=None):
        self._workspace_root = Path(workspace_root) if workspace_root else None

    def active_workspace_root(self):
        return self._workspace_root

    def platform(self):
        return _platform.system()

    def home_dir(self):
        return Path.home()

    def exists(self, path):
        return Path(path).exists()

    def is_dir(self, path):
        return Path(path).is_dir()

    def list_dir(self, path):
        # Directory scans are yielded in name order
        return sorted(os.listdir(path))

    def mtime(self, path):
        return Path(path).stat().st_mtime

    def read_text(self, path):
        return Path(path).read_text(encoding="utf-8")
