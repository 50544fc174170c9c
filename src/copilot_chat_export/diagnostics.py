"""Diagnostic trail for a single export run."""


class DiagnosticLog:
    """Ordered, append-only record of locator and extractor decisions."""

    def __init__(self):
        self._lines = []

    def add(self, message):
        self._lines.append(str(message))

    @property
    def lines(self):
        return list(self._lines)

    def __iter__(self):
        return iter(list(self._lines))

    def __len__(self):
        return len(self._lines)

    def __contains__(self, text):
        """True if any recorded line contains ``text``."""
        return any(text in line for line in self._lines)

    def __repr__(self):
        return f"DiagnosticLog({self._lines!r})"
