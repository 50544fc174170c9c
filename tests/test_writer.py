"""Tests for export file writing."""

import csv
import json
import os
import tempfile
from datetime import datetime, timezone

import pytest

from copilot_chat_export import (
    CSV_HEADER,
    DiagnosticLog,
    ExportError,
    export_filename,
    format_timestamp,
    render_csv,
    write_csv_export,
    write_diagnostics_report,
    write_export,
    write_json_export,
)

NOW = datetime(2025, 9, 24, 10, 45, 39, 123456, tzinfo=timezone.utc)


@pytest.fixture
def entries():
    return [
        {
            "key": "conversation-1",
            "content": {
                "session": "01234567",
                "date": "9/24/2025",
                "human": "How do I read a file?",
                "copilot": "Use open() with a context manager, naïve but fine.",
            },
            "workspace": "ws-hash",
            "type": "conversation",
        },
        {
            "key": "conversation-2",
            "content": {
                "session": "01234567",
                "date": "9/24/2025",
                "human": "And write one?",
                "copilot": "Open it in 'w' mode.",
            },
            "workspace": "ws-hash",
            "type": "conversation",
        },
    ]


class TestFilenames:
    def test_timestamp_is_filesystem_safe(self):
        assert format_timestamp(NOW) == "2025-09-24T10-45-39-123Z"

    def test_export_filename(self):
        assert export_filename("json", NOW) == "copilot_export_2025-09-24T10-45-39-123Z.json"

    def test_same_second_exports_get_distinct_names(self):
        later = NOW.replace(microsecond=124000)
        assert export_filename("json", NOW) != export_filename("json", later)


class TestJsonExport:
    def test_round_trip(self, tmp_path, entries):
        path = write_json_export(entries, tmp_path, NOW)

        assert path == tmp_path / "copilot_export_2025-09-24T10-45-39-123Z.json"
        assert json.loads(path.read_text(encoding="utf-8")) == entries

    def test_pretty_printed_with_two_spaces(self, tmp_path, entries):
        path = write_json_export(entries, tmp_path, NOW)

        text = path.read_text(encoding="utf-8")
        assert text.startswith('[\n  {\n    "key": "conversation-1"')
        assert "naïve" in text

    def test_creates_missing_directories(self, tmp_path, entries):
        output = tmp_path / "a" / "b" / "c"

        path = write_json_export(entries, output, NOW)

        assert path.parent == output
        assert path.exists()

    def test_unwritable_output_dir_is_fatal(self, tmp_path, entries):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(ExportError):
            write_json_export(entries, blocker / "out", NOW)

    def test_failed_write_leaves_nothing_behind(self, tmp_path, entries, monkeypatch):
        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", fail_replace)

        with pytest.raises(ExportError, match="disk full"):
            write_json_export(entries, tmp_path, NOW)
        assert list(tmp_path.iterdir()) == []

    def test_unencodable_text_is_export_error(self, tmp_path, entries):
        entries[0]["content"]["copilot"] = "broken emoji \ud83d half"

        with pytest.raises(ExportError):
            write_json_export(entries, tmp_path, NOW)
        assert list(tmp_path.iterdir()) == []

    def test_temp_file_creation_failure_is_export_error(self, tmp_path, entries, monkeypatch):
        def fail_mkstemp(*args, **kwargs):
            raise PermissionError("read-only directory")

        monkeypatch.setattr(tempfile, "mkstemp", fail_mkstemp)

        with pytest.raises(ExportError, match="read-only directory"):
            write_json_export(entries, tmp_path, NOW)


class TestCsvExport:
    def test_header_and_rows(self, tmp_path):
        records = [
            {
                "Timestamp": "9/24/2025",
                "File": "s.json",
                "Language": "python",
                "Prompt": 'Say "hi" please',
                "Response": "Line one\n\nline two, with comma",
            }
        ]

        path = write_csv_export(records, tmp_path, NOW)

        assert path.name == "copilot_export_2025-09-24T10-45-39-123Z.csv"
        text = path.read_text(encoding="utf-8")
        assert text.splitlines()[0] == "Timestamp,File,Language,Prompt,Response"
        assert '"Say ""hi"" please"' in text
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0] == CSV_HEADER
        assert rows[1] == [
            "9/24/2025",
            "s.json",
            "python",
            'Say "hi" please',
            "Line one\n\nline two, with comma",
        ]

    def test_every_field_is_quoted(self):
        text = render_csv(
            [{"Timestamp": "t", "File": "f", "Language": "", "Prompt": "p", "Response": "r"}]
        )
        assert text.splitlines()[1] == '"t","f","","p","r"'


class TestDiagnosticsReport:
    def test_lists_every_log_line(self, tmp_path):
        log = DiagnosticLog()
        log.add("Workspace storage directory: /nowhere")
        log.add("Chat sessions directory does not exist: /nowhere/x")

        path = write_diagnostics_report(log, tmp_path, now=NOW)

        assert path.name == "copilot_export_diagnostics_2025-09-24T10-45-39-123Z.md"
        text = path.read_text(encoding="utf-8")
        assert "- Workspace storage directory: /nowhere\n" in text
        assert "- Chat sessions directory does not exist: /nowhere/x\n" in text
        assert "## Suggested fixes" in text
        assert "within the last 30 days" in text

    def test_window_is_reported(self, tmp_path):
        path = write_diagnostics_report(DiagnosticLog(), tmp_path, max_age_days=7, now=NOW)
        assert "within the last 7 days" in path.read_text(encoding="utf-8")


class TestWriteExport:
    def test_dispatches_on_format(self, tmp_path, entries):
        assert write_export(entries, tmp_path, "json", NOW).suffix == ".json"

    def test_unknown_format(self, tmp_path, entries):
        with pytest.raises(ValueError):
            write_export(entries, tmp_path, "xml", NOW)
