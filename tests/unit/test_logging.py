"""
Tests for dirmirror.core.logging module.
"""

from pathlib import Path

import pytest

from dirmirror.core.logging import LogSink, OperationLogger
from dirmirror.core.models import LogEntry, Severity


class TestLogEntry:
    """Tests for LogEntry."""

    def test_defaults_to_info(self) -> None:
        entry = LogEntry("a.txt copied to /dest/a.txt")
        assert entry.severity is Severity.INFO
        assert entry.is_error is False

    def test_format(self) -> None:
        assert LogEntry("done").format() == "[INFO] done"
        assert LogEntry("boom", Severity.ERROR).format() == "[ERROR] boom"

    def test_format_escapes_line_breaks(self) -> None:
        entry = LogEntry("a\nb\r.txt copied to /dest")
        assert entry.format() == "[INFO] a\\nb\\r.txt copied to /dest"
        assert "\n" not in entry.format()

    def test_printable_escapes_undecodable_characters(self) -> None:
        entry = LogEntry("caf\udce9.txt copied")
        assert entry.printable == "caf\\udce9.txt copied"
        entry.printable.encode("utf-8")


class TestLogSink:
    """Tests for LogSink."""

    def test_preserves_append_order(self) -> None:
        sink = LogSink()
        sink.info("first")
        sink.error("second")
        sink.info("third")

        assert [e.message for e in sink.entries] == ["first", "second", "third"]
        assert len(sink) == 3

    def test_keeps_duplicates(self) -> None:
        sink = LogSink()
        sink.info("same")
        sink.info("same")
        assert len(sink) == 2

    def test_errors(self) -> None:
        sink = LogSink()
        sink.info("ok")
        sink.error("bad")
        assert [e.message for e in sink.errors] == ["bad"]

    def test_entries_is_a_snapshot(self) -> None:
        sink = LogSink()
        sink.info("one")
        entries = sink.entries
        sink.info("two")
        assert len(entries) == 1

    def test_listener_receives_every_entry(self) -> None:
        received: list[LogEntry] = []
        sink = LogSink(listener=received.append)
        sink.info("a")
        sink.error("b")
        assert [(e.message, e.severity) for e in received] == [
            ("a", Severity.INFO),
            ("b", Severity.ERROR),
        ]

    def test_flush_writes_one_line_per_entry(self, temp_dir: Path) -> None:
        sink = LogSink()
        sink.info("a.txt copied to /dest/a.txt")
        sink.error("Error copying file /src/b.txt: denied")

        path = sink.flush(temp_dir / "nested" / "run.log")

        assert path.read_text().splitlines() == [
            "[INFO] a.txt copied to /dest/a.txt",
            "[ERROR] Error copying file /src/b.txt: denied",
        ]

    def test_flush_overwrites_previous_log(self, temp_dir: Path) -> None:
        path = temp_dir / "run.log"
        path.write_text("stale line\nanother\n")

        sink = LogSink()
        sink.info("fresh")
        sink.flush(path)

        assert path.read_text() == "[INFO] fresh\n"

    def test_flush_keeps_undecodable_bytes(self, temp_dir: Path) -> None:
        sink = LogSink()
        sink.info("caf\udce9.txt copied to /dest")

        path = sink.flush(temp_dir / "run.log")

        assert path.read_bytes() == b"[INFO] caf\xe9.txt copied to /dest\n"

    def test_flush_empty_sink_creates_empty_file(self, temp_dir: Path) -> None:
        path = LogSink().flush(temp_dir / "run.log")
        assert path.exists()
        assert path.read_text() == ""


class TestOperationLogger:
    """Tests for OperationLogger."""

    def test_does_not_swallow_exceptions(self) -> None:
        with pytest.raises(FileNotFoundError):
            with OperationLogger("copy", source="/missing"):
                raise FileNotFoundError("/missing")

    def test_records_start_time(self) -> None:
        with OperationLogger("prune") as op:
            assert op.start_time is not None
