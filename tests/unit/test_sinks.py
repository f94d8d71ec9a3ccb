"""
Unit tests for fanlog.log.sinks module
Tests file naming, size and time rotation, flushing and failure counting
"""

import io
import logging
import re
import time
import pytest
from datetime import datetime, time as dtime
from pathlib import Path

from fanlog.log.formatter import RecordFormatter
from fanlog.log.sinks import ConsoleSink, RotatingFileSink, parse_rotation_time


FILE_NAME_RE = re.compile(r"^log_\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}\.\d{6}\.log(\.\d+)?$")


def make_record(message):
    return logging.LogRecord("test", logging.INFO, __file__, 1, message, (), None)


@pytest.fixture
def file_sink(temp_log_dir):
    sink = RotatingFileSink(temp_log_dir, rotation_size=1024)
    sink.setFormatter(RecordFormatter())
    yield sink
    sink.close()


class TestRotatingFileSink:
    """Test suite for RotatingFileSink"""

    @pytest.mark.unit
    def test_opens_timestamp_named_file(self, file_sink, temp_log_dir):
        """Test that the first file is created immediately with a timestamped name"""
        files = list(temp_log_dir.glob("log_*"))

        assert len(files) == 1
        assert FILE_NAME_RE.match(files[0].name)
        assert file_sink.current_file == files[0].absolute()

    @pytest.mark.unit
    def test_flushes_every_record(self, file_sink):
        """Test that a record is on disk before the sink is closed"""
        file_sink.handle(make_record("first record"))

        content = file_sink.current_file.read_text(encoding="utf-8")

        assert content.endswith("first record\n")

    @pytest.mark.unit
    def test_rotates_on_size(self, file_sink, temp_log_dir, log_lines):
        """Test that files never reach the rotation size"""
        for i in range(60):
            file_sink.handle(make_record(f"record number {i:03d}"))

        files = sorted(temp_log_dir.glob("log_*"))
        lines = log_lines(temp_log_dir)

        assert len(files) > 1
        assert all(path.stat().st_size < 1024 for path in files)
        assert len(lines) == 60
        assert lines[-1].endswith("record number 059")
        assert file_sink.current_file == files[-1].absolute()

    @pytest.mark.unit
    def test_oversized_record_goes_to_empty_file(self, temp_log_dir):
        """Test that a record larger than the limit is still written once"""
        sink = RotatingFileSink(temp_log_dir, rotation_size=16)
        try:
            sink.handle(make_record("x" * 100))
        finally:
            sink.close()

        files = list(temp_log_dir.glob("log_*"))

        assert len(files) == 1
        assert "x" * 100 in files[0].read_text(encoding="utf-8")

    @pytest.mark.unit
    def test_rotates_at_time_boundary(self, file_sink, temp_log_dir):
        """Test that crossing the rotation time starts a new file"""
        first_file = file_sink.current_file
        file_sink.rollover_at = time.time() - 1

        file_sink.handle(make_record("after midnight"))

        assert file_sink.current_file != first_file
        assert file_sink.rollover_at > time.time()
        assert "after midnight" in file_sink.current_file.read_text(encoding="utf-8")
        assert "after midnight" not in first_file.read_text(encoding="utf-8")

    @pytest.mark.unit
    def test_compute_rollover_next_midnight(self, file_sink):
        """Test the next rotation boundary for the default midnight rotation"""
        opened_at = datetime(2025, 1, 15, 10, 0, 0)

        assert file_sink._compute_rollover(opened_at) == datetime(2025, 1, 16).timestamp()

    @pytest.mark.unit
    def test_compute_rollover_same_day(self, temp_log_dir):
        """Test a rotation time later on the same day"""
        sink = RotatingFileSink(temp_log_dir, rotation_time=dtime(12, 0))
        try:
            rollover = sink._compute_rollover(datetime(2025, 1, 15, 10, 0, 0))
            at_boundary = sink._compute_rollover(datetime(2025, 1, 15, 12, 0, 0))
        finally:
            sink.close()

        assert rollover == datetime(2025, 1, 15, 12, 0).timestamp()
        assert at_boundary == datetime(2025, 1, 16, 12, 0).timestamp()

    @pytest.mark.unit
    def test_existing_name_gets_suffix(self, temp_log_dir):
        """Test that an existing file is never reused"""
        first = RotatingFileSink(temp_log_dir, file_name="fixed.log")
        second = RotatingFileSink(temp_log_dir, file_name="fixed.log")
        try:
            assert first.current_file.name == "fixed.log"
            assert second.current_file.name == "fixed.log.1"
        finally:
            first.close()
            second.close()

    @pytest.mark.unit
    def test_unwritable_directory_raises(self, temp_dir):
        """Test that a log dir that cannot be created raises OSError"""
        blocker = temp_dir / "not_a_dir"
        blocker.write_text("file in the way")

        with pytest.raises(OSError):
            RotatingFileSink(blocker / "logs")

    @pytest.mark.unit
    def test_rejects_non_positive_rotation_size(self, temp_log_dir):
        """Test rotation size validation"""
        with pytest.raises(ValueError):
            RotatingFileSink(temp_log_dir, rotation_size=0)


class TestConsoleSink:
    """Test suite for ConsoleSink"""

    @pytest.mark.unit
    def test_writes_to_given_stream(self):
        """Test writing a record to the borrowed stream"""
        stream = io.StringIO()
        sink = ConsoleSink(stream)
        sink.setFormatter(RecordFormatter())

        sink.handle(make_record("to console"))

        assert stream.getvalue().endswith("to console\n")

    @pytest.mark.unit
    def test_close_leaves_stream_open(self):
        """Test that closing the sink does not close the stream"""
        stream = io.StringIO()
        sink = ConsoleSink(stream)

        sink.close()

        assert not stream.closed

    @pytest.mark.unit
    def test_defaults_to_stderr(self):
        """Test the default stream"""
        import sys

        assert ConsoleSink().stream is sys.stderr

    @pytest.mark.unit
    def test_write_failure_is_counted_not_raised(self, monkeypatch):
        """Test that a failing stream does not raise to the caller"""
        monkeypatch.setattr(logging, "raiseExceptions", False)
        stream = io.StringIO()
        stream.close()
        sink = ConsoleSink(stream)

        sink.handle(make_record("lost"))

        assert sink.failures == 1
        assert sink.last_failure_at is not None


class TestParseRotationTime:
    """Test suite for parse_rotation_time"""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("00:00:00", dtime(0, 0, 0)),
            ("23:30", dtime(23, 30)),
            (dtime(6, 15), dtime(6, 15)),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_rotation_time(value) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["noon", "1:2:3:4", "25:00"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_rotation_time(value)
