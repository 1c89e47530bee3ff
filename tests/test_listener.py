from __future__ import annotations

import json
from pathlib import Path
from unittest import mock

import pytest

from conftest import FakeClock, make_event
from testreporter import LatestResultMode, ReportFormat, TabularTestReporter
from testreporter.core import SUITE_LEVEL_FAILURE, Failure, Status


def _reporter(tmp_path: Path, clock: FakeClock, **kwargs) -> TabularTestReporter:
    reporter = TabularTestReporter(tmp_path / "target", clock=clock, **kwargs)
    reporter.on_init()
    return reporter


def test_on_init_creates_report_directory(tmp_path: Path, clock: FakeClock) -> None:
    reporter = _reporter(tmp_path, clock)
    assert (tmp_path / "target" / "test-reports").is_dir()
    reporter.on_init()


def test_full_run_writes_every_format_and_latest_links(tmp_path: Path, clock: FakeClock, capsys) -> None:
    reporter = _reporter(tmp_path, clock)
    suite = reporter.on_suite_start("pkg.MathSpec")
    reporter.on_event(suite, make_event("adds", duration_ms=100, class_name="pkg.MathSpec"))
    clock.advance(150)
    records = reporter.on_suite_end(suite)
    assert records[0].duration_s == pytest.approx(0.15)

    written = reporter.on_run_complete()

    assert list(written) == [ReportFormat.WHITESPACE_DELIMITED, ReportFormat.HTML, ReportFormat.JSON]
    target = tmp_path / "target"
    for fmt, path in written.items():
        assert path == target / "test-reports" / f"test-results-20240301-123000.{fmt.extension}"
        assert path.read_bytes() == fmt.render(reporter.store.snapshot())
        latest = target / f"test-results-latest.{fmt.extension}"
        assert latest.is_symlink()
        assert latest.resolve() == path.resolve()
    line = json.loads((target / "test-results-latest.json").read_text(encoding="utf-8"))
    assert line["status"] == "SUCCESS"
    assert line["timestamp"] == "2024-03-01T12:30:00"
    assert line["creationTimestamp"] == "2024-03-01T12:30:00"
    output = capsys.readouterr().out
    assert "text report written to" in output
    assert "json report written to" in output


def test_configured_formats_only(tmp_path: Path, clock: FakeClock) -> None:
    reporter = _reporter(tmp_path, clock, formats=[ReportFormat.JSON], latest_mode=LatestResultMode.COPY)
    written = reporter.on_run_complete()
    assert list(written) == [ReportFormat.JSON]
    latest = tmp_path / "target" / "test-results-latest.json"
    assert not latest.is_symlink()
    assert latest.read_bytes() == b""
    assert not (tmp_path / "target" / "test-results-latest.txt").exists()


def test_suite_error_records_and_prints_diagnostic(tmp_path: Path, clock: FakeClock, capsys) -> None:
    reporter = _reporter(tmp_path, clock, formats=[ReportFormat.JSON], latest_mode=LatestResultMode.SKIP)
    try:
        raise RuntimeError("boom\ndetails")
    except RuntimeError as exc:
        record = reporter.on_suite_error("pkg.BrokenSpec", exc)
    assert record.status == "ERROR"
    assert record.test_name == SUITE_LEVEL_FAILURE
    assert record.error_message == "boom"
    err = capsys.readouterr().err
    assert "Throwable escaped the test run of 'pkg.BrokenSpec': RuntimeError: boom" in err
    assert "Traceback" in err
    assert reporter.store.snapshot() == (record,)


def test_suite_error_accepts_host_failure(tmp_path: Path, clock: FakeClock, capsys) -> None:
    reporter = _reporter(tmp_path, clock)
    record = reporter.on_suite_error("pkg.Spec", Failure(kind="java.lang.ExceptionInInitializerError"))
    assert record.error_message == "java.lang.ExceptionInInitializerError"
    assert "java.lang.ExceptionInInitializerError" in capsys.readouterr().err


def test_interleaved_suites_keep_their_own_events(tmp_path: Path, clock: FakeClock) -> None:
    reporter = _reporter(tmp_path, clock)
    first = reporter.on_suite_start("pkg.First")
    clock.advance(10)
    second = reporter.on_suite_start("pkg.Second")
    reporter.on_event(first, make_event("a", duration_ms=5, class_name="pkg.First"))
    reporter.on_event(
        second,
        make_event("b", duration_ms=5, class_name="pkg.Second"),
        make_event("c", Status.IGNORED, duration_ms=0, class_name="pkg.Second"),
    )
    clock.advance(20)
    second_records = reporter.on_suite_end(second)
    first_records = reporter.on_suite_end(first)
    assert [r.test_name for r in first_records] == ["a"]
    assert [r.test_name for r in second_records] == ["b", "c"]
    assert first_records[0].duration_s == pytest.approx(0.030)
    assert second_records[0].duration_s == pytest.approx(0.020)
    assert [r.class_name for r in reporter.store.snapshot()] == ["pkg.Second", "pkg.Second", "pkg.First"]


def test_write_failure_stops_run_but_keeps_earlier_formats(tmp_path: Path, clock: FakeClock) -> None:
    reporter = _reporter(tmp_path, clock, latest_mode=LatestResultMode.COPY)
    real_write = Path.write_bytes

    def failing_write(self: Path, data: bytes) -> int:
        if self.suffix == ".html":
            raise OSError("disk full")
        return real_write(self, data)

    with mock.patch.object(Path, "write_bytes", failing_write):
        with pytest.raises(RuntimeError, match="Failed to write html report"):
            reporter.on_run_complete()
    assert reporter.artifact_path(ReportFormat.WHITESPACE_DELIMITED).exists()
    assert not reporter.artifact_path(ReportFormat.JSON).exists()


def test_content_logger_is_never_provided(tmp_path: Path, clock: FakeClock) -> None:
    reporter = _reporter(tmp_path, clock)
    assert reporter.content_logger("pkg.Spec") is None
