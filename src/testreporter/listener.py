"""Host-facing lifecycle listener that aggregates events and writes reports."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Union

import click

from testreporter.core import Clock, Failure, RawEvent, ResultRecord, ResultStore, SuiteAccumulator, wall_clock_ms
from testreporter.core.suite import clock_datetime
from testreporter.publish import LatestResultMode, publish
from testreporter.reporting import ALL_FORMATS, ReportFormat
from testreporter.reporting.formatting import file_stamp

REPORTS_DIR_NAME = "test-reports"
LATEST_STEM = "test-results-latest"


class TabularTestReporter:
    """Collects suite lifecycle calls of one run and renders them at the end.

    ``on_suite_start`` hands back the suite's accumulator; the host passes it
    to ``on_event`` and ``on_suite_end``. Suites on different threads each
    own their accumulator, only the result store is shared.
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        formats: Iterable[ReportFormat] = ALL_FORMATS,
        latest_mode: LatestResultMode = LatestResultMode.SYMLINK,
        *,
        clock: Clock = wall_clock_ms,
    ) -> None:
        self.output_dir = Path(output_dir)
        requested = set(formats)
        self.formats = tuple(fmt for fmt in ALL_FORMATS if fmt in requested)
        self.latest_mode = latest_mode
        self._clock = clock
        self.run_timestamp = clock_datetime(clock)
        self.store = ResultStore()

    @property
    def reports_dir(self) -> Path:
        return self.output_dir / REPORTS_DIR_NAME

    def artifact_path(self, fmt: ReportFormat) -> Path:
        return self.reports_dir / f"test-results-{file_stamp(self.run_timestamp)}.{fmt.extension}"

    def latest_path(self, fmt: ReportFormat) -> Path:
        return self.output_dir / f"{LATEST_STEM}.{fmt.extension}"

    def on_init(self) -> None:
        self.reports_dir.mkdir(parents=True, exist_ok=True)

    def on_suite_start(self, suite_name: str) -> SuiteAccumulator:
        return SuiteAccumulator(suite_name, run_timestamp=self.run_timestamp, clock=self._clock)

    def on_event(self, suite: SuiteAccumulator, *events: RawEvent) -> None:
        for event in events:
            suite.add_event(event)

    def on_suite_error(self, suite_name: str, error: Union[BaseException, Failure]) -> ResultRecord:
        failure = error if isinstance(error, Failure) else Failure.from_exception(error)
        record = self.store.append_failure(suite_name, failure, at=clock_datetime(self._clock))
        click.echo(f"Throwable escaped the test run of '{suite_name}': {_describe(failure)}", err=True)
        if failure.stack_trace:
            click.echo(failure.stack_trace.rstrip("\n"), err=True)
        return record

    def on_suite_end(self, suite: SuiteAccumulator) -> Sequence[ResultRecord]:
        records = suite.finalize()
        self.store.append(records)
        return records

    def on_run_complete(self) -> Dict[ReportFormat, Path]:
        """Write every configured format and refresh its latest-result path."""

        records = self.store.snapshot()
        written: Dict[ReportFormat, Path] = {}
        for fmt in self.formats:
            path = self.artifact_path(fmt)
            content = fmt.render(records)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(content)
            except OSError as exc:
                raise RuntimeError(f"Failed to write {fmt.short_name} report to {path}: {exc}") from exc
            publish(path, self.latest_path(fmt), self.latest_mode)
            written[fmt] = path
            click.echo(f"{fmt.short_name} report written to {path}")
        return written

    def content_logger(self, test: Any) -> Optional[Any]:
        return None


def _describe(failure: Failure) -> str:
    if failure.message is None:
        return failure.kind
    return f"{failure.kind}: {failure.message}"
