"""Replay a recorded suite lifecycle stream (JSON lines) through the reporter."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from jsonschema import Draft7Validator

from testreporter.config import ReporterSettings
from testreporter.core import (
    UNAVAILABLE_DURATION,
    Failure,
    NestedTestSelector,
    OtherSelector,
    RawEvent,
    Selector,
    Status,
    SuiteAccumulator,
    SuiteSelector,
    TestSelector,
    wall_clock_ms,
)
from testreporter.listener import TabularTestReporter
from testreporter.reporting import print_summary
from testreporter.reporting.terminal import count_failures

ENTRY_TYPES = ("suite_start", "event", "suite_error", "suite_end")


@dataclass(frozen=True)
class StreamEntry:
    type: str
    suite: str
    time_ms: Optional[float] = None
    event: Optional[RawEvent] = None
    failure: Optional[Failure] = None


class ReplayClock:
    """Millisecond clock driven by the ``time_ms`` stamps of the stream."""

    def __init__(self, start_ms: Optional[float] = None) -> None:
        self._now = start_ms

    def advance(self, time_ms: float) -> None:
        self._now = time_ms

    def __call__(self) -> float:
        if self._now is None:
            return wall_clock_ms()
        return self._now


def load_stream(path: str) -> List[StreamEntry]:
    stream_path = Path(path).expanduser()
    entries: List[StreamEntry] = []
    with stream_path.open(encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            text = line.strip()
            if not text:
                continue
            try:
                raw = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ValueError(f"{stream_path}:{line_no}: invalid JSON: {exc.msg}") from exc
            entries.append(parse_entry(raw, line_no))
    return entries


def parse_entry(raw: Any, line_no: int = 0) -> StreamEntry:
    errors = sorted(_validator.iter_errors(raw), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ValueError(f"line {line_no}: {messages}")
    kind = raw["type"]
    suite = raw["suite"]
    time_ms = raw.get("time_ms")
    if kind == "event":
        try:
            status = Status.parse(raw["status"])
        except ValueError as exc:
            raise ValueError(f"line {line_no}: {exc}") from exc
        event = RawEvent(
            status=status,
            selector=_parse_selector(raw.get("selector")),
            class_name=raw.get("class_name", suite),
            duration_ms=raw.get("duration_ms", UNAVAILABLE_DURATION),
            failure=_parse_failure(raw.get("failure")),
        )
        return StreamEntry(type=kind, suite=suite, time_ms=time_ms, event=event)
    if kind == "suite_error":
        return StreamEntry(type=kind, suite=suite, time_ms=time_ms, failure=_parse_failure(raw))
    return StreamEntry(type=kind, suite=suite, time_ms=time_ms)


def _parse_selector(raw: Optional[Mapping[str, Any]]) -> Selector:
    if raw is None:
        return SuiteSelector()
    kind = raw.get("kind", "test")
    name = str(raw.get("name", ""))
    if kind == "test":
        return TestSelector(name)
    if kind == "nested":
        return NestedTestSelector(str(raw.get("suite_id", "")), name)
    if kind == "suite":
        return SuiteSelector()
    return OtherSelector(kind=str(kind), value=name)


def _parse_failure(raw: Optional[Mapping[str, Any]]) -> Optional[Failure]:
    if raw is None:
        return None
    return Failure(
        kind=str(raw.get("kind") or "Exception"),
        message=raw.get("message"),
        stack_trace=str(raw.get("stack_trace") or ""),
    )


def replay(entries: Sequence[StreamEntry], reporter: TabularTestReporter, clock: ReplayClock) -> None:
    """Drive ``reporter`` through ``entries`` in order."""

    open_suites: Dict[str, SuiteAccumulator] = {}
    for entry in entries:
        if entry.time_ms is not None:
            clock.advance(entry.time_ms)
        if entry.type == "suite_start":
            if entry.suite in open_suites:
                raise ValueError(f"Suite '{entry.suite}' started twice without ending")
            open_suites[entry.suite] = reporter.on_suite_start(entry.suite)
        elif entry.type == "event":
            reporter.on_event(_open_suite(open_suites, entry.suite), entry.event)
        elif entry.type == "suite_error":
            # Events gathered before the escape are dropped with the suite.
            open_suites.pop(entry.suite, None)
            reporter.on_suite_error(entry.suite, entry.failure)
        else:
            reporter.on_suite_end(_open_suite(open_suites, entry.suite, pop=True))
    if open_suites:
        raise ValueError(f"Suites never ended: {', '.join(sorted(open_suites))}")


def _open_suite(open_suites: Dict[str, SuiteAccumulator], name: str, *, pop: bool = False) -> SuiteAccumulator:
    suite = open_suites.pop(name, None) if pop else open_suites.get(name)
    if suite is None:
        raise ValueError(f"Suite '{name}' has not been started")
    return suite


def run_replay(stream_path: str, settings: ReporterSettings, *, summary: bool = True) -> int:
    """Replay a stream file, write reports; returns exit code (0 success, 1 failures)."""

    entries = load_stream(stream_path)
    start_ms = next((entry.time_ms for entry in entries if entry.time_ms is not None), None)
    clock = ReplayClock(start_ms)
    reporter = TabularTestReporter(
        settings.output_dir,
        settings.formats,
        settings.latest_mode,
        clock=clock,
    )
    reporter.on_init()
    replay(entries, reporter, clock)
    reporter.on_run_complete()
    records = reporter.store.snapshot()
    if summary:
        print_summary(records, use_color=settings.color)
    return 0 if count_failures(records) == 0 else 1


FAILURE_SCHEMA = {
    "type": "object",
    "properties": {
        "kind": {"type": "string"},
        "message": {"type": ["string", "null"]},
        "stack_trace": {"type": "string"},
    },
}

ENTRY_SCHEMA = {
    "type": "object",
    "required": ["type", "suite"],
    "properties": {
        "type": {"enum": list(ENTRY_TYPES)},
        "suite": {"type": "string", "minLength": 1},
        "time_ms": {"type": "number"},
        "class_name": {"type": "string"},
        "status": {"type": "string"},
        "duration_ms": {"type": "number"},
        "selector": {
            "type": "object",
            "properties": {
                "kind": {"type": "string"},
                "name": {"type": "string"},
                "suite_id": {"type": "string"},
            },
        },
        "failure": FAILURE_SCHEMA,
        "kind": {"type": "string"},
        "message": {"type": ["string", "null"]},
        "stack_trace": {"type": "string"},
    },
    "allOf": [
        {
            "if": {"properties": {"type": {"const": "event"}}},
            "then": {"required": ["status"]},
        }
    ],
}
_validator = Draft7Validator(ENTRY_SCHEMA)
