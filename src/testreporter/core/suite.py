"""Per-suite event accumulation and setup-time attribution."""
from __future__ import annotations

import math
import time
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from .models import RawEvent, ResultRecord, error_message

Clock = Callable[[], float]  # Returns wall-clock time in milliseconds since the epoch.


def wall_clock_ms() -> float:
    return time.time() * 1000.0


def clock_datetime(clock: Clock) -> datetime:
    return datetime.fromtimestamp(clock() / 1000.0)


class SuiteAccumulator:
    """Gathers the events of one suite execution.

    Setup and teardown time is whatever part of the suite's wall-clock span
    is not covered by the durations the tests reported themselves. On
    :meth:`finalize` that overhead is spread evenly over the tests that ran.
    """

    def __init__(self, suite_name: str, *, run_timestamp: datetime, clock: Clock = wall_clock_ms) -> None:
        self.suite_name = suite_name
        self._run_timestamp = run_timestamp
        self._clock = clock
        self._events: List[RawEvent] = []
        self._start_ms = clock()
        self._finalized = False

    def add_event(self, event: RawEvent) -> None:
        self._events.append(event)

    def finalize(self) -> List[ResultRecord]:
        """Stop timing and emit one record per collected event."""

        if self._finalized:
            raise RuntimeError(f"Suite '{self.suite_name}' was already finalized")
        self._finalized = True
        end_ms = self._clock()
        created_at = datetime.fromtimestamp(end_ms / 1000.0)
        share = setup_share_per_test(self._events, end_ms - self._start_ms)
        records: List[ResultRecord] = []
        for event in self._events:
            raw_ms = event.raw_duration_ms
            attributed_ms = raw_ms + share if (event.ran and share is not None) else raw_ms
            failure = event.failure
            records.append(
                ResultRecord(
                    timestamp=self._run_timestamp,
                    status=event.status.label(),
                    duration_s=attributed_ms / 1000.0,
                    raw_duration_s=raw_ms / 1000.0,
                    class_name=event.class_name,
                    test_name=event.test_name(),
                    created_at=created_at,
                    error_message=error_message(failure),
                    stack_trace=failure.stack_trace if failure is not None else "",
                )
            )
        return records


def setup_share_per_test(events: Sequence[RawEvent], elapsed_ms: float) -> Optional[float]:
    """Milliseconds of suite overhead charged to each test that ran.

    Returns ``None`` when no test ran. The overhead is not clamped: reported
    durations exceeding the measured span yield a negative share.
    """

    ran = sum(1 for event in events if event.ran)
    if ran == 0:
        return None
    reported = math.fsum(event.duration_ms for event in events if event.duration_ms >= 0)
    return (elapsed_ms - reported) / ran
