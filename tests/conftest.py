from __future__ import annotations

from datetime import datetime

import pytest

from testreporter.core import Failure, RawEvent, Status, TestSelector

RUN_START_MS = datetime(2024, 3, 1, 12, 30, 0).timestamp() * 1000


class FakeClock:
    """Millisecond clock advanced explicitly by tests."""

    def __init__(self, now_ms: float = RUN_START_MS) -> None:
        self.now_ms = now_ms

    def advance(self, delta_ms: float) -> None:
        self.now_ms += delta_ms

    def __call__(self) -> float:
        return self.now_ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_event(
    name: str,
    status: Status = Status.SUCCESS,
    duration_ms: float = 10,
    *,
    class_name: str = "pkg.ExampleSpec",
    failure: Failure | None = None,
) -> RawEvent:
    return RawEvent(
        status=status,
        selector=TestSelector(name),
        class_name=class_name,
        duration_ms=duration_ms,
        failure=failure,
    )
