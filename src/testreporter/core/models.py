"""Event and result dataclasses shared across testreporter subsystems."""
from __future__ import annotations

import enum
import traceback
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple, Union


SUITE_LEVEL_FAILURE = "(suite level failure)"
UNAVAILABLE_DURATION = -1  # Hosts report -1 when no duration was measured.


class Status(enum.Enum):
    """Outcome reported by the host for one test occurrence."""

    SUCCESS = "Success"
    FAILURE = "Failure"
    ERROR = "Error"
    SKIPPED = "Skipped"
    IGNORED = "Ignored"
    CANCELED = "Canceled"
    PENDING = "Pending"

    @classmethod
    def parse(cls, name: str) -> "Status":
        text = name.strip().lower()
        for status in cls:
            if status.value.lower() == text:
                return status
        supported = ", ".join(status.value for status in cls)
        raise ValueError(f"Unknown status '{name}'. Supported: {supported}")

    @property
    def ran(self) -> bool:
        return self not in (Status.SKIPPED, Status.IGNORED)

    def label(self) -> str:
        return self.value.upper()


@dataclass(frozen=True)
class TestSelector:
    __test__ = False  # not a pytest test class

    test_name: str

    def __str__(self) -> str:
        return f"TestSelector({self.test_name})"


@dataclass(frozen=True)
class NestedTestSelector:
    suite_id: str
    test_name: str

    def __str__(self) -> str:
        return f"NestedTestSelector({self.suite_id}, {self.test_name})"


@dataclass(frozen=True)
class SuiteSelector:
    def __str__(self) -> str:
        return "SuiteSelector"


@dataclass(frozen=True)
class OtherSelector:
    """Selector kinds the reporter has no naming rule for (wildcards, nested suites)."""

    kind: str
    value: str = ""

    def __str__(self) -> str:
        return f"{self.kind}({self.value})" if self.value else self.kind


Selector = Union[TestSelector, NestedTestSelector, SuiteSelector, OtherSelector]


def selector_name(selector: Selector) -> str:
    """Human-readable test name for ``selector``."""

    if isinstance(selector, (TestSelector, NestedTestSelector)):
        return selector.test_name
    if isinstance(selector, SuiteSelector):
        return SUITE_LEVEL_FAILURE
    return f"TOSTRING:{selector}"


@dataclass(frozen=True)
class Failure:
    """Failure detail attached to an event or escaping a suite."""

    kind: str
    message: Optional[str] = None
    stack_trace: str = ""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Failure":
        exc_type = type(exc)
        kind = f"{exc_type.__module__}.{exc_type.__qualname__}"
        if exc_type.__module__ == "builtins":
            kind = exc_type.__qualname__
        message = str(exc) if exc.args else None
        trace = "".join(traceback.format_exception(exc_type, exc, exc.__traceback__))
        return cls(kind=kind, message=message, stack_trace=trace)

    def first_line(self) -> str:
        """First line of the message, or the failure kind when there is no message."""

        if self.message is None:
            return self.kind
        return self.message.split("\n")[0]


def error_message(failure: Optional[Failure]) -> str:
    return failure.first_line() if failure is not None else ""


@dataclass(frozen=True)
class RawEvent:
    """One outcome report as emitted by the host during a suite."""

    status: Status
    selector: Selector
    class_name: str
    duration_ms: float = UNAVAILABLE_DURATION
    failure: Optional[Failure] = None

    @property
    def ran(self) -> bool:
        return self.status.ran

    @property
    def raw_duration_ms(self) -> float:
        return max(0, self.duration_ms)

    def test_name(self) -> str:
        return selector_name(self.selector)


@dataclass(frozen=True)
class ResultRecord:
    """Normalized, immutable result for a single test (or suite-level failure)."""

    timestamp: datetime
    status: str
    duration_s: float
    raw_duration_s: float
    class_name: str
    test_name: str
    created_at: datetime
    error_message: str = ""
    stack_trace: str = ""

    @classmethod
    def suite_failure(
        cls, suite_name: str, failure: Failure, *, timestamp: datetime, created_at: datetime
    ) -> "ResultRecord":
        return cls(
            timestamp=timestamp,
            status=Status.ERROR.label(),
            duration_s=0.0,
            raw_duration_s=0.0,
            class_name=suite_name,
            test_name=SUITE_LEVEL_FAILURE,
            created_at=created_at,
            error_message=failure.first_line(),
            stack_trace=failure.stack_trace,
        )

    def identifier(self) -> str:
        return f"{self.class_name}::{self.test_name}"

    def columns(self) -> Tuple[str, ...]:
        return (
            self.status,
            f"{self.duration_s:.3f}",
            f"{self.raw_duration_s:.3f}",
            self.class_name,
            self.test_name,
            self.error_message,
            self.stack_trace,
        )
