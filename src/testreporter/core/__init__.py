"""Core models and helpers exposed at the package level."""
from .models import (
    SUITE_LEVEL_FAILURE,
    UNAVAILABLE_DURATION,
    Failure,
    NestedTestSelector,
    OtherSelector,
    RawEvent,
    ResultRecord,
    Selector,
    Status,
    SuiteSelector,
    TestSelector,
    selector_name,
)
from .store import ResultStore
from .suite import Clock, SuiteAccumulator, wall_clock_ms

__all__ = [
    "SUITE_LEVEL_FAILURE",
    "UNAVAILABLE_DURATION",
    "Clock",
    "Failure",
    "NestedTestSelector",
    "OtherSelector",
    "RawEvent",
    "ResultRecord",
    "ResultStore",
    "Selector",
    "Status",
    "SuiteAccumulator",
    "SuiteSelector",
    "TestSelector",
    "selector_name",
    "wall_clock_ms",
]
