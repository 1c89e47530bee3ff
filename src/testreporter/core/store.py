"""Run-wide, thread-safe collection of result records."""
from __future__ import annotations

import threading
from datetime import datetime
from typing import Iterable, List, Tuple

from .models import Failure, ResultRecord


class ResultStore:
    """Append-only record buffer shared by every suite of a run.

    Appends are serialized with a lock; records keep completion order.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: List[ResultRecord] = []

    def append(self, records: Iterable[ResultRecord]) -> None:
        batch = list(records)
        with self._lock:
            self._records.extend(batch)

    def append_failure(self, suite_name: str, failure: Failure, *, at: datetime) -> ResultRecord:
        record = ResultRecord.suite_failure(suite_name, failure, timestamp=at, created_at=at)
        with self._lock:
            self._records.append(record)
        return record

    def snapshot(self) -> Tuple[ResultRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
