"""JSON-lines rendering: one validated object per record."""
from __future__ import annotations

import json
from typing import Any, Dict, Sequence

from jsonschema import Draft7Validator

from testreporter.core.models import ResultRecord

from .formatting import format_timestamp
from .schema import RECORD_SCHEMA_V1

_validator = Draft7Validator(RECORD_SCHEMA_V1)


def record_to_dict(record: ResultRecord) -> Dict[str, Any]:
    return {
        "timestamp": format_timestamp(record.timestamp),
        "status": record.status,
        "attributedDurationSeconds": record.duration_s,
        "rawDurationSeconds": record.raw_duration_s,
        "suiteName": record.class_name,
        "testName": record.test_name,
        "creationTimestamp": format_timestamp(record.created_at),
        "errorMessage": record.error_message,
        "stackTrace": record.stack_trace,
    }


def render_jsonl(records: Sequence[ResultRecord]) -> bytes:
    lines = []
    for record in records:
        payload = record_to_dict(record)
        _validator.validate(payload)
        lines.append(json.dumps(payload) + "\n")
    return "".join(lines).encode("utf-8")
