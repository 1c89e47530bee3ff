"""JSON schema for one line of the JSON-lines report."""
from __future__ import annotations

RECORD_FIELDS = (
    "timestamp",
    "status",
    "attributedDurationSeconds",
    "rawDurationSeconds",
    "suiteName",
    "testName",
    "creationTimestamp",
    "errorMessage",
    "stackTrace",
)

# Local time without zone offset, as written by reporting.formatting.format_timestamp.
LOCAL_TIMESTAMP = {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$"}

RECORD_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "testreporter result record",
    "type": "object",
    "required": list(RECORD_FIELDS),
    "additionalProperties": False,
    "properties": {
        "timestamp": LOCAL_TIMESTAMP,
        "status": {"type": "string", "minLength": 1},
        "attributedDurationSeconds": {"type": "number"},
        "rawDurationSeconds": {"type": "number", "minimum": 0},
        "suiteName": {"type": "string"},
        "testName": {"type": "string"},
        "creationTimestamp": LOCAL_TIMESTAMP,
        "errorMessage": {"type": "string"},
        "stackTrace": {"type": "string"},
    },
}
