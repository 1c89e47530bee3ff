"""Timestamp renderings shared by reports and artifact names."""
from __future__ import annotations

from datetime import datetime

ISO_FORMAT = "%Y-%m-%dT%H:%M:%S"
FILE_STAMP_FORMAT = "%Y%m%d-%H%M%S"


def format_timestamp(value: datetime) -> str:
    return value.strftime(ISO_FORMAT)


def file_stamp(value: datetime) -> str:
    return value.strftime(FILE_STAMP_FORMAT)
