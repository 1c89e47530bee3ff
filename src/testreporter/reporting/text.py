"""Whitespace-delimited text rendering, one line per record."""
from __future__ import annotations

from typing import Sequence

from testreporter.core.models import ResultRecord

EMPTY_FIELD = "-"

_ESCAPES = {
    "\\": "\\\\",
    " ": "\\s",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
}


def _escape_char(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if char.isspace() or len(f"a{char}b".splitlines()) > 1:
        return f"\\u{ord(char):04x}"
    return char


def escape_field(value: str) -> str:
    """Make ``value`` a single whitespace-free token."""

    if not value:
        return EMPTY_FIELD
    if value == EMPTY_FIELD:
        return "\\" + EMPTY_FIELD
    return "".join(_escape_char(char) for char in value)


def render_line(record: ResultRecord) -> str:
    return " ".join(escape_field(column) for column in record.columns())


def render_text(records: Sequence[ResultRecord]) -> bytes:
    lines = [render_line(record) + "\n" for record in records]
    return "".join(lines).encode("utf-8")
