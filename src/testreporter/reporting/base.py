"""Report format enumeration and renderer dispatch."""
from __future__ import annotations

import enum
from typing import Callable, Dict, Sequence, Tuple

from testreporter.core.models import ResultRecord

from .html import render_html
from .jsonl import render_jsonl
from .text import render_text

Renderer = Callable[[Sequence[ResultRecord]], bytes]


class ReportFormat(enum.Enum):
    """Persisted report formats; the value is the artifact file extension."""

    WHITESPACE_DELIMITED = "txt"
    HTML = "html"
    JSON = "json"

    @classmethod
    def parse(cls, name: str) -> "ReportFormat":
        text = name.strip().lower()
        for fmt in cls:
            if text in fmt.aliases():
                return fmt
        supported = ", ".join(fmt.short_name for fmt in cls)
        raise ValueError(f"Unknown report format '{name}'. Supported: {supported}")

    @property
    def extension(self) -> str:
        return self.value

    @property
    def short_name(self) -> str:
        return _SHORT_NAMES[self]

    def aliases(self) -> Tuple[str, ...]:
        return (self.short_name, self.value, self.name.lower())

    def render(self, records: Sequence[ResultRecord]) -> bytes:
        return _RENDERERS[self](records)


_SHORT_NAMES: Dict[ReportFormat, str] = {
    ReportFormat.WHITESPACE_DELIMITED: "text",
    ReportFormat.HTML: "html",
    ReportFormat.JSON: "json",
}

_RENDERERS: Dict[ReportFormat, Renderer] = {
    ReportFormat.WHITESPACE_DELIMITED: render_text,
    ReportFormat.HTML: render_html,
    ReportFormat.JSON: render_jsonl,
}

ALL_FORMATS = tuple(ReportFormat)
