"""testreporter package initialization."""
from __future__ import annotations

from .listener import TabularTestReporter
from .publish import LatestResultMode
from .reporting import ReportFormat
from .version import __version__

__all__ = [
    "__version__",
    "LatestResultMode",
    "ReportFormat",
    "TabularTestReporter",
]
