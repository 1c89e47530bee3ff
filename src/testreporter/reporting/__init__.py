"""Reporting exports."""
from .base import ALL_FORMATS, ReportFormat
from .html import render_html
from .jsonl import record_to_dict, render_jsonl
from .terminal import print_summary
from .text import render_text

__all__ = [
    "ALL_FORMATS",
    "ReportFormat",
    "print_summary",
    "record_to_dict",
    "render_html",
    "render_jsonl",
    "render_text",
]
