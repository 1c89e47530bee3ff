"""Terminal summary of a finished run."""
from __future__ import annotations

from collections import Counter
from typing import Sequence

import click
from colorama import Fore, Style, init as colorama_init

from testreporter.core.models import ResultRecord

FAILING_STATUSES = frozenset({"FAILURE", "ERROR"})

STATUS_COLORS = {
    "SUCCESS": Fore.GREEN,
    "FAILURE": Fore.RED,
    "ERROR": Fore.RED,
    "SKIPPED": Fore.YELLOW,
    "IGNORED": Fore.YELLOW,
    "CANCELED": Fore.YELLOW,
    "PENDING": Fore.CYAN,
}


def count_failures(records: Sequence[ResultRecord]) -> int:
    return sum(1 for record in records if record.status in FAILING_STATUSES)


def print_summary(records: Sequence[ResultRecord], *, use_color: bool = True) -> None:
    """Echo per-status totals followed by one line per failing test."""

    if use_color:
        colorama_init()
    counts = Counter(record.status for record in records)
    failures = count_failures(records)
    reset = Style.RESET_ALL if use_color else ""
    summary_color = ""
    if use_color:
        summary_color = Fore.GREEN if failures == 0 else Fore.RED
    parts = [f"total={len(records)}"]
    parts.extend(f"{status.lower()}={count}" for status, count in sorted(counts.items()))
    parts.append(f"duration={sum(record.duration_s for record in records):.3f}s")
    click.echo(f"{summary_color}Summary{reset}: " + " ".join(parts))
    for record in records:
        if record.status not in FAILING_STATUSES:
            continue
        color = STATUS_COLORS.get(record.status, "") if use_color else ""
        click.echo(f"{color}{record.status:<8}{reset} {record.identifier()}")
        if record.error_message:
            click.echo(f"    error: {record.error_message}")
