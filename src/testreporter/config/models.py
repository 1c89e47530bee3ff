"""Reporter settings dataclass."""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Sequence, Tuple

from testreporter.publish import LatestResultMode
from testreporter.reporting import ALL_FORMATS, ReportFormat


@dataclass(frozen=True)
class ReporterSettings:
    output_dir: Path = Path("target")
    formats: Tuple[ReportFormat, ...] = ALL_FORMATS
    latest_mode: LatestResultMode = LatestResultMode.SYMLINK
    color: bool = True

    def override(
        self,
        *,
        output_dir: Optional[Path] = None,
        formats: Optional[Sequence[ReportFormat]] = None,
        latest_mode: Optional[LatestResultMode] = None,
        color: Optional[bool] = None,
    ) -> "ReporterSettings":
        """Return a copy with every non-``None`` argument applied."""

        return replace(
            self,
            output_dir=output_dir if output_dir is not None else self.output_dir,
            formats=tuple(formats) if formats else self.formats,
            latest_mode=latest_mode if latest_mode is not None else self.latest_mode,
            color=color if color is not None else self.color,
        )
