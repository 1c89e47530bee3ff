"""Keeps a stable ``test-results-latest.<ext>`` path pointing at the newest report."""
from __future__ import annotations

import enum
import os
import shutil
import tempfile
import uuid
from pathlib import Path
from typing import Dict, Union

PathLike = Union[str, "os.PathLike[str]"]


class LatestResultPublisher:
    """Strategy interface: make ``latest`` reflect ``artifact``."""

    def publish(self, artifact: Path, latest: Path) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class SymlinkPublisher(LatestResultPublisher):
    """Points ``latest`` at the artifact through a relative symbolic link.

    The link is created under a temporary name next to ``latest`` and renamed
    over it, so readers never observe a missing or dangling path.
    """

    def publish(self, artifact: Path, latest: Path) -> None:
        target = os.path.relpath(artifact.resolve(), latest.parent.resolve())
        staging = latest.with_name(f".{latest.name}.{uuid.uuid4().hex}")
        os.symlink(target, staging)
        try:
            os.replace(staging, latest)
        except OSError:
            staging.unlink()
            raise


class CopyPublisher(LatestResultPublisher):
    """Replaces ``latest`` with a byte-for-byte copy of the artifact."""

    def publish(self, artifact: Path, latest: Path) -> None:
        fd, staging_name = tempfile.mkstemp(prefix=f".{latest.name}.", dir=latest.parent)
        os.close(fd)
        staging = Path(staging_name)
        try:
            shutil.copyfile(artifact, staging)
            os.replace(staging, latest)
        except OSError:
            staging.unlink(missing_ok=True)
            raise


class SkipPublisher(LatestResultPublisher):
    def publish(self, artifact: Path, latest: Path) -> None:
        return None


class LatestResultMode(enum.Enum):
    SYMLINK = "symlink"
    COPY = "copy"
    SKIP = "skip"

    @classmethod
    def parse(cls, name: str) -> "LatestResultMode":
        text = name.strip().lower()
        for mode in cls:
            if mode.value == text:
                return mode
        supported = ", ".join(mode.value for mode in cls)
        raise ValueError(f"Unknown latest result mode '{name}'. Supported: {supported}")

    def publisher(self) -> LatestResultPublisher:
        return _PUBLISHERS[self]


_PUBLISHERS: Dict[LatestResultMode, LatestResultPublisher] = {
    LatestResultMode.SYMLINK: SymlinkPublisher(),
    LatestResultMode.COPY: CopyPublisher(),
    LatestResultMode.SKIP: SkipPublisher(),
}


def publish(artifact: PathLike, latest: PathLike, mode: LatestResultMode) -> None:
    """Make ``latest`` reflect ``artifact`` according to ``mode``."""

    artifact_path = Path(artifact)
    latest_path = Path(latest)
    try:
        mode.publisher().publish(artifact_path, latest_path)
    except OSError as exc:
        raise RuntimeError(f"Failed to update latest result {latest_path}: {exc}") from exc
