from __future__ import annotations
from pathlib import Path
from typing import Optional, Protocol
from medianorm.domain.entities.probe import ProbeResult


class ProbeError(RuntimeError):
    """Raised by probe adapters when a file cannot be analysed."""

    def __init__(self, message: str, *, stderr: Optional[str] = None, rc: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.stderr = stderr
        self.rc = rc


class MediaFileNotFoundError(ProbeError, FileNotFoundError):
    """The media file does not exist (or is not a regular file)."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Media file does not exist: {path}")
        self.path = Path(path)


class MediaProbePort(Protocol):
    def analyze(self, path: Path) -> ProbeResult: ...
