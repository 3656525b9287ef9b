# medianorm/domain/policies/runtime.py
from __future__ import annotations

from datetime import timedelta
from typing import Optional


def _usable(d: Optional[timedelta]) -> bool:
    return d is not None and d.total_seconds() != 0


def resolve_runtime(
    audio: Optional[timedelta],
    video: Optional[timedelta],
    general: timedelta,
) -> timedelta:
    """
    Pick the single best runtime from the primary streams and the container.

    Priority (no averaging): video stream, then audio stream, then the
    container. Some containers report truncated or zero durations, so a
    non-zero per-stream value always wins over the container's.
    """
    if _usable(video):
        return video  # type: ignore[return-value]
    if _usable(audio):
        return audio  # type: ignore[return-value]
    return general
