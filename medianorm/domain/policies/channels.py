# medianorm/domain/policies/channels.py
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

# "5.1(side)" -> "5.1", "7.1" -> "7.1"; "stereo" / "mono" do not match
_POSITION_RE = re.compile(r"^(?P<position>\d\.\d)")

_ZERO = Decimal(0)


def channels_from_positions(channel_positions: Optional[str]) -> Decimal:
    if channel_positions is None:
        return _ZERO
    m = _POSITION_RE.match(channel_positions)
    if not m:
        return _ZERO
    try:
        # Decimal parsing never consults the locale
        return Decimal(m.group("position"))
    except InvalidOperation:
        return _ZERO


def channels_from_stream(audio_format: Optional[str], channels: Optional[int]) -> Decimal:
    """Raw stream channel count. FLAC with 6 channels is reported as 5.1."""
    if audio_format == "flac" and channels == 6:
        return Decimal("5.1")
    return Decimal(channels or 0)


def channel_count(
    channel_positions: Optional[str],
    channels: Optional[int],
    audio_format: Optional[str] = None,
) -> Decimal:
    """
    Channel count for display: the layout's "<d>.<d>" token when present and
    non-zero, otherwise the raw count. The FLAC 6 -> 5.1 rule only applies to
    the raw fallback and only when `audio_format` is given.
    """
    from_layout = channels_from_positions(channel_positions)
    if from_layout != _ZERO:
        return from_layout
    if audio_format is None:
        return Decimal(channels or 0)
    return channels_from_stream(audio_format, channels)
