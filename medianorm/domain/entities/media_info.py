# medianorm/domain/entities/media_info.py
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, Optional

from medianorm.domain.enums.dynamic_range import VideoDynamicRange

MINIMUM_SCHEMA_REVISION = 8
CURRENT_SCHEMA_REVISION = 8


@dataclass
class MediaInfoModel:
    """
    Raw technical facts pulled from the primary audio/video streams of one
    probe, plus the reconciled runtime. Codec fields hold the prober's own
    identifiers; the formatter turns them into display names.

    Built per file by VideoFileInfoReader; nothing here is cached.
    """
    container_format: Optional[str] = None

    video_format: Optional[str] = None
    video_codec_id: Optional[str] = None
    video_profile: Optional[str] = None
    video_bitrate: int = 0
    video_bit_depth: int = 0
    video_colour_primaries: Optional[str] = None
    video_transfer_characteristics: Optional[str] = None
    width: int = 0
    height: int = 0
    video_fps: float = 0.0

    audio_format: Optional[str] = None
    audio_codec_id: Optional[str] = None
    audio_profile: Optional[str] = None
    audio_bitrate: int = 0
    audio_channels: int = 0
    audio_channel_positions: Optional[str] = None
    audio_stream_count: int = 0
    audio_languages: str = ""
    subtitles: str = ""

    run_time: timedelta = timedelta(0)
    scan_type: str = "Progressive"
    schema_revision: int = CURRENT_SCHEMA_REVISION

    # Prober payload, kept for diagnostics only
    raw_data: Dict[str, Any] = field(default_factory=dict, repr=False)

    def is_schema_current(self) -> bool:
        return self.schema_revision >= MINIMUM_SCHEMA_REVISION


@dataclass(frozen=True)
class NormalizedMediaInfo:
    """Canonical, human-facing media facts. Unknown codecs pass through raw."""
    audio_codec: Optional[str]
    video_codec: Optional[str]
    audio_channels: Decimal
    video_dynamic_range: VideoDynamicRange
    run_time: timedelta

    # pass-through
    width: int = 0
    height: int = 0
    video_bitrate: int = 0
    audio_bitrate: int = 0
    video_bit_depth: int = 0
    video_fps: float = 0.0
    audio_stream_count: int = 0
    audio_languages: str = ""
    subtitles: str = ""
    scan_type: str = "Progressive"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
