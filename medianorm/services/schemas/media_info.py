# medianorm/services/schemas/media_info.py
from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from medianorm.domain.enums.dynamic_range import VideoDynamicRange


class NormalizedMediaInfoRead(BaseModel):
    """Serializable view of NormalizedMediaInfo (runtime in seconds, channels as float)."""
    audio_codec: Optional[str] = None
    video_codec: Optional[str] = None
    audio_channels: float = Field(0.0, ge=0)
    video_dynamic_range: VideoDynamicRange = VideoDynamicRange.sdr
    run_time_sec: float = Field(0.0, ge=0, validation_alias="run_time")

    width: int = Field(0, ge=0)
    height: int = Field(0, ge=0)
    video_bitrate: int = Field(0, ge=0)
    audio_bitrate: int = Field(0, ge=0)
    video_bit_depth: int = Field(0, ge=0)
    video_fps: float = Field(0.0, ge=0)
    audio_stream_count: int = Field(0, ge=0)
    audio_languages: str = ""
    subtitles: str = ""
    scan_type: str = "Progressive"

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, use_enum_values=True)

    @field_validator("run_time_sec", mode="before")
    @classmethod
    def _seconds(cls, v):
        if isinstance(v, timedelta):
            return v.total_seconds()
        return v

    @field_validator("audio_channels", mode="before")
    @classmethod
    def _decimal_to_float(cls, v):
        if isinstance(v, Decimal):
            return float(v)
        return v
