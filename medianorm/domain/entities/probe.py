# medianorm/domain/entities/probe.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, Optional, Tuple

from medianorm.domain.enums.stream_kind import StreamKind


@dataclass(frozen=True)
class StreamInfo:
    """
    One elementary stream as reported by the prober. Field names follow
    ffprobe's vocabulary; values are already type-coerced by the adapter.
    """
    index: int = 0
    codec_type: StreamKind = StreamKind.unknown
    codec_name: Optional[str] = None
    codec_long_name: Optional[str] = None
    codec_tag_string: Optional[str] = None
    profile: Optional[str] = None
    bit_rate: Optional[int] = None
    bits_per_raw_sample: Optional[int] = None
    color_primaries: Optional[str] = None
    color_transfer: Optional[str] = None
    channels: Optional[int] = None
    channel_layout: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    frame_rate: Optional[float] = None
    duration: Optional[timedelta] = None
    language: Optional[str] = None
    is_default: bool = False
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ContainerInfo:
    format_name: Optional[str] = None
    format_long_name: Optional[str] = None
    duration: timedelta = timedelta(0)
    bit_rate: Optional[int] = None
    size: Optional[int] = None
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ProbeResult:
    """
    Framework-free result of a media probe (e.g., ffprobe).
    Produced by a MediaProbePort adapter; consumed read-only by the reader.
    Stream order is the prober's order, which defines the "primary" streams.
    """
    format: ContainerInfo = field(default_factory=ContainerInfo)
    streams: Tuple[StreamInfo, ...] = ()
    raw: Dict[str, Any] = field(default_factory=dict)

    def _of_kind(self, kind: StreamKind) -> Tuple[StreamInfo, ...]:
        return tuple(s for s in self.streams if s.codec_type == kind)

    @property
    def video_streams(self) -> Tuple[StreamInfo, ...]:
        return self._of_kind(StreamKind.video)

    @property
    def audio_streams(self) -> Tuple[StreamInfo, ...]:
        return self._of_kind(StreamKind.audio)

    @property
    def subtitle_streams(self) -> Tuple[StreamInfo, ...]:
        return self._of_kind(StreamKind.subtitle)

    @property
    def primary_video_stream(self) -> Optional[StreamInfo]:
        vs = self.video_streams
        return vs[0] if vs else None

    @property
    def primary_audio_stream(self) -> Optional[StreamInfo]:
        a = self.audio_streams
        return a[0] if a else None
