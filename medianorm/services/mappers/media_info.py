# medianorm/services/mappers/media_info.py
from __future__ import annotations

from typing import Optional

from medianorm.common.strings.splitters import join_non_blank
from medianorm.domain.entities.media_info import CURRENT_SCHEMA_REVISION, MediaInfoModel, NormalizedMediaInfo
from medianorm.domain.entities.probe import ProbeResult
from medianorm.domain.policies.media_formatter import MediaInfoFormatter
from medianorm.domain.policies.runtime import resolve_runtime


def to_media_info_model(probe: ProbeResult) -> MediaInfoModel:
    """Select the primary-stream facts the formatter needs from a probe."""
    v = probe.primary_video_stream
    a = probe.primary_audio_stream

    return MediaInfoModel(
        container_format=probe.format.format_long_name,

        video_format=v.codec_name if v else None,
        video_codec_id=v.codec_tag_string if v else None,
        video_profile=v.profile if v else None,
        video_bitrate=(v.bit_rate or 0) if v else 0,
        video_bit_depth=(v.bits_per_raw_sample or 0) if v else 0,
        video_colour_primaries=v.color_primaries if v else None,
        video_transfer_characteristics=v.color_transfer if v else None,
        width=(v.width or 0) if v else 0,
        height=(v.height or 0) if v else 0,
        video_fps=(v.frame_rate or 0.0) if v else 0.0,

        audio_format=a.codec_name if a else None,
        audio_codec_id=a.codec_tag_string if a else None,
        audio_profile=a.profile if a else None,
        audio_bitrate=(a.bit_rate or 0) if a else 0,
        audio_channels=(a.channels or 0) if a else 0,
        audio_channel_positions=a.channel_layout if a else None,
        audio_stream_count=len(probe.audio_streams),
        audio_languages=join_non_blank(s.language for s in probe.audio_streams),
        subtitles=join_non_blank(s.language for s in probe.subtitle_streams),

        run_time=resolve_runtime(
            a.duration if a else None,
            v.duration if v else None,
            probe.format.duration,
        ),
        scan_type="Progressive",
        schema_revision=CURRENT_SCHEMA_REVISION,
        raw_data=dict(probe.raw),
    )


def to_normalized(
    mi: MediaInfoModel,
    formatter: MediaInfoFormatter,
    scene_name: Optional[str] = None,
) -> NormalizedMediaInfo:
    return NormalizedMediaInfo(
        audio_codec=formatter.audio_codec_from_model(mi, scene_name),
        video_codec=formatter.video_codec_from_model(mi, scene_name),
        audio_channels=formatter.audio_channels_from_model(mi),
        video_dynamic_range=formatter.dynamic_range_from_model(mi),
        run_time=mi.run_time,

        width=mi.width,
        height=mi.height,
        video_bitrate=mi.video_bitrate,
        audio_bitrate=mi.audio_bitrate,
        video_bit_depth=mi.video_bit_depth,
        video_fps=mi.video_fps,
        audio_stream_count=mi.audio_stream_count,
        audio_languages=mi.audio_languages,
        subtitles=mi.subtitles,
        scan_type=mi.scan_type,
    )
