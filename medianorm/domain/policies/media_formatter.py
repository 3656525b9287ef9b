# medianorm/domain/policies/media_formatter.py
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from medianorm.domain.dataclasses.diagnostics import (
    UNKNOWN_AUDIO_FORMAT,
    UNKNOWN_VIDEO_FORMAT,
    UnknownFormatEvent,
)
from medianorm.domain.entities.media_info import MediaInfoModel
from medianorm.domain.enums.dynamic_range import VideoDynamicRange
from medianorm.domain.policies.channels import channel_count
from medianorm.domain.policies.codec_rules import (
    AUDIO_CODEC_RULES,
    VIDEO_CODEC_RULES,
    AudioCodecFacts,
    VideoCodecFacts,
    first_match,
)
from medianorm.domain.policies.dynamic_range import video_dynamic_range
from medianorm.domain.ports.diagnostics import FormatDiagnosticsPort
from medianorm.services.diagnostics.logging_diagnostics import LoggingDiagnostics


class MediaInfoFormatter:
    """
    Turns prober codec identifiers into the library's display vocabulary.

    Stateless apart from the injected diagnostics sink, which is told about
    every codec without a rule. Unknown values never raise: audio falls back
    to the raw format, video to the trimmed raw format.
    """

    def __init__(self, diagnostics: Optional[FormatDiagnosticsPort] = None) -> None:
        self.diagnostics: FormatDiagnosticsPort = diagnostics or LoggingDiagnostics()

    # ---- codecs --------------------------------------------------------------
    def format_audio_codec(
        self,
        audio_format: Optional[str],
        codec_id: Optional[str] = None,
        profile: Optional[str] = None,
        *,
        scene_name: Optional[str] = None,
        container_format: Optional[str] = None,
        raw_data: Optional[Dict[str, Any]] = None,
    ) -> Optional[str]:
        if audio_format is None:
            return None
        if audio_format == "":
            return ""

        facts = AudioCodecFacts(audio_format, codec_id or "", profile or "")
        rule = first_match(AUDIO_CODEC_RULES, facts)
        if rule is not None:
            return rule.then(facts)

        self.diagnostics.report(
            UnknownFormatEvent(
                kind=UNKNOWN_AUDIO_FORMAT,
                format=audio_format,
                codec_id=facts.codec_id,
                container_format=container_format,
                scene_name=scene_name,
                raw_data=dict(raw_data or {}),
            )
        )
        return audio_format

    def format_video_codec(
        self,
        video_format: Optional[str],
        codec_id: Optional[str] = None,
        scene_name: Optional[str] = None,
        *,
        container_format: Optional[str] = None,
        raw_data: Optional[Dict[str, Any]] = None,
    ) -> Optional[str]:
        if video_format is None:
            return None

        result = video_format.strip()
        if not result:
            return result

        facts = VideoCodecFacts(video_format, codec_id or "", scene_name)
        rule = first_match(VIDEO_CODEC_RULES, facts)
        if rule is not None:
            return rule.then(facts)

        self.diagnostics.report(
            UnknownFormatEvent(
                kind=UNKNOWN_VIDEO_FORMAT,
                format=video_format,
                codec_id=facts.codec_id,
                container_format=container_format,
                scene_name=scene_name,
                raw_data=dict(raw_data or {}),
            )
        )
        return result

    # ---- channels / dynamic range --------------------------------------------
    @staticmethod
    def format_audio_channels(
        channel_positions: Optional[str],
        channels: Optional[int],
        audio_format: Optional[str] = None,
    ) -> Decimal:
        return channel_count(channel_positions, channels, audio_format)

    @staticmethod
    def format_video_dynamic_range(
        codec_id: Optional[str],
        bit_depth: Optional[int],
        colour_primaries: Optional[str] = None,
        transfer_characteristics: Optional[str] = None,
    ) -> VideoDynamicRange:
        return video_dynamic_range(codec_id, bit_depth, colour_primaries, transfer_characteristics)

    # ---- MediaInfoModel conveniences -----------------------------------------
    def audio_codec_from_model(self, mi: MediaInfoModel, scene_name: Optional[str] = None) -> Optional[str]:
        return self.format_audio_codec(
            mi.audio_format,
            mi.audio_codec_id,
            mi.audio_profile,
            scene_name=scene_name,
            container_format=mi.container_format,
            raw_data=mi.raw_data,
        )

    def video_codec_from_model(self, mi: MediaInfoModel, scene_name: Optional[str] = None) -> Optional[str]:
        return self.format_video_codec(
            mi.video_format,
            mi.video_codec_id,
            scene_name,
            container_format=mi.container_format,
            raw_data=mi.raw_data,
        )

    def audio_channels_from_model(self, mi: MediaInfoModel) -> Decimal:
        # Layout first; the raw count (with the FLAC 6 -> 5.1 rule) only as fallback
        return self.format_audio_channels(mi.audio_channel_positions, mi.audio_channels, mi.audio_format)

    def dynamic_range_from_model(self, mi: MediaInfoModel) -> VideoDynamicRange:
        return self.format_video_dynamic_range(
            mi.video_codec_id,
            mi.video_bit_depth,
            mi.video_colour_primaries,
            mi.video_transfer_characteristics,
        )
