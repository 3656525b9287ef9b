# tests/conftest.py
from __future__ import annotations
from typing import List

import pytest

from medianorm.common import settings as settings_mod
from medianorm.domain.dataclasses.diagnostics import UnknownFormatEvent


@pytest.fixture(autouse=True)
def _fresh_settings():
    # get_settings() is lru-cached; env tweaks in one test must not leak
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()


class RecordingDiagnostics:
    """FormatDiagnosticsPort fake that keeps every reported event."""

    def __init__(self) -> None:
        self.events: List[UnknownFormatEvent] = []

    def report(self, event: UnknownFormatEvent) -> None:
        self.events.append(event)


@pytest.fixture()
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()


@pytest.fixture()
def ffprobe_json() -> dict:
    """A 1080p HEVC HDR10 Matroska file with two audio and one subtitle stream."""
    return {
        "format": {
            "format_name": "matroska,webm",
            "format_long_name": "Matroska / WebM",
            "duration": "2537.123000",
            "bit_rate": "8123456",
            "size": "2576000000",
            "tags": {"title": "Show"},
        },
        "streams": [
            {
                "index": 0,
                "codec_type": "video",
                "codec_name": "hevc",
                "codec_long_name": "H.265 / HEVC (High Efficiency Video Coding)",
                "codec_tag_string": "[0][0][0][0]",
                "profile": "Main 10",
                "width": 1920,
                "height": 1080,
                "pix_fmt": "yuv420p10le",
                "color_primaries": "bt2020",
                "color_transfer": "smpte2084",
                "r_frame_rate": "24000/1001",
                "avg_frame_rate": "24000/1001",
                "disposition": {"default": 1},
                "tags": {"DURATION": "00:42:17.100000000", "BPS": "7000000"},
            },
            {
                "index": 1,
                "codec_type": "audio",
                "codec_name": "eac3",
                "codec_tag_string": "[0][0][0][0]",
                "channels": 6,
                "channel_layout": "5.1(side)",
                "bit_rate": "640000",
                "disposition": {"default": 1},
                "tags": {"language": "eng", "DURATION": "00:42:17.000000000"},
            },
            {
                "index": 2,
                "codec_type": "audio",
                "codec_name": "aac",
                "channels": 2,
                "channel_layout": "stereo",
                "tags": {"language": "fre"},
            },
            {
                "index": 3,
                "codec_type": "subtitle",
                "codec_name": "subrip",
                "tags": {"language": "eng"},
            },
        ],
    }
