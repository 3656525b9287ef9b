# medianorm/domain/policies/codec_rules.py
"""
Ordered codec naming rules.

Each table is scanned top to bottom and the first rule whose `when`
predicate holds decides the display name. Order matters: tag-based rules
(e.g. "thd+" for Atmos) sit above the plain format rule they refine.
Format names follow FFmpeg's libavcodec/codec_desc.c.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, TypeVar

from medianorm.domain.policies.release_name import match_token

F = TypeVar("F")


@dataclass(frozen=True)
class AudioCodecFacts:
    format: str
    codec_id: str = ""
    profile: str = ""


@dataclass(frozen=True)
class VideoCodecFacts:
    format: str
    codec_id: str = ""
    scene_name: Optional[str] = None


@dataclass(frozen=True)
class CodecRule(Generic[F]):
    name: str
    when: Callable[[F], bool]
    then: Callable[[F], str]


def first_match(rules: Iterable[CodecRule[F]], facts: F) -> Optional[CodecRule[F]]:
    return next((r for r in rules if r.when(facts)), None)


# ---- predicate / result builders ---------------------------------------------
def _format_is(*values: str) -> Callable[[AudioCodecFacts | VideoCodecFacts], bool]:
    return lambda f: f.format in values


def _codec_id_is(*values: str) -> Callable[[AudioCodecFacts | VideoCodecFacts], bool]:
    return lambda f: f.codec_id in values


def _const(value: str) -> Callable[[object], str]:
    return lambda _f: value


# ---- audio -------------------------------------------------------------------
DTS_PROFILES = {
    "DTS:X": "DTS-X",
    "DTS-HD MA": "DTS-HD MA",
    "DTS-ES": "DTS-ES",
    "DTS-HD HRA": "DTS-HD HRA",
    "DTS Express": "DTS Express",
    "DTS 96/24": "DTS 96/24",
}

HE_AAC_CODEC_ID = "A_AAC/MPEG4/LC/SBR"

AUDIO_CODEC_RULES: tuple[CodecRule[AudioCodecFacts], ...] = (
    CodecRule("truehd-atmos", _codec_id_is("thd+"), _const("TrueHD Atmos")),
    CodecRule("truehd", _format_is("truehd"), _const("TrueHD")),
    CodecRule("flac", _format_is("flac"), _const("FLAC")),
    CodecRule("dts", _format_is("dts"), lambda f: DTS_PROFILES.get(f.profile, "DTS")),
    CodecRule("eac3-atmos", _codec_id_is("ec+3"), _const("EAC3 Atmos")),
    CodecRule("eac3", _format_is("eac3"), _const("EAC3")),
    CodecRule("ac3", _format_is("ac3"), _const("AC3")),
    CodecRule("aac", _format_is("aac"), lambda f: "HE-AAC" if f.codec_id == HE_AAC_CODEC_ID else "AAC"),
    CodecRule("mp3", _format_is("mp3"), _const("MP3")),
    CodecRule("mp2", _format_is("mp2"), _const("MP2")),
    CodecRule("opus", _format_is("opus"), _const("Opus")),
    CodecRule("pcm", lambda f: f.format.startswith("pcm_"), _const("PCM")),
    CodecRule("vorbis", _format_is("vorbis"), _const("Vorbis")),
    CodecRule("wma", _format_is("wmav1", "wmav2"), _const("WMA")),
)


# ---- video -------------------------------------------------------------------
# Last token is the fallback when the release name mentions none of them.
AVC_TOKENS = ("AVC", "x264", "h264")
HEVC_TOKENS = ("HEVC", "x265", "h265")

DIVX_CODEC_IDS = ("DIV3", "DIVX", "DX50")


def _mpeg4_name(f: VideoCodecFacts) -> str:
    if f.codec_id == "XVID":
        return "XviD"
    if f.codec_id in DIVX_CODEC_IDS:
        return "DivX"
    return ""


VIDEO_CODEC_RULES: tuple[CodecRule[VideoCodecFacts], ...] = (
    CodecRule("x264", _codec_id_is("x264"), _const("x264")),
    CodecRule("h264", _format_is("h264"), lambda f: match_token(f.scene_name, AVC_TOKENS)),
    CodecRule("x265", _codec_id_is("x265"), _const("x265")),
    CodecRule("hevc", _format_is("hevc"), lambda f: match_token(f.scene_name, HEVC_TOKENS)),
    CodecRule("mpeg2", _format_is("mpeg2video"), _const("MPEG2")),
    CodecRule("mpeg4", _format_is("mpeg4"), _mpeg4_name),
    CodecRule("vc1", _format_is("vc1"), _const("VC1")),
    CodecRule("av1", _format_is("av1"), _const("AV1")),
    CodecRule("vpx", _format_is("vp6", "vp7", "vp8", "vp9"), lambda f: f.format.upper()),
    CodecRule("wmv", _format_is("WMV1", "WMV2"), _const("WMV")),
    # Known but deliberately unnamed
    CodecRule("hidden", _format_is("qtrle", "rpza", "rv10", "rv20", "rv30", "rv40"), _const("")),
)
