# medianorm/domain/policies/dynamic_range.py
from __future__ import annotations

from typing import Optional

from medianorm.domain.enums.dynamic_range import VideoDynamicRange

VALID_HDR_COLOUR_PRIMARIES = "bt2020"
VALID_HDR_TRANSFER_FUNCTIONS = ("PQ", "HLG", "smpte2084")
DOLBY_VISION_CODEC_IDS = ("dvhe", "dvh1")


def video_dynamic_range(
    codec_id: Optional[str],
    bit_depth: Optional[int],
    colour_primaries: Optional[str] = None,
    transfer_characteristics: Optional[str] = None,
) -> VideoDynamicRange:
    if codec_id and codec_id.lower() in DOLBY_VISION_CODEC_IDS:
        return VideoDynamicRange.hdr

    if (
        (bit_depth or 0) >= 10
        and colour_primaries and colour_primaries.strip()
        and transfer_characteristics and transfer_characteristics.strip()
    ):
        if colour_primaries.lower() == VALID_HDR_COLOUR_PRIMARIES and any(
            fn in transfer_characteristics for fn in VALID_HDR_TRANSFER_FUNCTIONS
        ):
            return VideoDynamicRange.hdr

    return VideoDynamicRange.sdr
