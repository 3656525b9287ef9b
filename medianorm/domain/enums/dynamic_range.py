from __future__ import annotations
from enum import StrEnum

class VideoDynamicRange(StrEnum):
    sdr = ""
    hdr = "HDR"
