from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

UNKNOWN_AUDIO_FORMAT = "UnknownAudioFormatFFProbe"
UNKNOWN_VIDEO_FORMAT = "UnknownVideoFormatFFProbe"


@dataclass(frozen=True)
class UnknownFormatEvent:
    """
    Emitted when a stream carries a codec the formatter has no rule for.
    `kind` doubles as a grouping fingerprint for triage.
    """
    kind: str                           # UNKNOWN_AUDIO_FORMAT | UNKNOWN_VIDEO_FORMAT
    format: str
    codec_id: str = ""
    container_format: Optional[str] = None
    scene_name: Optional[str] = None
    raw_data: Dict[str, Any] = field(default_factory=dict, repr=False)

    def as_log_extra(self) -> Dict[str, Any]:
        """Flat mapping for logging `extra=`; keys avoid LogRecord attribute names."""
        return {
            "event_kind": self.kind,
            "media_format": self.format,
            "codec_id": self.codec_id,
            "container_format": self.container_format,
            "scene_name": self.scene_name,
            "raw_data": self.raw_data,
        }
