# medianorm/services/probe/ffprobe_adapter.py
from __future__ import annotations

import json
import re
import shlex
import shutil
import subprocess
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from medianorm.common.logging import get_logger
from medianorm.common.probe.ffprobe_helpers import (
    build_ffprobe_cmd,
    get_tag,
    parse_duration,
    parse_int,
    parse_rate,
)
from medianorm.common.settings import get_settings
from medianorm.domain.entities.probe import ContainerInfo, ProbeResult, StreamInfo
from medianorm.domain.enums.stream_kind import StreamKind
from medianorm.domain.ports.probe import MediaFileNotFoundError, MediaProbePort, ProbeError

logger = get_logger(__name__)


class FFprobeAdapter(MediaProbePort):
    """
    Infrastructure adapter implementing MediaProbePort using `ffprobe`.
    Blocking, one subprocess per call; safe to use from a thread pool.
    """

    def __init__(self, ffprobe_bin: Optional[str] = None, timeout_sec: Optional[int] = None):
        cfg = get_settings()
        candidate = ffprobe_bin or cfg.ffprobe.bin
        if not Path(candidate).is_absolute():
            # resolve to an absolute path for nicer errors
            resolved = shutil.which(candidate)
            if not resolved:
                raise ProbeError(f"{candidate} not found on PATH; set FFPROBE_BIN or install ffmpeg.")
            candidate = resolved

        self.ffprobe_bin = candidate
        self.timeout_sec = int(timeout_sec or cfg.ffprobe.timeout_sec)
        self.log_level = cfg.ffprobe.log_level

    # ---- Port API -------------------------------------------------------------
    def analyze(self, path: Path) -> ProbeResult:
        if not path:
            raise ProbeError("No path provided to analyze().")
        if not Path(path).is_file():
            raise MediaFileNotFoundError(path)

        cmd = build_ffprobe_cmd(path, ffprobe_bin=self.ffprobe_bin, log_level=self.log_level)
        logger.debug("ffprobe cmd: %s", " ".join(shlex.quote(p) for p in cmd))

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_sec,
                check=False,  # we handle rc manually to attach stderr
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeError(f"ffprobe timed out after {self.timeout_sec}s", stderr=str(e)) from e
        except OSError as e:
            raise ProbeError("Failed to execute ffprobe (OS error).", stderr=str(e)) from e

        if proc.returncode != 0:
            raise ProbeError("ffprobe returned non-zero exit code", stderr=proc.stderr, rc=proc.returncode)

        try:
            data = json.loads(proc.stdout or "{}")
        except json.JSONDecodeError as e:
            raise ProbeError("ffprobe produced invalid JSON", stderr=proc.stdout) from e

        return parse_ffprobe_json(data)


# ---- Parsing ------------------------------------------------------------------
def parse_ffprobe_json(data: Dict[str, Any]) -> ProbeResult:
    """
    Map ffprobe's `-show_format -show_streams` JSON onto ProbeResult.
    Safe to call in unit tests with fixture JSON.
    """
    fmt = (data or {}).get("format") or {}
    streams = tuple(_parse_stream(s) for s in ((data or {}).get("streams") or []))

    container = ContainerInfo(
        format_name=fmt.get("format_name"),
        format_long_name=fmt.get("format_long_name"),
        duration=parse_duration(fmt.get("duration")) or timedelta(0),
        bit_rate=parse_int(fmt.get("bit_rate")),
        size=parse_int(fmt.get("size")),
        tags=_str_tags(fmt),
    )
    return ProbeResult(format=container, streams=streams, raw=dict(data or {}))


def _parse_stream(s: Dict[str, Any]) -> StreamInfo:
    # Matroska leaves stream duration empty and stores it as a tag instead
    duration = parse_duration(s.get("duration"))
    if duration is None:
        duration = parse_duration(get_tag(s, "DURATION"))

    bit_rate = parse_int(s.get("bit_rate")) or parse_int(get_tag(s, "BPS"))
    bit_depth = parse_int(s.get("bits_per_raw_sample")) or _bit_depth_from_pix_fmt(s.get("pix_fmt"))

    return StreamInfo(
        index=parse_int(s.get("index")) or 0,
        codec_type=StreamKind.from_codec_type(s.get("codec_type")),
        codec_name=s.get("codec_name"),
        codec_long_name=s.get("codec_long_name"),
        codec_tag_string=s.get("codec_tag_string"),
        profile=s.get("profile"),
        bit_rate=bit_rate,
        bits_per_raw_sample=bit_depth,
        color_primaries=s.get("color_primaries"),
        color_transfer=s.get("color_transfer"),
        channels=parse_int(s.get("channels")),
        channel_layout=s.get("channel_layout"),
        width=parse_int(s.get("width")),
        height=parse_int(s.get("height")),
        frame_rate=parse_rate(s.get("avg_frame_rate")) or parse_rate(s.get("r_frame_rate")),
        duration=duration,
        language=get_tag(s, "language"),
        is_default=(s.get("disposition") or {}).get("default") == 1,
        tags=_str_tags(s),
    )


_PIX_FMT_DEPTH_RE = re.compile(r"p(?P<depth>\d{2})(?:le|be)$")


def _bit_depth_from_pix_fmt(pix_fmt: Optional[str]) -> Optional[int]:
    """e.g. yuv420p10le -> 10. Plain 8-bit formats carry no suffix -> None."""
    m = _PIX_FMT_DEPTH_RE.search(pix_fmt or "")
    return int(m.group("depth")) if m else None


def _str_tags(obj: Dict[str, Any]) -> Dict[str, str]:
    tags = obj.get("tags") or {}
    if not isinstance(tags, dict):
        return {}
    return {str(k): str(v) for k, v in tags.items()}
