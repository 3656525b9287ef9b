# medianorm/common/probe/ffprobe_helpers.py
from __future__ import annotations
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
import math
import re

_HMS_RE = re.compile(r"^(?P<h>\d+):(?P<m>\d{1,2}):(?P<s>\d{1,2}(?:\.\d+)?)$")


def build_ffprobe_cmd(
    input_path: str | Path,
    *,
    ffprobe_bin: str = "ffprobe",
    log_level: str = "error",
    extra_args: Iterable[str] | None = None,
) -> List[str]:
    """
    Build a robust ffprobe command that emits JSON we can parse consistently.
    """
    if isinstance(input_path, Path):
        input_path = str(input_path)
    base = [
        ffprobe_bin,
        "-v", log_level,
        "-show_streams",
        "-show_format",
        "-print_format", "json",
        "--",  # Stop option parsing in case of weird filenames
        input_path,
    ]
    if extra_args:
        # Insert before the "--" so they are still treated as options
        base = base[:-2] + list(extra_args) + base[-2:]
    return base


# ---- tiny parse helpers -------------------------------------------------------
def parse_float(x: Any) -> Optional[float]:
    try:
        if x is None:
            return None
        return float(x)
    except (TypeError, ValueError):
        return None


def parse_int(x: Any) -> Optional[int]:
    try:
        if x is None:
            return None
        return int(float(x))
    except (TypeError, ValueError):
        return None


def parse_rate(rate: Optional[str]) -> Optional[float]:
    """ffprobe reports frame rates as "num/den"; "0/0" means unknown."""
    if not rate or "/" not in rate:
        return parse_float(rate)
    try:
        n, d = rate.split("/", 1)
        n, d = float(n), float(d)
        if d == 0:
            return None
        return n / d
    except ValueError:
        return None


def parse_duration(value: Any) -> Optional[timedelta]:
    """
    Accept seconds ("12.345") or the sexagesimal form Matroska puts in
    tags.DURATION ("00:42:17.123000000"). Negative, non-finite ("inf", "nan") or garbage -> None.
    """
    if value is None:
        return None
    text = str(value).strip()
    m = _HMS_RE.match(text)
    if m:
        secs = int(m.group("h")) * 3600 + int(m.group("m")) * 60 + float(m.group("s"))
    else:
        secs = parse_float(text)
    if secs is None or not math.isfinite(secs) or secs < 0:
        return None
    return timedelta(seconds=secs)


def get_tag(obj: Dict[str, Any] | None, key: str) -> Optional[str]:
    """Case-insensitive tag lookup (ffprobe keeps the container's casing)."""
    if not obj:
        return None
    tags = obj.get("tags") or {}
    if not isinstance(tags, dict):
        return None
    val = tags.get(key)
    if val is None:
        lowered = key.lower()
        val = next((v for k, v in tags.items() if str(k).lower() == lowered), None)
    return str(val) if val is not None else None
