# medianorm/domain/policies/release_name.py
from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from medianorm.common.settings import get_settings

_EXT_RE = re.compile(r"\.([a-z0-9]{2,4})$", re.IGNORECASE)


def remove_file_extension(name: str, known_exts: Optional[Iterable[str]] = None) -> str:
    """
    Drop a trailing ".ext" when it is a known media/usenet extension.
    Anything else is left alone: "Show.S01E01.x264" must keep its tail.
    """
    exts = set(known_exts) if known_exts is not None else set(get_settings().strippable_exts)
    m = _EXT_RE.search(name)
    if m and m.group(1).lower() in exts:
        return name[: m.start()]
    return name


def match_token(
    release_name: Optional[str],
    tokens: Sequence[str],
    known_exts: Optional[Iterable[str]] = None,
) -> str:
    """
    Return the first of `tokens` found (case-insensitively) in the release
    name, else the LAST token. Callers order tokens so the last one is the
    generic fallback, e.g. ("AVC", "x264", "h264") -> "h264".
    """
    if not tokens:
        raise ValueError("match_token() needs at least one token")

    name = remove_file_extension(release_name, known_exts) if release_name and release_name.strip() else ""
    lowered = name.lower()
    for token in tokens:
        if token.lower() in lowered:
            return token
    return tokens[-1]
