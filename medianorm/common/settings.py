# medianorm/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import Annotated, List, Optional
from pydantic import BaseModel, Field, AliasChoices, field_validator, model_validator, computed_field
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from medianorm.common.strings.splitters import csv_to_list


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class FFProbeConfig(BaseModel):
    timeout_sec: int = Field(30, ge=1)
    log_level: str = "error"  # quiet|panic|fatal|error|warning|info|verbose|debug|trace
    bin: str = "ffprobe"  # env: FFPROBE__BIN, or the flat FFPROBE_BIN


class ConcurrencyConfig(BaseModel):
    probe_workers: int = Field(4, ge=1)
    max_probe_workers: int = Field(16, ge=1, le=128, description="Upper bound for batch workers param")


# Extensions recognised at the end of a release/file name. Only these are
# stripped before matching encoder tokens, so "Show.S01E01.x264" keeps its tail.
DEFAULT_MEDIA_EXTS: List[str] = [
    "webm", "m4v", "3gp", "nsv", "ty", "strm", "rm", "rmvb", "m3u", "ifo", "mov", "qt",
    "divx", "xvid", "bivx", "nrg", "pva", "wmv", "asf", "asx", "ogm", "ogv", "m2v",
    "avi", "bin", "dat", "mpg", "mpeg", "mp4", "avc", "vp3", "svq3", "nuv", "viv",
    "dv", "fli", "flv", "wpl", "img", "iso", "vob", "mkv", "mk3d", "ts", "wtv", "m2ts",
]
DEFAULT_USENET_EXTS: List[str] = ["par2", "nzb"]


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "medianorm"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Release-name handling --------
    media_exts: Annotated[List[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_MEDIA_EXTS))
    usenet_exts: Annotated[List[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_USENET_EXTS))

    # -------- Diagnostics --------
    diagnostics_enabled: bool = True

    # -------- Sub-configs --------
    ffprobe: FFProbeConfig = FFProbeConfig()
    concurrency: ConcurrencyConfig = ConcurrencyConfig()
    ffprobe_bin: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("FFPROBE_BIN", "ffprobe_bin"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("media_exts", "usenet_exts", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return [s.lower().lstrip(".") for s in csv_to_list(v)]

    @field_validator("diagnostics_enabled", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v, default=True)

    @model_validator(mode="after")
    def _apply_flat_ffprobe_bin(self):
        if self.ffprobe_bin:
            self.ffprobe = self.ffprobe.model_copy(update={"bin": self.ffprobe_bin})
        return self

    @computed_field  # type: ignore[misc]
    @property
    def strippable_exts(self) -> List[str]:
        return sorted(set(self.media_exts) | set(self.usenet_exts))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from medianorm.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
