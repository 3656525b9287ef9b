# medianorm/services/mediainfo/reader.py
from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Callable, Optional

from medianorm.common.logging import get_logger
from medianorm.domain.entities.media_info import MediaInfoModel, NormalizedMediaInfo
from medianorm.domain.policies.media_formatter import MediaInfoFormatter
from medianorm.domain.ports.probe import MediaFileNotFoundError, MediaProbePort
from medianorm.services.mappers.media_info import to_media_info_model, to_normalized
from medianorm.services.probe.ffprobe_adapter import FFprobeAdapter  # default adapter

logger = get_logger(__name__)


class VideoFileInfoReader:
    """
    Reads one media file: existence check, probe, primary-stream selection,
    runtime reconciliation. Each call is independent; no caching by path.
    """

    def __init__(
        self,
        *,
        prober: Optional[Callable[[], MediaProbePort]] = None,
        formatter: Optional[MediaInfoFormatter] = None,
        file_exists: Optional[Callable[[Path], bool]] = None,
    ) -> None:
        # prober is a factory returning a MediaProbePort instance (e.g., lambda: FFprobeAdapter())
        self.prober: Callable[[], MediaProbePort] = prober or (lambda: FFprobeAdapter())
        self.formatter = formatter or MediaInfoFormatter()
        self.file_exists: Callable[[Path], bool] = file_exists or (lambda p: p.is_file())

    def read(self, path: Path | str) -> MediaInfoModel:
        """Raises MediaFileNotFoundError / ProbeError; see get_media_info() for the forgiving variant."""
        src = Path(path)
        if not self.file_exists(src):
            raise MediaFileNotFoundError(src)

        logger.debug("Getting media info from %s", src)
        probe = self.prober().analyze(src)
        return to_media_info_model(probe)

    def get_media_info(self, path: Path | str) -> Optional[MediaInfoModel]:
        try:
            return self.read(path)
        except MediaFileNotFoundError as ex:
            logger.error("%s", ex)
            return None
        except Exception:
            logger.exception("Unable to parse media info from file: %s", path)
            return None

    def get_run_time(self, path: Path | str) -> Optional[timedelta]:
        info = self.get_media_info(path)
        return info.run_time if info else None

    def normalize(self, mi: MediaInfoModel, scene_name: Optional[str] = None) -> NormalizedMediaInfo:
        return to_normalized(mi, self.formatter, scene_name)

    def analyze(self, path: Path | str, scene_name: Optional[str] = None) -> Optional[NormalizedMediaInfo]:
        """
        Probe + normalize in one step. `scene_name` defaults to the file name,
        which is what release-name disambiguation of h264/hevc looks at.
        """
        mi = self.get_media_info(path)
        if mi is None:
            return None
        return self.normalize(mi, scene_name if scene_name is not None else Path(path).name)
