# medianorm/services/mediainfo/batch.py
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

from medianorm.common.logging import get_logger
from medianorm.common.settings import get_settings
from medianorm.domain.dataclasses.reports import ProbeReport
from medianorm.domain.entities.media_info import NormalizedMediaInfo
from medianorm.domain.ports.probe import MediaFileNotFoundError
from medianorm.services.mediainfo.reader import VideoFileInfoReader

logger = get_logger(__name__)


@dataclass
class BatchResult:
    report: ProbeReport
    # path -> normalized info, or None when that file failed
    items: Dict[Path, Optional[NormalizedMediaInfo]] = field(default_factory=dict)


class MediaInfoBatch:
    """
    Fans VideoFileInfoReader out over a thread pool. ffprobe is I/O-bound,
    so threads are enough. One bad file never aborts the run: it is counted
    in the report and maps to None.
    """

    def __init__(self, reader: Optional[VideoFileInfoReader] = None):
        self.cfg = get_settings()
        self.reader = reader or VideoFileInfoReader()

    def _one(self, path: Path, scene_name: Optional[str]) -> NormalizedMediaInfo:
        mi = self.reader.read(path)
        return self.reader.normalize(mi, scene_name if scene_name is not None else path.name)

    def run(
        self,
        files: Iterable[Path | str],
        *,
        workers: Optional[int] = None,
        scene_names: Optional[Mapping[Path | str, str]] = None,
    ) -> BatchResult:
        rep = ProbeReport()
        rep.start()
        out = BatchResult(report=rep)

        paths = [Path(f) for f in files]
        rep.planned = len(paths)
        if not paths:
            rep.stop()
            return out

        names = {Path(k): v for k, v in (scene_names or {}).items()}

        # Thread cap: at least 1, no more than cfg
        max_workers_cfg = int(self.cfg.concurrency.max_probe_workers)
        max_workers = max(1, min(int(workers or self.cfg.concurrency.probe_workers), max_workers_cfg))

        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="probe") as pool:
            futures = {pool.submit(self._one, p, names.get(p)): p for p in paths}
            for fut in as_completed(futures):
                p = futures[fut]
                try:
                    out.items[p] = fut.result()
                    rep.probed_ok += 1
                except MediaFileNotFoundError as e:
                    rep.missing_files += 1
                    rep.add_error(str(p), str(e))
                    out.items[p] = None
                    logger.error("%s", e)
                except Exception as e:
                    rep.errors += 1
                    rep.add_error(str(p), str(e))
                    out.items[p] = None
                    logger.exception("Unable to parse media info from file: %s", p)

        rep.stop()
        return out
