# medianorm/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class BaseReport:
    """Common report base:
    - timing: started_at / finished_at
    - error capture: error_details
    - helpers: start(), stop(), add_error(), as_dict()
    """
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    # Each tuple is (path, message)
    error_details: List[Tuple[str, str]] = field(default_factory=list)

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = datetime.now()

    def stop(self) -> None:
        self.finished_at = datetime.now()

    def add_error(self, subject: str, message: str) -> None:
        self.error_details.append((subject, message))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProbeReport(BaseReport):
    planned: int = 0
    probed_ok: int = 0
    missing_files: int = 0
    errors: int = 0
