from __future__ import annotations
from typing import Protocol
from medianorm.domain.dataclasses.diagnostics import UnknownFormatEvent

class FormatDiagnosticsPort(Protocol):
    def report(self, event: UnknownFormatEvent) -> None: ...
