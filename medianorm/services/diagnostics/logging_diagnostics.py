# medianorm/services/diagnostics/logging_diagnostics.py
from __future__ import annotations

import logging
from typing import Optional

from medianorm.common.logging import get_logger
from medianorm.common.settings import get_settings
from medianorm.domain.dataclasses.diagnostics import UnknownFormatEvent
from medianorm.domain.ports.diagnostics import FormatDiagnosticsPort

logger = get_logger("medianorm.diagnostics")


class LoggingDiagnostics(FormatDiagnosticsPort):
    """
    Default FormatDiagnosticsPort: one WARNING per unknown codec, with the
    event fields attached as LogRecord attributes so a structured handler
    (JSON formatter, alerting hook) can group on `event_kind`.
    """

    def __init__(self, log: Optional[logging.Logger] = None, enabled: Optional[bool] = None) -> None:
        self.log = log or logger
        self.enabled = get_settings().diagnostics_enabled if enabled is None else enabled

    def report(self, event: UnknownFormatEvent) -> None:
        if not self.enabled:
            return
        self.log.warning(
            "%s: unknown format '%s' (codec id '%s', container '%s') in '%s'",
            event.kind,
            event.format,
            event.codec_id,
            event.container_format or "",
            event.scene_name or "",
            extra=event.as_log_extra(),
        )
