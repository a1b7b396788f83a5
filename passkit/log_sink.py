from __future__ import annotations

import logging
from typing import Optional

from core import settings

from .models import LogRequest
from .results import ServiceResult


class LogSink:
    """Relays device diagnostics to a logger and echoes them back unchanged."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(settings.PASSKIT_LOG_LOGGER)

    def log(self, req: LogRequest) -> ServiceResult:
        entries = list(req.logs)
        for entry in entries:
            self.logger.info("device log: %s", entry)
        return ServiceResult.with_data(entries)
