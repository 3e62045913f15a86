from __future__ import annotations

import logging

from resumefit.core.config.settings import settings


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or settings.log_level, format="%(message)s")
