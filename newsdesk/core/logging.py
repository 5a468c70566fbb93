"""Process-wide logging setup."""

from __future__ import annotations

import logging

from newsdesk.core.config import Settings


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.logging.level.upper(),
        format=settings.logging.format,
    )