"""
Configuration for the team form dataset builder.
Collects the fixed pipeline constants into one structure passed to the pipeline.
"""

import logging
import os
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from typing import Dict, Tuple

from .constants import (
    CORNER_THRESHOLDS,
    CSV_SEPARATOR,
    EVENT_PAUSE_SECONDS,
    INPUT_DIR,
    INPUT_EXTENSION,
    OUTPUT_PATH,
    RECENT_MATCH_WINDOW,
    ROW_PAUSE_SECONDS,
    SOFASCORE_API_BASE,
    SOFASCORE_HEADERS,
    STAT_LOOKUPS,
)
from .settings import LOG_LEVEL, SOFASCORE_TIMEOUT_MS


@dataclass(frozen=True)
class PipelineConfig:
    """Every tunable of a run; tests build their own with small values."""

    input_dir: str = INPUT_DIR
    input_extension: str = INPUT_EXTENSION
    csv_separator: str = CSV_SEPARATOR
    output_path: str = OUTPUT_PATH
    api_base: str = SOFASCORE_API_BASE
    headers: Dict[str, str] = field(default_factory=lambda: dict(SOFASCORE_HEADERS))
    timeout_s: float = SOFASCORE_TIMEOUT_MS / 1000.0
    window: int = RECENT_MATCH_WINDOW
    corner_thresholds: Tuple[float, ...] = CORNER_THRESHOLDS
    stat_lookups: Dict[str, Tuple[Tuple[str, str], ...]] = field(
        default_factory=lambda: dict(STAT_LOOKUPS)
    )
    event_pause_s: float = EVENT_PAUSE_SECONDS
    row_pause_s: float = ROW_PAUSE_SECONDS

    @classmethod
    def default(cls) -> "PipelineConfig":
        return cls()


def setup_logger(name: str) -> logging.Logger:
    """Create or retrieve a configured logger for the application."""

    logger = logging.getLogger(name)

    log_level = getattr(logging, LOG_LEVEL, logging.INFO)
    logger.setLevel(log_level)

    if logging.getLogger().handlers:
        logger.propagate = True
        return logger

    if not logger.handlers:
        log_file = os.path.join(os.path.dirname(os.path.dirname(__file__)), "football_form.log")
        handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3)
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        logger.addHandler(handler)
        logger.propagate = False

    return logger
