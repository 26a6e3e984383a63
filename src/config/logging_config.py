# src/config/logging_config.py

"""Per-run logging for catalog_enricher.

Every pipeline run writes its own ``run_<timestamp>.log`` under the logs
directory. Module loggers are children of ``catalog_enricher`` so the
collector, the detail fetchers, and the limiter all land in one file,
interleaved in the order the event loop ran them.

The console only shows warnings and above; per-record enrichment
warnings therefore reach stderr while the detailed trail stays on disk.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "catalog_enricher"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(logs_dir: Path | None = None) -> Path:
    """Attach file and console handlers to the project logger.

    Args:
        logs_dir: Directory for the run log. Defaults to
            ``Settings.LOGS_DIR``.

    Returns:
        The :class:`~pathlib.Path` of this run's log file.
    """
    target_dir = logs_dir if logs_dir is not None else Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"run_{stamp}.log"

    project_logger = logging.getLogger(ROOT_LOGGER_NAME)
    project_logger.setLevel(logging.DEBUG)

    # Already configured in this process (tests call this repeatedly)
    if project_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    project_logger.addHandler(file_handler)
    project_logger.addHandler(console_handler)

    project_logger.info("Run log opened at %s", log_file)
    return log_file
