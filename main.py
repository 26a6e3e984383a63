# main.py

"""Entry point for the catalog_enricher pipeline."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("catalog_enricher.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (the pipeline takes no options)."""
    return argparse.ArgumentParser(
        prog="catalog_enricher",
        description=(
            "Scrape a catalog page, enrich each listing from its "
            "detail page, and export the result as CSV."
        ),
        epilog=f"Target page: {Settings.TARGET_URL}",
    )


def main() -> None:
    """Parse (empty) arguments, run the pipeline, exit with its code."""
    _build_parser().parse_args()

    log_file = setup_logging()
    logger.info("catalog_enricher starting, log file: %s", log_file)

    from src.cli.runner import run_pipeline

    try:
        exit_code = asyncio.run(run_pipeline())
    except Exception:
        logger.critical("Fatal error during pipeline run", exc_info=True)
        raise
    finally:
        logger.info("catalog_enricher shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
