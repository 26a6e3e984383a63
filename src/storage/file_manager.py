# src/storage/file_manager.py

"""Writes enriched records to CSV."""

import csv
import logging
from pathlib import Path

from src.config.settings import Settings
from src.models.product_record import ProductRecord

logger = logging.getLogger("catalog_enricher.storage")


class FileManager:
    """Writes record collections to the configured CSV path."""

    def __init__(self, output_path: Path | None = None) -> None:
        self.output_path: Path = (
            output_path if output_path is not None
            else Settings.OUTPUT_FILE
        )
        logger.debug("FileManager initialised, output_path=%s", self.output_path)

    @property
    def partial_path(self) -> Path:
        """Sibling path used when a run aborts mid-enrichment."""
        return self.output_path.with_name(
            f"{self.output_path.stem}.partial{self.output_path.suffix}"
        )

    def export_csv(
        self,
        records: list[ProductRecord],
        filepath: Path | None = None,
    ) -> Path:
        """Write a header and one row per record, in collection order.

        Raises:
            OSError: If the file cannot be created or written.
        """
        target = filepath if filepath is not None else self.output_path
        target.parent.mkdir(parents=True, exist_ok=True)

        with open(target, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(Settings.CSV_HEADER)
            for record in records:
                writer.writerow(record.to_row())

        logger.info("Exported %d records to %s", len(records), target)
        return target

    def export_partial_csv(self, records: list[ProductRecord]) -> Path:
        """Write an aborted run's records to :attr:`partial_path`."""
        return self.export_csv(records, self.partial_path)
