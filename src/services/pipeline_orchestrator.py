# src/services/pipeline_orchestrator.py

"""Sequences listing collection, concurrent enrichment, and export."""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from pathlib import Path

from src.browser.session import BrowserSession, open_browser_session
from src.config.settings import Settings
from src.models.enrichment_outcome import EnrichmentOutcome
from src.models.product_record import ProductRecord
from src.scrapers.detail_fetcher import DetailFetcher
from src.scrapers.listing_collector import ListingCollector
from src.services.concurrency_limiter import (
    ConcurrencyLimiter,
    EnrichmentAbortedError,
)
from src.storage.file_manager import FileManager

logger = logging.getLogger("catalog_enricher.orchestrator")

SessionFactory = Callable[[], AbstractAsyncContextManager[BrowserSession]]
PhaseReporter = Callable[[int, int], None]


@dataclass
class PipelineResult:
    """Container for a completed (or partially completed) run."""

    records: list[ProductRecord] = field(
        default_factory=lambda: list[ProductRecord]()
    )
    outcomes: list[EnrichmentOutcome] = field(
        default_factory=lambda: list[EnrichmentOutcome]()
    )
    output_path: Path | None = None
    phase1_count: int = 0
    phase2_count: int = 0
    partial: bool = False


class PipelineAbortedError(Exception):
    """Enrichment aborted; whatever was gathered went to a partial file."""

    def __init__(
        self,
        cause: EnrichmentAbortedError,
        result: PipelineResult,
    ) -> None:
        self.cause = cause
        self.result = result
        where = (
            f", partial results in {result.output_path}"
            if result.output_path is not None
            else ""
        )
        super().__init__(f"{cause}{where}")


class PipelineOrchestrator:
    """Owns the browser session and the record collection for one run.

    Args:
        session_factory: Returns an async context manager yielding the
            shared :class:`BrowserSession`.
        file_manager: CSV writer for the final (or partial) output.
        limiter: Concurrency limiter for phase two.
        page_url: Catalog page to scrape.
        on_phase: Called with ``(phase_number, record_count)`` after
            each phase completes.
    """

    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        file_manager: FileManager | None = None,
        limiter: ConcurrencyLimiter | None = None,
        page_url: str | None = None,
        on_phase: PhaseReporter | None = None,
    ) -> None:
        self.settings = Settings()
        self._session_factory = session_factory or open_browser_session
        self.file_manager = file_manager or FileManager()
        self.limiter = limiter or ConcurrencyLimiter(
            self.settings.MAX_CONCURRENT
        )
        self.page_url = page_url or self.settings.TARGET_URL
        self._on_phase = on_phase

    def _report(self, phase: int, count: int) -> None:
        logger.info("Phase %d finished with %d records", phase, count)
        if self._on_phase is not None:
            self._on_phase(phase, count)

    async def run(self) -> PipelineResult:
        """Collect, enrich, and export.

        Raises:
            ListingCollectionError: Phase one failed.
            ContextSetupError: The browser could not be launched.
            PipelineAbortedError: Phase two aborted on a fatal error.
            OSError: The output file could not be written.
        """
        result = PipelineResult()

        async with self._session_factory() as session:
            collector = ListingCollector(session)
            result.records = await collector.collect(self.page_url)
            result.phase1_count = len(result.records)
            self._report(1, result.phase1_count)

            fetcher = DetailFetcher(session)
            try:
                result.outcomes = await self.limiter.run_all(
                    result.records, fetcher.enrich
                )
            except EnrichmentAbortedError as exc:
                result.outcomes = exc.outcomes
                result.partial = True
                self._write_partial(result)
                raise PipelineAbortedError(exc, result) from exc

            result.phase2_count = len(result.records)
            self._report(2, result.phase2_count)

        result.output_path = self.file_manager.export_csv(result.records)
        return result

    def _write_partial(self, result: PipelineResult) -> None:
        if not self.settings.WRITE_PARTIAL_ON_ABORT:
            logger.warning("Enrichment aborted, partial output disabled")
            return
        result.output_path = self.file_manager.export_partial_csv(
            result.records
        )
        logger.warning(
            "Enrichment aborted, %d records written to %s",
            len(result.records),
            result.output_path,
        )
