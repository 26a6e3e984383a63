# src/services/concurrency_limiter.py

"""Bounded fan-out of detail enrichment across a record collection."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from src.config.settings import Settings
from src.models.enrichment_outcome import EnrichmentOutcome
from src.models.product_record import ProductRecord

logger = logging.getLogger("catalog_enricher.limiter")

Enricher = Callable[[ProductRecord], Awaitable[list[str]]]


class EnrichmentAbortedError(Exception):
    """At least one enrichment task hit a fatal setup failure.

    Carries every outcome collected before the barrier closed, plus the
    number of records that were never launched.
    """

    def __init__(
        self,
        outcomes: list[EnrichmentOutcome],
        not_attempted: int,
    ) -> None:
        self.outcomes = outcomes
        self.not_attempted = not_attempted
        fatal = len(self.fatal_outcomes)
        super().__init__(
            f"{fatal} enrichment task(s) failed fatally, "
            f"{not_attempted} record(s) not attempted"
        )

    @property
    def fatal_outcomes(self) -> list[EnrichmentOutcome]:
        return [o for o in self.outcomes if o.is_fatal]


class ConcurrencyLimiter:
    """Runs an enricher over records with at most N in flight."""

    def __init__(self, max_concurrent: int | None = None) -> None:
        limit = (
            Settings.MAX_CONCURRENT
            if max_concurrent is None
            else max_concurrent
        )
        if limit < 1:
            msg = f"max_concurrent must be >= 1, got {limit}"
            raise ValueError(msg)
        self.max_concurrent = limit

    async def run_all(
        self,
        records: list[ProductRecord],
        enrich: Enricher,
    ) -> list[EnrichmentOutcome]:
        """Enrich every record and wait for all launched tasks.

        A slot is taken before each launch and given back when that
        task ends. Once any task fails fatally no new tasks start;
        tasks already running are still awaited.

        Returns:
            One outcome per record, ordered by record index.

        Raises:
            EnrichmentAbortedError: If any outcome is fatal.
        """
        slots = asyncio.Semaphore(self.max_concurrent)
        abort = asyncio.Event()
        tasks: list[asyncio.Task[EnrichmentOutcome]] = []

        async def run_one(
            index: int, record: ProductRecord,
        ) -> EnrichmentOutcome:
            try:
                missing = await enrich(record)
            except Exception as exc:
                logger.error(
                    "Fatal failure enriching record %d (%s): %s",
                    index,
                    record.name,
                    exc,
                    exc_info=True,
                )
                abort.set()
                return EnrichmentOutcome(
                    index=index, status="fatal", error=exc
                )
            finally:
                slots.release()

            return EnrichmentOutcome(
                index=index,
                status="partial" if missing else "ok",
                missing=list(missing),
            )

        for index, record in enumerate(records):
            await slots.acquire()
            if abort.is_set():
                slots.release()
                logger.warning(
                    "Abort requested, not launching remaining %d record(s)",
                    len(records) - index,
                )
                break
            logger.info(
                "Processing detail URL %d/%d: %s",
                index + 1,
                len(records),
                record.detail_url,
            )
            tasks.append(asyncio.create_task(run_one(index, record)))

        outcomes: list[EnrichmentOutcome] = list(
            await asyncio.gather(*tasks)
        )

        if any(o.is_fatal for o in outcomes):
            raise EnrichmentAbortedError(
                outcomes, len(records) - len(tasks)
            )
        return outcomes
