# tests/test_runner.py

"""Tests for the CLI runner's exit codes."""

import unittest
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from src.browser.session import ContextSetupError
from src.cli.runner import run_pipeline
from src.models.enrichment_outcome import EnrichmentOutcome
from src.models.product_record import ProductRecord
from src.scrapers.listing_collector import ListingCollectionError
from src.services.concurrency_limiter import EnrichmentAbortedError
from src.services.pipeline_orchestrator import (
    PipelineAbortedError,
    PipelineResult,
)


def _orchestrator(
    result: PipelineResult | None = None,
    error: BaseException | None = None,
) -> MagicMock:
    orch = MagicMock()
    orch.page_url = "https://catalog.example.com"
    orch.run = AsyncMock(return_value=result, side_effect=error)
    return orch


def _result() -> PipelineResult:
    record = ProductRecord(
        name="Phone A",
        price="Rp1",
        image_url="",
        detail_url="https://shop.example.com/p/a",
        merchant="Toko A",
    )
    return PipelineResult(
        records=[record],
        outcomes=[EnrichmentOutcome(0, "partial", ["rating"])],
        output_path=Path("results/scraped_data.csv"),
        phase1_count=1,
        phase2_count=1,
    )


@patch("src.cli.runner._err")
class TestRunPipeline(unittest.IsolatedAsyncioTestCase):
    """run_pipeline() maps outcomes to exit codes."""

    async def test_success_returns_zero(self, _mock_err: MagicMock) -> None:
        code = await run_pipeline(_orchestrator(result=_result()))  # type: ignore[arg-type]
        self.assertEqual(code, 0)

    async def test_listing_failure_returns_one(
        self, _mock_err: MagicMock,
    ) -> None:
        orch = _orchestrator(error=ListingCollectionError("card 3"))
        self.assertEqual(await run_pipeline(orch), 1)  # type: ignore[arg-type]

    async def test_browser_setup_failure_returns_one(
        self, _mock_err: MagicMock,
    ) -> None:
        orch = _orchestrator(error=ContextSetupError("no chromium"))
        self.assertEqual(await run_pipeline(orch), 1)  # type: ignore[arg-type]

    async def test_abort_returns_one(self, mock_err: MagicMock) -> None:
        """An aborted enrichment exits 1 and reports the partial file."""
        result = _result()
        result.partial = True
        result.output_path = Path("results/scraped_data.partial.csv")
        cause = EnrichmentAbortedError(
            [EnrichmentOutcome(0, "fatal", error=ContextSetupError("x"))], 0
        )
        orch = _orchestrator(error=PipelineAbortedError(cause, result))
        self.assertEqual(await run_pipeline(orch), 1)  # type: ignore[arg-type]
        printed = " ".join(str(c.args[0]) for c in mock_err.print.call_args_list)
        self.assertIn("scraped_data.partial.csv", printed)

    async def test_write_failure_returns_one(
        self, _mock_err: MagicMock,
    ) -> None:
        orch = _orchestrator(error=PermissionError("read-only"))
        self.assertEqual(await run_pipeline(orch), 1)  # type: ignore[arg-type]

    async def test_unexpected_error_propagates(
        self, _mock_err: MagicMock,
    ) -> None:
        orch = _orchestrator(error=RuntimeError("bug"))
        with self.assertRaises(RuntimeError):
            await run_pipeline(orch)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
