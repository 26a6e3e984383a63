# src/cli/runner.py

"""Headless pipeline runner: progress on stderr, exit codes for the shell."""

import logging
from collections import Counter

from rich.console import Console
from rich.table import Table

from src.browser.session import ContextSetupError
from src.scrapers.listing_collector import ListingCollectionError
from src.services.pipeline_orchestrator import (
    PipelineAbortedError,
    PipelineOrchestrator,
    PipelineResult,
)

logger = logging.getLogger("catalog_enricher.cli")

_err = Console(stderr=True)


def _report_phase(phase: int, count: int) -> None:
    _err.print(
        f"[bold]Number of data obtained in Step {phase}:[/bold] {count}"
    )


def _print_summary(result: PipelineResult) -> None:
    """Render an enrichment summary table to stderr."""
    statuses = Counter(o.status for o in result.outcomes)
    with_merchant = sum(1 for r in result.records if r.merchant)
    with_rating = sum(1 for r in result.records if r.rating)

    table = Table(
        title="Enrichment Summary",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Metric", style="bold")
    table.add_column("Records", justify="right")

    table.add_row("Collected", str(len(result.records)))
    table.add_row("[green]Fully enriched[/green]", str(statuses["ok"]))
    table.add_row("[yellow]Partially enriched[/yellow]", str(statuses["partial"]))
    table.add_row("[red]Fatal[/red]", str(statuses["fatal"]))
    table.add_row("With merchant", str(with_merchant))
    table.add_row("With rating", str(with_rating))

    _err.print(table)


async def run_pipeline(
    orchestrator: PipelineOrchestrator | None = None,
) -> int:
    """Run the full scrape and return an exit code (0=ok, 1=fail)."""
    orch = orchestrator or PipelineOrchestrator(on_phase=_report_phase)

    _err.print(f"[bold]Scraping:[/bold] {orch.page_url}")

    try:
        result = await orch.run()
    except ListingCollectionError as exc:
        logger.critical("Listing collection failed: %s", exc, exc_info=True)
        _err.print(f"[red]Listing collection failed: {exc}[/red]")
        return 1
    except ContextSetupError as exc:
        logger.critical("Browser setup failed: %s", exc, exc_info=True)
        _err.print(f"[red]Browser setup failed: {exc}[/red]")
        return 1
    except PipelineAbortedError as exc:
        logger.critical("Enrichment aborted: %s", exc, exc_info=True)
        _err.print(f"[red]Enrichment aborted: {exc.cause}[/red]")
        _print_summary(exc.result)
        if exc.result.output_path is not None:
            _err.print(
                f"[yellow]Partial results → {exc.result.output_path}[/yellow]"
            )
        return 1
    except OSError as exc:
        logger.critical("Could not write output: %s", exc, exc_info=True)
        _err.print(f"[red]Could not write output: {exc}[/red]")
        return 1

    _print_summary(result)
    _err.print(
        f"[green]✓ Scraping completed, data written to "
        f"{result.output_path}[/green]"
    )
    return 0
