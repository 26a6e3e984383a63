# src/models/enrichment_outcome.py

"""Tagged result of one detail-page enrichment attempt."""

from dataclasses import dataclass, field


@dataclass
class EnrichmentOutcome:
    """Outcome of enriching the record at ``index``."""

    index: int
    status: str  # "ok", "partial", "fatal"
    missing: list[str] = field(
        default_factory=lambda: list[str]()
    )
    error: BaseException | None = None

    @property
    def is_fatal(self) -> bool:
        return self.status == "fatal"
