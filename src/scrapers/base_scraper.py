# src/scrapers/base_scraper.py

"""Shared plumbing for the listing collector and the detail fetcher."""

import json
import logging
from typing import Any

from src.browser.session import BrowserSession
from src.config.settings import Settings


class BaseScraper:
    """Holds the browser session, a named logger, and a selector table.

    Args:
        session: Shared browser session to borrow contexts from.
        section: Key of this scraper's table in ``selectors.json``.
        selectors: Explicit selector table; skips loading the JSON file.
    """

    def __init__(
        self,
        session: BrowserSession,
        section: str,
        selectors: dict[str, str] | None = None,
    ) -> None:
        self.session = session
        self.section = section
        self.logger = logging.getLogger(
            f"catalog_enricher.{section}"
        )
        self.settings = Settings()
        self.selectors: dict[str, str] = (
            selectors if selectors is not None
            else self._load_selectors()
        )

    def _load_selectors(self) -> dict[str, str]:
        """Load this scraper's CSS selectors from selectors.json."""
        with open(self.settings.SELECTORS_PATH, encoding="utf-8") as f:
            all_selectors: dict[str, Any] = json.load(f)
        result: dict[str, str] = all_selectors.get(self.section, {})
        return result

    def _selector(self, key: str) -> str:
        """Return the selector for *key*, failing loudly if unset."""
        try:
            return self.selectors[key]
        except KeyError:
            msg = (
                f"Selector '{key}' missing from the "
                f"'{self.section}' table"
            )
            raise KeyError(msg) from None
