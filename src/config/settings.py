# src/config/settings.py

"""Central configuration for the catalog_enricher pipeline."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the catalog_enricher pipeline."""

    # --- Target ---
    TARGET_URL: str = (
        "https://www.tokopedia.com/p/handphone-tablet/handphone?page=0"
    )

    # --- Settle delays ---
    PAGE_SETTLE_SECONDS: float = 5.0      # After listing navigation
    MERCHANT_SETTLE_SECONDS: float = 2.0  # Before merchant text read

    # --- Concurrency ---
    MAX_CONCURRENT: int = 10              # Detail fetches in flight

    # --- Rendering engine timeouts (milliseconds) ---
    NAVIGATION_TIMEOUT_MS: int = 60_000
    WAIT_VISIBLE_TIMEOUT_MS: int = 30_000
    ELEMENT_TIMEOUT_MS: int = 5_000

    # --- Browser launch ---
    HEADLESS: bool = False
    BROWSER_ARGS: list[str] = [
        "--disable-http2",
        "--disable-extensions",
        "--start-fullscreen",
    ]

    # --- Output ---
    CSV_HEADER: list[str] = [
        "Name",
        "Price",
        "ImageURL",
        "DetailProdukURL",
        "Merchant",
        "Rating",
    ]
    WRITE_PARTIAL_ON_ABORT: bool = True

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    SELECTORS_PATH: Path = BASE_DIR / "src" / "config" / "selectors.json"
    RESULTS_DIR: Path = BASE_DIR / "results"
    OUTPUT_FILE: Path = Path(
        os.getenv(
            "CATALOG_OUTPUT_FILE",
            str(RESULTS_DIR / "scraped_data.csv"),
        )
    )
    LOGS_DIR: Path = Path(
        os.getenv("CATALOG_LOGS_DIR", str(BASE_DIR / "logs"))
    )
