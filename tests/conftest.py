# tests/conftest.py

"""Shared pytest fixtures for all pipeline tests."""

from collections.abc import Generator
from unittest.mock import patch

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def instant_settle() -> Generator[None, None, None]:
    """Zero the fixed settle delays so scrape phases run instantly."""
    with patch.object(Settings, "PAGE_SETTLE_SECONDS", 0.0), patch.object(
        Settings, "MERCHANT_SETTLE_SECONDS", 0.0
    ):
        yield
