# src/browser/settle.py

"""Settle policies: how long to let a rendered page catch up."""

import asyncio
from abc import ABC, abstractmethod

from src.browser.session import ScopedContext


class SettlePolicy(ABC):
    """Wait applied after navigation before reading page content."""

    @abstractmethod
    async def settle(self, ctx: ScopedContext) -> None:
        """Block until the page in *ctx* is considered ready."""
        ...


class FixedDelaySettle(SettlePolicy):
    """Pause for a fixed number of seconds."""

    def __init__(self, seconds: float) -> None:
        if seconds < 0:
            msg = f"Settle delay must be >= 0, got {seconds}"
            raise ValueError(msg)
        self.seconds = seconds

    async def settle(self, ctx: ScopedContext) -> None:
        await asyncio.sleep(self.seconds)

    def __repr__(self) -> str:
        return f"FixedDelaySettle({self.seconds})"


class SelectorSettle(SettlePolicy):
    """Wait until *selector* is visible instead of sleeping."""

    def __init__(self, selector: str) -> None:
        self.selector = selector

    async def settle(self, ctx: ScopedContext) -> None:
        await ctx.wait_visible(self.selector)

    def __repr__(self) -> str:
        return f"SelectorSettle({self.selector!r})"
