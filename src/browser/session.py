# src/browser/session.py

"""Playwright-backed rendering engine shared by both scrape phases.

A single Chromium instance is launched per run. Every unit of work
(the listing scrape, each detail fetch) borrows its own isolated
``BrowserContext`` through :meth:`BrowserSession.new_context`, so one
task's navigation never disturbs another task's page.
"""

import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager

from playwright.async_api import Browser, BrowserContext, ElementHandle, Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from src.config.settings import Settings

logger = logging.getLogger("catalog_enricher.browser")


class RenderError(Exception):
    """The rendering engine could not produce the requested content."""


class ElementNotFoundError(RenderError):
    """A selector matched nothing, or an attribute was absent."""


class RenderTimeoutError(RenderError):
    """The rendering engine gave up waiting."""


class NavigationError(RenderError):
    """Navigating to a URL failed."""


class ContextSetupError(Exception):
    """A browser or an isolated browsing context could not be opened."""


@contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    """Re-raise Playwright failures as :class:`RenderError` subclasses."""
    try:
        yield
    except PlaywrightTimeoutError as exc:
        raise RenderTimeoutError(f"Timed out while {action}") from exc
    except PlaywrightError as exc:
        raise RenderError(f"Failed while {action}: {exc.message}") from exc


class ScopedContext:
    """One isolated browsing context with a single page.

    Element reads accept an optional *scope* handle. With a scope the
    selector is resolved inside that element only; without one it is
    resolved against the whole page, waiting up to the element timeout
    for it to be attached.
    """

    def __init__(
        self,
        context: BrowserContext,
        page: Page,
        element_timeout_ms: int | None = None,
        visible_timeout_ms: int | None = None,
        navigation_timeout_ms: int | None = None,
    ) -> None:
        self.context = context
        self.page = page
        self._element_timeout_ms = (
            Settings.ELEMENT_TIMEOUT_MS
            if element_timeout_ms is None
            else element_timeout_ms
        )
        self._visible_timeout_ms = (
            Settings.WAIT_VISIBLE_TIMEOUT_MS
            if visible_timeout_ms is None
            else visible_timeout_ms
        )
        self._navigation_timeout_ms = (
            Settings.NAVIGATION_TIMEOUT_MS
            if navigation_timeout_ms is None
            else navigation_timeout_ms
        )

    async def navigate(self, url: str) -> None:
        try:
            await self.page.goto(
                url,
                timeout=self._navigation_timeout_ms,
                wait_until="domcontentloaded",
            )
        except PlaywrightTimeoutError as exc:
            raise RenderTimeoutError(
                f"Timed out navigating to {url}"
            ) from exc
        except PlaywrightError as exc:
            raise NavigationError(
                f"Navigation to {url} failed: {exc.message}"
            ) from exc

    async def wait_visible(self, selector: str) -> None:
        with _translate_errors(f"waiting for '{selector}' to be visible"):
            await self.page.wait_for_selector(
                selector,
                state="visible",
                timeout=self._visible_timeout_ms,
            )

    async def query_all(self, selector: str) -> list[ElementHandle]:
        with _translate_errors(f"querying '{selector}'"):
            return await self.page.query_selector_all(selector)

    async def _find(
        self, scope: ElementHandle | None, selector: str,
    ) -> ElementHandle:
        """Resolve *selector* inside *scope* (or the page) to one element."""
        with _translate_errors(f"locating '{selector}'"):
            if scope is None:
                handle = await self.page.wait_for_selector(
                    selector,
                    state="attached",
                    timeout=self._element_timeout_ms,
                )
            else:
                handle = await scope.query_selector(selector)
        if handle is None:
            raise ElementNotFoundError(f"No element matches '{selector}'")
        return handle

    async def text(
        self, scope: ElementHandle | None, selector: str,
    ) -> str:
        """Return the stripped visible text of the matched element."""
        handle = await self._find(scope, selector)
        with _translate_errors(f"reading text of '{selector}'"):
            value = await handle.inner_text()
        return value.strip()

    async def attribute(
        self, scope: ElementHandle | None, selector: str, name: str,
    ) -> str:
        """Return attribute *name* of the matched element."""
        handle = await self._find(scope, selector)
        with _translate_errors(f"reading '{name}' of '{selector}'"):
            value = await handle.get_attribute(name)
        if value is None:
            raise ElementNotFoundError(
                f"Element '{selector}' has no '{name}' attribute"
            )
        return value


class BrowserSession:
    """Handle on the shared browser; hands out isolated contexts."""

    def __init__(self, browser: Browser) -> None:
        self.browser = browser

    @asynccontextmanager
    async def new_context(self) -> AsyncIterator[ScopedContext]:
        """Open a fresh context and page; always close them on exit."""
        try:
            context = await self.browser.new_context(no_viewport=True)
        except PlaywrightError as exc:
            raise ContextSetupError(
                f"Cannot open browsing context: {exc.message}"
            ) from exc

        try:
            try:
                page = await context.new_page()
            except PlaywrightError as exc:
                raise ContextSetupError(
                    f"Cannot open page: {exc.message}"
                ) from exc
            yield ScopedContext(context, page)
        finally:
            try:
                await context.close()
            except PlaywrightError as exc:
                logger.warning(
                    "Browsing context did not close cleanly: %s",
                    exc.message,
                )


@asynccontextmanager
async def open_browser_session(
    headless: bool | None = None,
    args: list[str] | None = None,
) -> AsyncIterator[BrowserSession]:
    """Launch Chromium with the configured flags for the whole run."""
    launch_headless = Settings.HEADLESS if headless is None else headless
    launch_args = Settings.BROWSER_ARGS if args is None else args

    async with async_playwright() as playwright:
        try:
            browser = await playwright.chromium.launch(
                headless=launch_headless,
                args=launch_args,
            )
        except PlaywrightError as exc:
            raise ContextSetupError(
                f"Cannot launch browser: {exc.message}"
            ) from exc

        logger.info(
            "Browser launched (headless=%s, args=%s)",
            launch_headless,
            " ".join(launch_args),
        )
        try:
            yield BrowserSession(browser)
        finally:
            try:
                await browser.close()
            except PlaywrightError as exc:
                logger.warning(
                    "Browser did not close cleanly: %s", exc.message
                )
            else:
                logger.info("Browser closed")
