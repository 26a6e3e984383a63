# src/scrapers/listing_collector.py

"""Phase one: scrape the catalog page into initial product records."""

from playwright.async_api import ElementHandle

from src.browser.session import BrowserSession, RenderError, ScopedContext
from src.browser.settle import FixedDelaySettle, SettlePolicy
from src.models.product_record import ProductRecord
from src.scrapers.base_scraper import BaseScraper
from src.scrapers.redirect import (
    RedirectDecodeError,
    decode_detail_url,
    has_redirect_marker,
    is_absolute_url,
)


class ListingCollectionError(Exception):
    """The listing page could not be scraped completely."""


class ListingCollector(BaseScraper):
    """Scrapes every listing card on one catalog page.

    Extraction is all-or-nothing: a card missing any of its fields
    aborts the collection instead of being skipped.
    """

    def __init__(
        self,
        session: BrowserSession,
        settle: SettlePolicy | None = None,
        selectors: dict[str, str] | None = None,
    ) -> None:
        super().__init__(session, "listing", selectors)
        self.settle = settle or FixedDelaySettle(
            self.settings.PAGE_SETTLE_SECONDS
        )

    async def collect(
        self,
        page_url: str,
        settle: SettlePolicy | None = None,
    ) -> list[ProductRecord]:
        """Return one record per listing card, in page order.

        Raises:
            ListingCollectionError: On navigation failure or any card
                field that cannot be read or decoded.
        """
        policy = settle or self.settle
        records: list[ProductRecord] = []

        async with self.session.new_context() as ctx:
            self.logger.info("Navigating to %s", page_url)
            try:
                await ctx.navigate(page_url)
                await policy.settle(ctx)
                cards = await ctx.query_all(self._selector("card"))
            except RenderError as exc:
                msg = f"Cannot load listing page {page_url}: {exc}"
                raise ListingCollectionError(msg) from exc

            self.logger.info(
                "Listing page loaded, %d cards matched", len(cards)
            )
            for index, card in enumerate(cards):
                record = await self._extract_card(ctx, index, card)
                self.logger.debug("Collected card %d: %s", index, record)
                records.append(record)

        return records

    async def _extract_card(
        self,
        ctx: ScopedContext,
        index: int,
        card: ElementHandle,
    ) -> ProductRecord:
        """Read all phase-one fields from a single card."""
        name = await self._read_text(ctx, card, index, "name")
        price = await self._read_text(ctx, card, index, "price")
        image_url = await self._read_attribute(
            ctx, card, index, "image", "image_attr"
        )
        link = await self._read_attribute(
            ctx, card, index, "link", "link_attr"
        )

        if has_redirect_marker(link):
            try:
                detail_url = decode_detail_url(link)
            except RedirectDecodeError as exc:
                msg = f"Listing card {index}: {exc}"
                raise ListingCollectionError(msg) from exc
        elif is_absolute_url(link):
            self.logger.debug("Card %d link is already direct", index)
            detail_url = link
        else:
            msg = (
                f"Listing card {index}: link is not an absolute URL: "
                f"{link!r}"
            )
            raise ListingCollectionError(msg)

        return ProductRecord(
            name=name,
            price=price,
            image_url=image_url,
            detail_url=detail_url,
        )

    async def _read_text(
        self,
        ctx: ScopedContext,
        card: ElementHandle,
        index: int,
        field: str,
    ) -> str:
        try:
            return await ctx.text(card, self._selector(field))
        except RenderError as exc:
            msg = f"Listing card {index}: cannot read {field}: {exc}"
            raise ListingCollectionError(msg) from exc

    async def _read_attribute(
        self,
        ctx: ScopedContext,
        card: ElementHandle,
        index: int,
        field: str,
        attr_key: str,
    ) -> str:
        try:
            return await ctx.attribute(
                card, self._selector(field), self._selector(attr_key)
            )
        except RenderError as exc:
            msg = f"Listing card {index}: cannot read {field}: {exc}"
            raise ListingCollectionError(msg) from exc
