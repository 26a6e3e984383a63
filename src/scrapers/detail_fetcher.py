# src/scrapers/detail_fetcher.py

"""Phase two: fill merchant and rating from a record's detail page."""

from src.browser.session import BrowserSession, RenderError, ScopedContext
from src.browser.settle import FixedDelaySettle, SettlePolicy
from src.models.product_record import ProductRecord
from src.scrapers.base_scraper import BaseScraper

MERCHANT_FIELD = "merchant"
RATING_FIELD = "rating"


class DetailFetcher(BaseScraper):
    """Enriches one record at a time in its own browsing context.

    Missing merchant or rating data is logged and left empty. Only a
    failure to open the browsing context escapes :meth:`enrich`.
    """

    def __init__(
        self,
        session: BrowserSession,
        settle: SettlePolicy | None = None,
        selectors: dict[str, str] | None = None,
    ) -> None:
        super().__init__(session, "detail", selectors)
        self.settle = settle or FixedDelaySettle(
            self.settings.MERCHANT_SETTLE_SECONDS
        )

    async def enrich(self, record: ProductRecord) -> list[str]:
        """Fill ``record.merchant`` and ``record.rating`` in place.

        Returns:
            Names of the fields that could not be read.

        Raises:
            ContextSetupError: If no browsing context could be opened.
        """
        missing: list[str] = []
        async with self.session.new_context() as ctx:
            if not await self._fetch_merchant(ctx, record):
                missing.append(MERCHANT_FIELD)
            if not await self._fetch_rating(ctx, record):
                missing.append(RATING_FIELD)
        return missing

    async def _fetch_merchant(
        self, ctx: ScopedContext, record: ProductRecord,
    ) -> bool:
        selector = self._selector(MERCHANT_FIELD)
        try:
            await ctx.navigate(record.detail_url)
            await ctx.wait_visible(selector)
            await self.settle.settle(ctx)
            merchant = await ctx.text(None, selector)
        except RenderError as exc:
            self.logger.warning(
                "Merchant data not found for product %s: %s",
                record.name,
                exc,
            )
            return False
        record.merchant = merchant
        return True

    async def _fetch_rating(
        self, ctx: ScopedContext, record: ProductRecord,
    ) -> bool:
        try:
            rating = await ctx.text(None, self._selector(RATING_FIELD))
        except RenderError as exc:
            self.logger.warning(
                "Rating data not found for product %s: %s",
                record.name,
                exc,
            )
            return False
        record.rating = rating
        return True
