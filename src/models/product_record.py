# src/models/product_record.py

"""Listing record shared between the collection and enrichment phases."""

from dataclasses import dataclass


@dataclass
class ProductRecord:
    """One product listing accumulated across both scrape phases.

    ``name``, ``price``, ``image_url`` and ``detail_url`` come from the
    listing page. ``merchant`` and ``rating`` are filled independently by
    the detail fetcher and stay empty when their lookup fails.
    """

    name: str
    price: str
    image_url: str
    detail_url: str
    merchant: str = ""
    rating: str = ""

    def to_row(self) -> list[str]:
        """Return the CSV row in header column order."""
        return [
            self.name,
            self.price,
            self.image_url,
            self.detail_url,
            self.merchant,
            self.rating,
        ]
