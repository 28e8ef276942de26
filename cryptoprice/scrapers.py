from __future__ import annotations

from typing import Optional

from .base import BaseScraper
from .fetcher import PageFetcher
from .models import MetricRecord, Query
from .parser import extract_table_body, parse_rows
from .providers import build_url


class PriceScraper(BaseScraper):
    """Scrapes the price table of a coin page using the query's provider rules."""

    def __init__(self, fetcher: Optional[PageFetcher] = None) -> None:
        self._fetcher = fetcher or PageFetcher()
        self.last_page: Optional[str] = None

    def build_url(self, query: Query) -> str:
        return build_url(query.provider, query.coin)

    def fetch(self, url: str) -> str:
        self.last_page = None
        page = self._fetcher.fetch(url)
        self.last_page = page
        return page

    def status_code(self) -> Optional[int]:
        return getattr(self._fetcher, "last_status_code", None)

    def parse(self, page: str, query: Query) -> MetricRecord:
        return parse_rows(extract_table_body(page, query.provider), query.provider)
