from __future__ import annotations

from typing import Iterable, Optional, Union

from .errors import CryptoPriceError
from .fetcher import PageFetcher
from .models import FieldSelection, Provider, Query, ResponseData, ScrapeResult
from .providers import build_url
from .scrapers import PriceScraper


class CryptoPriceAPI:
    """Entry point: current price data for one coin from one provider.

    Instances are immutable; with_coin(), with_provider(), with_fields(),
    enable() and disable() return new instances that share the fetcher.

        api = CryptoPriceAPI("bitcoin").enable("rank")
        data = api.get_data()
        if data is not None:
            print(data.to_json())
    """

    def __init__(
        self,
        coin: Optional[str] = None,
        provider: Union[Provider, str, None] = None,
        fields: Union[FieldSelection, Iterable[str], None] = None,
        fetcher: Optional[PageFetcher] = None,
    ) -> None:
        self._query = Query(coin, provider)
        if fields is None:
            fields = FieldSelection()
        elif not isinstance(fields, FieldSelection):
            fields = FieldSelection(frozenset(fields))
        self._fields = fields
        self._fetcher = fetcher
        self._scraper = PriceScraper(fetcher)

    @staticmethod
    def description() -> str:
        return "A library for easy access to the current price of digital currencies."

    @property
    def query(self) -> Query:
        return self._query

    @property
    def coin(self) -> str:
        return self._query.coin

    @property
    def provider(self) -> Union[Provider, str]:
        return self._query.provider

    @property
    def fields(self) -> FieldSelection:
        return self._fields

    @property
    def url(self) -> Optional[str]:
        """Page URL for the current coin and provider, or None if it cannot be built."""
        try:
            return build_url(self._query.provider, self._query.coin)
        except (CryptoPriceError, ValueError):
            return None

    @property
    def last_page(self) -> Optional[str]:
        """Body of the most recent successful fetch made by this instance."""
        return self._scraper.last_page

    def with_coin(self, coin: Optional[str]) -> "CryptoPriceAPI":
        return self._replace(query=self._query.with_coin(coin))

    def with_provider(self, provider: Union[Provider, str, None]) -> "CryptoPriceAPI":
        return self._replace(query=self._query.with_provider(provider))

    def with_fields(self, fields: Union[FieldSelection, Iterable[str]]) -> "CryptoPriceAPI":
        if not isinstance(fields, FieldSelection):
            fields = FieldSelection(frozenset(fields))
        return self._replace(fields=fields)

    def enable(self, *names: str) -> "CryptoPriceAPI":
        return self._replace(fields=self._fields.enable(*names))

    def disable(self, *names: str) -> "CryptoPriceAPI":
        return self._replace(fields=self._fields.disable(*names))

    def run(self) -> ScrapeResult:
        """Run the full pipeline and report it as a ScrapeResult (never raises)."""
        return self._scraper.run(self._query)

    def get_data(self) -> Optional[ResponseData]:
        """Return the enabled metrics, or None if the page could not be fetched or read."""
        result = self.run()
        if not result.success or result.data is None:
            return None
        return ResponseData(self._fields.select(result.data))

    def _replace(
        self,
        query: Optional[Query] = None,
        fields: Optional[FieldSelection] = None,
    ) -> "CryptoPriceAPI":
        query = query or self._query
        return CryptoPriceAPI(
            coin=query.coin,
            provider=query.provider,
            fields=fields or self._fields,
            fetcher=self._fetcher,
        )

    def __repr__(self) -> str:
        return (
            f"CryptoPriceAPI(coin={self.coin!r}, provider={self.provider!r}, "
            f"fields={sorted(self._fields.enabled)!r})"
        )
