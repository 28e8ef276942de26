"""Cryptocurrency price scraper package.

Builds the page URL of a coin on a price-listing website, fetches it and
reads the price table into a fixed set of metrics.

Key modules:
    api         -- CryptoPriceAPI facade
    base        -- BaseScraper abstract pipeline
    scrapers    -- PriceScraper concrete implementation
    providers   -- Provider rules and URL building
    fetcher     -- PageFetcher (requests / curl_cffi)
    parser      -- table extraction and positional row parsing
    models      -- Query, FieldSelection, ResponseData, ScrapeResult
    errors      -- exception hierarchy
"""
from .api import CryptoPriceAPI
from .errors import CryptoPriceError, ExtractionFailure, FetchFailure, UnknownProvider
from .models import METRICS, UNAVAILABLE, FieldSelection, Provider, Query, ResponseData, ScrapeResult

__all__ = [
    "CryptoPriceAPI",
    "CryptoPriceError",
    "ExtractionFailure",
    "FetchFailure",
    "UnknownProvider",
    "METRICS",
    "UNAVAILABLE",
    "FieldSelection",
    "Provider",
    "Query",
    "ResponseData",
    "ScrapeResult",
]
