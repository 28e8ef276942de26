from __future__ import annotations


class CryptoPriceError(Exception):
    """Base class for every error raised by the scraping pipeline."""


class UnknownProvider(CryptoPriceError, ValueError):
    """No URL or pattern rules are registered for the provider."""

    def __init__(self, provider: object) -> None:
        super().__init__(f"Unknown provider: {provider!r}")
        self.provider = provider


class FetchFailure(CryptoPriceError):
    """The page could not be fetched or came back empty.

    DNS, TLS, timeout and HTTP status problems are all reported as this one
    type; the underlying exception, if any, is chained as ``__cause__``."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class ExtractionFailure(CryptoPriceError):
    """The price table could not be located in the fetched page."""
