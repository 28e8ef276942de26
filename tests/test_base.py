"""Tests for the BaseScraper abstract class."""

import unittest

from cryptoprice.base import BaseScraper
from cryptoprice.errors import FetchFailure
from cryptoprice.models import Query


class DummyScraper(BaseScraper):
    def __init__(self, error=None):
        self.error = error

    def build_url(self, query):
        return "https://example.com/" + query.coin

    def fetch(self, url):
        if self.error is not None:
            raise self.error
        return "<tbody>x</tbody>"

    def parse(self, page, query):
        return {"price": 1.0}


class TestBaseScraperValidation(unittest.TestCase):
    """Verify that BaseScraper.validate() catches invalid queries."""

    def test_validate_raises_on_empty_coin(self):
        """A query with an empty coin should raise ValueError."""
        with self.assertRaises(ValueError) as ctx:
            DummyScraper().validate(Query(""))
        self.assertIn("coin", str(ctx.exception).lower())

    def test_validate_passes_with_coin(self):
        """A query with a coin should not raise."""
        DummyScraper().validate(Query("bitcoin"))


class TestBaseScraperRun(unittest.TestCase):
    """Verify that BaseScraper.run() handles exceptions gracefully."""

    def test_run_returns_parsed_data(self):
        """A clean run should succeed and carry the parsed record."""
        result = DummyScraper().run(Query("bitcoin"))
        self.assertTrue(result.success)
        self.assertEqual(result.url, "https://example.com/bitcoin")
        self.assertEqual(result.provider, "CoinMarketCap")
        self.assertEqual(result.data, {"price": 1.0})
        self.assertIsNone(result.error_type)

    def test_run_captures_exception_as_error_type(self):
        """If fetch() raises, run() should return a failed ScrapeResult."""
        error = FetchFailure("https://example.com/bitcoin", "HTTP_503", 503)
        result = DummyScraper(error).run(Query("bitcoin"))
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, "FetchFailure")
        self.assertEqual(result.status_code, 503)
        self.assertIsNone(result.data)

    def test_failure_log_names_provider_by_value(self):
        """The warning should name the provider as "CoinMarketCap"."""
        error = FetchFailure("https://example.com/bitcoin", "HTTP_503", 503)
        with self.assertLogs("cryptoprice.base", level="WARNING") as logs:
            DummyScraper(error).run(Query("bitcoin"))
        self.assertIn("bitcoin on CoinMarketCap failed", logs.output[0])
        self.assertNotIn("Provider.", logs.output[0])

    def test_run_reports_invalid_query(self):
        """Validation errors should surface as a failed result, not an exception."""
        result = DummyScraper().run(Query(""))
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, "ValueError")
        self.assertIsNone(result.url)


if __name__ == "__main__":
    unittest.main()
