"""Tests for provider rules and URL building."""

import unittest

from cryptoprice.errors import UnknownProvider
from cryptoprice.models import Provider
from cryptoprice.providers import PROVIDERS, base_url, build_url, get_rules


class TestBuildUrl(unittest.TestCase):
    """Verify URL construction for CoinMarketCap."""

    def test_plain_coin(self):
        """A simple coin id should be appended to the base URL."""
        self.assertEqual(
            build_url(Provider.COIN_MARKET_CAP, "bitcoin"),
            "https://www.coinmarketcap.com/currencies/bitcoin",
        )

    def test_spaces_become_dashes(self):
        """Every space should become a dash; nothing else changes."""
        for coin, expected in [
            ("bitcoin cash", "bitcoin-cash"),
            ("Wrapped  Bitcoin ", "Wrapped--Bitcoin-"),
            ("usd coin/é?x", "usd-coin/é?x"),
        ]:
            with self.subTest(coin=coin):
                self.assertEqual(build_url("CoinMarketCap", coin), base_url("CoinMarketCap") + expected)

    def test_unknown_provider_raises(self):
        """An unregistered provider should raise UnknownProvider, a ValueError."""
        with self.assertRaises(UnknownProvider) as ctx:
            build_url("CoinGecko", "bitcoin")
        self.assertIsInstance(ctx.exception, ValueError)
        self.assertIn("CoinGecko", str(ctx.exception))

    def test_empty_coin_raises(self):
        """An empty coin id should not produce a bare base URL."""
        with self.assertRaises(ValueError):
            build_url(Provider.COIN_MARKET_CAP, "")


class TestProviderRules(unittest.TestCase):
    """Verify the provider table is complete."""

    def test_every_provider_has_rules(self):
        """Each Provider member should be registered."""
        for provider in Provider:
            self.assertIs(get_rules(provider), PROVIDERS[provider])

    def test_coin_market_cap_reads_seven_rows(self):
        """CoinMarketCap maps seven table rows to the eight metrics."""
        rules = get_rules(Provider.COIN_MARKET_CAP)
        self.assertEqual(rules.row_count, 7)
        metrics = [name for rule in rules.field_rules for name in rule.metrics]
        self.assertEqual(len(metrics), 8)
        self.assertEqual(metrics[0], "price")
        self.assertEqual(metrics[-1], "rank")


if __name__ == "__main__":
    unittest.main()
