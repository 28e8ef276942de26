"""Per-provider scraping rules.

Each provider maps to one ProviderRules record describing where its coin
pages live and how the price table on those pages is laid out. The set of
providers is closed: adding one means adding a Provider member and an entry
in PROVIDERS.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, Pattern, Tuple, Union

from .errors import UnknownProvider
from .models import Provider


@dataclass(frozen=True)
class FieldRule:
    """Sub-pattern for one table row and the metric(s) its groups feed."""

    pattern: Pattern[str]
    metrics: Tuple[str, ...]


@dataclass(frozen=True)
class ProviderRules:
    base_url: str
    normalize_coin: Callable[[str], str]
    table_pattern: Pattern[str]
    row_pattern: Pattern[str]
    row_end: str
    # Indexed by row position in the table body.
    field_rules: Tuple[FieldRule, ...]

    @property
    def row_count(self) -> int:
        return len(self.field_rules)


def _dash_spaces(coin: str) -> str:
    return coin.replace(" ", "-")


_COIN_MARKET_CAP = ProviderRules(
    base_url="https://www.coinmarketcap.com/currencies/",
    normalize_coin=_dash_spaces,
    # Greedy up to the LAST </tbody> in the page: with several tables the
    # capture runs over into the following ones.
    table_pattern=re.compile(r"<tbody>(.*)</tbody>", re.IGNORECASE | re.DOTALL),
    row_pattern=re.compile(r"(<tr((?!<tr).)*?.*?/tr>)", re.IGNORECASE),
    row_end="</tr>",
    field_rules=(
        FieldRule(re.compile(r"<td>\$(.*)</td>", re.IGNORECASE), ("price",)),
        FieldRule(re.compile(r"<span>\$(.*)</span><div>", re.IGNORECASE), ("priceChange",)),
        FieldRule(re.compile(r"<div>\$(.*)<!.*\$(.*)</div", re.IGNORECASE), ("low24h", "high24h")),
        FieldRule(re.compile(r"span>\$(.*)</span><div", re.IGNORECASE), ("tradingVolume",)),
        FieldRule(re.compile(r"td>(.*)</td", re.IGNORECASE), ("marketCap",)),
        FieldRule(re.compile(r"span .*>(.*)<!", re.IGNORECASE), ("dominance",)),
        FieldRule(re.compile(r"td>#(.*)</td", re.IGNORECASE), ("rank",)),
    ),
)

PROVIDERS: Dict[Provider, ProviderRules] = {
    Provider.COIN_MARKET_CAP: _COIN_MARKET_CAP,
}


def get_rules(provider: Union[Provider, str]) -> ProviderRules:
    """Look up the rules for a provider, raising UnknownProvider if there are none."""
    try:
        return PROVIDERS[Provider(provider)]
    except (ValueError, KeyError):
        raise UnknownProvider(provider) from None


def base_url(provider: Union[Provider, str]) -> str:
    return get_rules(provider).base_url


def build_url(provider: Union[Provider, str], coin_id: str) -> str:
    """Return the page URL for a coin on a provider.

    The coin id only goes through the provider's normalizer; it is not
    percent-encoded."""
    rules = get_rules(provider)
    if not coin_id:
        raise ValueError("coin_id is required")
    return rules.base_url + rules.normalize_coin(coin_id)
