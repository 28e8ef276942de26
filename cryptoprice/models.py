from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Union


class Provider(str, Enum):
    """Price-listing websites the scraper knows how to read."""

    COIN_MARKET_CAP = "CoinMarketCap"

    @classmethod
    def coerce(cls, value: Union["Provider", str, None]) -> Union["Provider", str]:
        """Return the matching member, the default for None, or the raw value unchanged."""
        if value is None:
            return DEFAULT_PROVIDER
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return value


DEFAULT_COIN = "bitcoin"
DEFAULT_PROVIDER = Provider.COIN_MARKET_CAP

# Order matches the row layout of the price table.
METRICS = (
    "price",
    "priceChange",
    "low24h",
    "high24h",
    "tradingVolume",
    "marketCap",
    "dominance",
    "rank",
)


class _Unavailable:
    """Marker for a metric whose row was found but could not be read."""

    _instance: Optional["_Unavailable"] = None

    def __new__(cls) -> "_Unavailable":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNAVAILABLE"

    def __reduce__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE = _Unavailable()

MetricValue = Union[float, int, _Unavailable]
MetricRecord = Dict[str, MetricValue]


def empty_record() -> MetricRecord:
    """Record with every metric at its zero default."""
    record: MetricRecord = {name: 0.0 for name in METRICS}
    record["rank"] = 0
    return record


def _check_metrics(names: Iterable[str]) -> FrozenSet[str]:
    names = frozenset(names)
    unknown = names.difference(METRICS)
    if unknown:
        raise ValueError(f"Unknown metric(s): {', '.join(sorted(unknown))}")
    return names


@dataclass(frozen=True)
class Query:
    coin: str = DEFAULT_COIN
    provider: Union[Provider, str] = DEFAULT_PROVIDER

    def __post_init__(self) -> None:
        if self.coin is None:
            object.__setattr__(self, "coin", DEFAULT_COIN)
        object.__setattr__(self, "provider", Provider.coerce(self.provider))

    def with_coin(self, coin: Optional[str]) -> "Query":
        return replace(self, coin=coin)

    def with_provider(self, provider: Union[Provider, str, None]) -> "Query":
        return replace(self, provider=provider)


@dataclass(frozen=True)
class FieldSelection:
    """The set of metric names that end up in a result."""

    enabled: FrozenSet[str] = field(default_factory=lambda: frozenset({"price"}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "enabled", _check_metrics(self.enabled))

    @classmethod
    def of(cls, *names: str) -> "FieldSelection":
        return cls(frozenset(names))

    @classmethod
    def all(cls) -> "FieldSelection":
        return cls(frozenset(METRICS))

    def enable(self, *names: str) -> "FieldSelection":
        return FieldSelection(self.enabled | _check_metrics(names))

    def disable(self, *names: str) -> "FieldSelection":
        return FieldSelection(self.enabled - _check_metrics(names))

    def with_field(self, name: str, enabled: bool) -> "FieldSelection":
        return self.enable(name) if enabled else self.disable(name)

    def select(self, record: MetricRecord) -> Dict[str, MetricValue]:
        """Project a record down to the enabled metrics.

        Every enabled name is present in the output; a name missing from the
        record is reported as UNAVAILABLE rather than dropped."""
        return {name: record.get(name, UNAVAILABLE) for name in METRICS if name in self.enabled}


def _json_default(obj: Any) -> Any:
    if obj is UNAVAILABLE:
        return False
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class ResponseData:
    """Selected metrics as returned to callers."""

    def __init__(self, data: Optional[Dict[str, MetricValue]] = None) -> None:
        self._data = data

    def to_plain(self) -> Optional[Dict[str, MetricValue]]:
        return self._data

    def to_json(self, **kwargs: Any) -> str:
        """Serialize as a JSON object keyed by metric name; UNAVAILABLE becomes false."""
        return json.dumps(self._data, default=_json_default, **kwargs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResponseData):
            return self._data == other._data
        return NotImplemented

    def __repr__(self) -> str:
        return f"ResponseData({self._data!r})"


@dataclass(frozen=True)
class ScrapeResult:
    coin: str
    provider: str
    url: Optional[str]
    success: bool
    status_code: Optional[int]
    latency_ms: int
    data: Optional[MetricRecord]
    error_type: Optional[str]
