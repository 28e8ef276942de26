from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from .errors import FetchFailure
from .models import MetricRecord, Query, ScrapeResult

logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """Abstract base class defining the build-url / fetch / parse pipeline.

    run() never raises: every failure is returned as an unsuccessful
    ScrapeResult whose error_type is the exception class name. Field-level
    problems are not failures; they show up as UNAVAILABLE values in data.
    """

    def run(self, query: Query) -> ScrapeResult:
        start_ms = self._now_ms()
        url: Optional[str] = None
        status_code: Optional[int] = None

        try:
            self.validate(query)
            url = self.build_url(query)
            page = self.fetch(url)
            status_code = self.status_code()
            data = self.parse(page, query)
        except Exception as exc:  # noqa: BLE001
            if isinstance(exc, FetchFailure):
                status_code = exc.status_code
            logger.warning(
                "Scraping %s on %s failed: %s",
                query.coin, getattr(query.provider, "value", query.provider), exc,
            )
            return ScrapeResult(
                coin=query.coin,
                provider=str(getattr(query.provider, "value", query.provider)),
                url=url,
                success=False,
                status_code=status_code,
                latency_ms=self._now_ms() - start_ms,
                data=None,
                error_type=type(exc).__name__,
            )

        return ScrapeResult(
            coin=query.coin,
            provider=str(getattr(query.provider, "value", query.provider)),
            url=url,
            success=True,
            status_code=status_code,
            latency_ms=self._now_ms() - start_ms,
            data=data,
            error_type=None,
        )

    def validate(self, query: Query) -> None:
        if not query.coin:
            raise ValueError("query.coin is required")

    def status_code(self) -> Optional[int]:
        return None

    @abstractmethod
    def build_url(self, query: Query) -> str:
        ...

    @abstractmethod
    def fetch(self, url: str) -> str:
        ...

    @abstractmethod
    def parse(self, page: str, query: Query) -> MetricRecord:
        ...

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)
