from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from curl_cffi import requests as curl_requests
import requests

from .errors import FetchFailure

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
DEFAULT_IMPERSONATE = "chrome120"

TRANSPORTS = ("requests", "curl_cffi")


class PageFetcher:
    """Fetches a page body with a single GET request.

    There is no retry: the first failure of any kind is reported as
    FetchFailure. ``timeout`` defaults to None, leaving the transport's own
    default in place.
    """

    def __init__(
        self,
        transport: str = "requests",
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        impersonate: str = DEFAULT_IMPERSONATE,
    ) -> None:
        if transport not in TRANSPORTS:
            raise ValueError(f"Unknown transport: {transport}")
        self._transport = transport
        self._timeout = timeout
        self._headers = {"User-Agent": DEFAULT_USER_AGENT}
        if headers:
            self._headers.update(headers)
        self._impersonate = impersonate
        self.last_status_code: Optional[int] = None

    @property
    def transport(self) -> str:
        return self._transport

    def fetch(self, url: str) -> str:
        """Return the body of ``url`` or raise FetchFailure."""
        self.last_status_code = None
        try:
            response = self._get(url)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Fetching %s failed: %s", url, exc)
            raise FetchFailure(url, type(exc).__name__) from exc

        status_code = getattr(response, "status_code", None)
        self.last_status_code = status_code
        if status_code is None or not 200 <= int(status_code) < 300:
            logger.warning("Fetching %s returned HTTP %s", url, status_code)
            raise FetchFailure(url, f"HTTP_{status_code}", status_code)

        body = getattr(response, "text", "")
        if not body:
            logger.warning("Fetching %s returned an empty body", url)
            raise FetchFailure(url, "empty body", status_code)

        logger.debug("Fetched %s (%d chars, HTTP %s)", url, len(body), status_code)
        return body

    def _get(self, url: str) -> Any:
        if self._transport == "curl_cffi":
            session = curl_requests.Session()
            try:
                return session.get(
                    url,
                    headers=self._headers,
                    impersonate=self._impersonate,
                    timeout=self._timeout,
                )
            finally:
                session.close()
        return requests.get(url, headers=self._headers, timeout=self._timeout)
