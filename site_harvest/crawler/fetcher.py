"""
Fetcher module: blocking HTTP requests with a shared session, user agent and timeout.
"""
from __future__ import annotations

from types import TracebackType
from typing import Optional, Type

import requests
from bs4 import BeautifulSoup

from site_harvest.config import DEFAULT_USER_AGENT
from site_harvest.crawler.models import FetchResponse
from site_harvest.errors import HttpStatusError, TransportError
from site_harvest.parser.html_parser import parse_html


class Fetcher:
    """Fetches pages over one :class:`requests.Session`."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent

    def __enter__(self) -> Fetcher:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def fetch(self, url: str) -> FetchResponse:
        """
        GET *url*, following redirects.

        Any status is returned as-is; connection, DNS and timeout failures
        raise TransportError.
        """
        try:
            resp = self.session.get(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as exc:
            raise TransportError(url, exc) from exc
        # requests reports ISO-8859-1 for any text/* response without a charset
        content_type = resp.headers.get("Content-Type", "").lower()
        encoding = resp.encoding if "charset=" in content_type else None
        return FetchResponse(status=resp.status_code, body=resp.content, encoding=encoding)

    def fetch_and_parse(self, url: str) -> BeautifulSoup:
        """Fetch *url* and parse the body; non-2xx statuses raise HttpStatusError."""
        response = self.fetch(url)
        if not response.ok:
            raise HttpStatusError(url, response.status)
        return parse_html(response.body, response.encoding)
