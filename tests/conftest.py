# File: tests/conftest.py
from __future__ import annotations

from collections import Counter
from typing import Dict, Tuple

import pytest
from bs4 import BeautifulSoup

from site_harvest.errors import HttpStatusError, TransportError
from site_harvest.logger import init_logging
from site_harvest.parser.html_parser import parse_html

SEED = "http://example.com/"


class FakeSite:
    """
    In-memory site used in place of the HTTP transport.

    ``routes`` maps absolute URL -> (status, html); status ``None`` simulates
    a connection failure. Unknown URLs answer 404.
    """

    def __init__(self, routes: Dict[str, Tuple[int | None, str]]) -> None:
        self.routes = routes
        self.fetches: Counter[str] = Counter()

    def __call__(self, url: str) -> BeautifulSoup:
        self.fetches[url] += 1
        status, html = self.routes.get(url, (404, ""))
        if status is None:
            raise TransportError(url, "connection refused")
        if not 200 <= status < 300:
            raise HttpStatusError(url, status)
        return parse_html(html.encode("utf-8"))


def main_page(body: str) -> str:
    """Wrap *body* into a page whose main region holds it."""
    return f"<html><head><title>t</title></head><body><nav><a href='/nav'>Nav</a></nav><main>{body}</main></body></html>"


@pytest.fixture(autouse=True)
def reset_logging():
    """
    Restore the project logger after each test: CLI runs attach handlers to
    streams that are closed once the runner returns.
    """
    yield
    init_logging(level="INFO")


@pytest.fixture()
def no_sleep():
    """Record politeness delays instead of sleeping."""
    delays: list[float] = []
    return delays


@pytest.fixture()
def small_site() -> FakeSite:
    """
    Seed links to /a and /b; /a links to /c and back to the seed;
    /b links to a policy page and to an external host.
    """
    return FakeSite(
        {
            SEED: (200, main_page(
                "<h1>Home</h1><p>Welcome</p>"
                "<ul><li><a href='/a'>A</a></li><li><a href='/b'>B</a></li></ul>"
            )),
            "http://example.com/a": (200, main_page(
                "<h2>Page A</h2><p>Alpha</p><a href='/c'>C</a><a href='/'>Home</a>"
            )),
            "http://example.com/b": (200, main_page(
                "<h2>Page B</h2><p>Beta</p><a href='/privacy-policy'>Privacy</a>"
                "<a href='http://other.org/x'>Other</a>"
            )),
            "http://example.com/c": (200, main_page("<h2>Page C</h2><ol><li>one</li><li>two</li></ol>")),
        }
    )
