"""
Breadth-first crawl frontier.

One :class:`CrawlFrontier` owns all state of a single crawl run: the FIFO
queue, the visited set, the page counter and the accumulated
:class:`ScrapedData`. Pages are fetched one at a time; every processed URL is
followed by a blocking politeness delay.
"""
from __future__ import annotations

import time
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Optional, Set

from bs4 import BeautifulSoup

from site_harvest.crawler.link_extractor import extract_links, normalize_url
from site_harvest.crawler.models import Page, ScrapedData
from site_harvest.errors import HttpStatusError, TransportError
from site_harvest.logger import logger
from site_harvest.parser.html_parser import find_main_region
from site_harvest.parser.section_extractor import DEFAULT_PREDICATES, ElementPredicates, extract_sections

__all__ = ("FetchAndParse", "FrontierState", "CrawlStats", "CrawlFrontier", "crawl")

FetchAndParse = Callable[[str], BeautifulSoup]


@dataclass(slots=True)
class FrontierState:
    """Queue and bookkeeping of one crawl run."""

    visited: Set[str] = field(default_factory=set)
    queue: Deque[str] = field(default_factory=deque)
    pending: Set[str] = field(default_factory=set)
    pages_scraped: int = 0

    def enqueue(self, url: str) -> bool:
        """Append *url* unless it is already visited or waiting in the queue."""
        if url in self.visited or url in self.pending:
            return False
        self.queue.append(url)
        self.pending.add(url)
        return True

    def pop(self) -> str:
        url = self.queue.popleft()
        self.pending.discard(url)
        return url


@dataclass(slots=True)
class CrawlStats:
    """Statistics collected during crawl for summary output."""
    pages_without_title: int = 0
    error_counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))

    def record_error(self, status_code: Optional[int]) -> None:
        """Record a failed URL by status code, or as a connection error."""
        key = "connection_error" if status_code is None else str(status_code)
        self.error_counts[key] += 1

    def record_page(self, page: Page) -> None:
        if not page.title:
            self.pages_without_title += 1


class CrawlFrontier:
    """Single-threaded breadth-first crawler bounded by a page cap."""

    def __init__(
        self,
        seed_url: str,
        max_pages: int,
        fetch_and_parse: FetchAndParse,
        politeness_delay: float = 0.5,
        *,
        sleep: Callable[[float], None] = time.sleep,
        predicates: ElementPredicates = DEFAULT_PREDICATES,
    ) -> None:
        if max_pages < 0:
            raise ValueError("max_pages must be >= 0")
        if politeness_delay < 0:
            raise ValueError("politeness_delay must be >= 0")
        self.seed_url = seed_url
        self.max_pages = max_pages
        self.politeness_delay = politeness_delay
        self._fetch_and_parse = fetch_and_parse
        self._sleep = sleep
        self._predicates = predicates
        self.state = FrontierState()
        self.stats = CrawlStats()
        self.data = ScrapedData()

    def run(self) -> ScrapedData:
        """Crawl until the queue drains or the page cap is reached."""
        try:
            seed = normalize_url(self.seed_url)
        except ValueError as exc:
            logger.error("Invalid seed URL %s: %s", self.seed_url, exc)
            self._log_summary()
            return self.data

        logger.info("Starting crawl from %s (max pages: %d)", seed, self.max_pages)
        started = time.monotonic()
        self.state.enqueue(seed)

        while self.state.queue:
            url = self.state.pop()
            if url in self.state.visited:
                continue
            if self.state.pages_scraped >= self.max_pages:
                logger.info("Reached the maximum limit of %d pages", self.max_pages)
                break

            self._process(url)
            self.state.visited.add(url)

            if self.politeness_delay:
                self._sleep(self.politeness_delay)

        self._log_summary(time.monotonic() - started)
        return self.data

    def _process(self, url: str) -> None:
        try:
            document = self._fetch_and_parse(url)
        except TransportError as exc:
            logger.warning("Request error for %s: %s", url, exc.reason)
            self.stats.record_error(None)
            return
        except HttpStatusError as exc:
            logger.warning("Non-success status code %d for URL: %s", exc.status, url)
            self.stats.record_error(exc.status)
            return

        region = find_main_region(document)
        page = extract_sections(region, url, self._predicates)
        self.data.add(page)
        self.state.pages_scraped += 1
        self.stats.record_page(page)
        logger.info("[%d/%d] Scraped %s", self.state.pages_scraped, self.max_pages, url)

        # sorted for a reproducible breadth-first order
        queued = sum(1 for link in sorted(extract_links(region, url)) if self.state.enqueue(link))
        logger.debug("%s: +%d links, queue size %d", url, queued, len(self.state.queue))

    def _log_summary(self, duration: Optional[float] = None) -> None:
        if duration is None:
            logger.info("Scraped %d pages", self.state.pages_scraped)
        else:
            logger.info("Scraped %d pages in %.2f s", self.state.pages_scraped, duration)
        if self.stats.pages_without_title:
            logger.info("Pages without title: %d", self.stats.pages_without_title)
        for error_type, count in sorted(self.stats.error_counts.items()):
            label = "Connection errors" if error_type == "connection_error" else f"HTTP {error_type}"
            logger.info("%s: %d", label, count)


def crawl(
    seed_url: str,
    max_pages: int,
    fetch_and_parse: FetchAndParse,
    politeness_delay: float = 0.5,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> ScrapedData:
    """Run a fresh :class:`CrawlFrontier` from *seed_url* and return its pages."""
    return CrawlFrontier(seed_url, max_pages, fetch_and_parse, politeness_delay, sleep=sleep).run()
