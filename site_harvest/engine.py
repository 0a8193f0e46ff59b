"""site_harvest.engine: связывает конфиг, HTTP-транспорт и обход."""

from __future__ import annotations

from site_harvest.config import HarvestConfig
from site_harvest.crawler.crawler import crawl
from site_harvest.crawler.fetcher import Fetcher
from site_harvest.crawler.models import ScrapedData
from site_harvest.logger import logger

__all__ = ["start_crawl"]


def start_crawl(config: HarvestConfig) -> ScrapedData:
    """Запускает обход по конфигу и возвращает собранные страницы."""
    logger.debug(
        "Crawl settings: user_agent=%r timeout=%.1fs delay=%dms",
        config.user_agent,
        config.timeout,
        config.politeness_delay_ms,
    )
    with Fetcher(user_agent=config.user_agent, timeout=config.timeout) as fetcher:
        return crawl(
            str(config.seed_url),
            config.max_pages,
            fetcher.fetch_and_parse,
            config.politeness_delay,
        )
