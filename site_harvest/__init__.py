# site_harvest/__init__.py
"""
SiteHarvest package initializer.
Defines package version and exposes the crawl entry points.
"""
__version__ = "0.1.0"

from site_harvest.crawler.crawler import CrawlFrontier, crawl
from site_harvest.crawler.models import ListBlock, Page, Paragraph, ScrapedData, Section

__all__ = [
    "__version__",
    "CrawlFrontier",
    "crawl",
    "ListBlock",
    "Page",
    "Paragraph",
    "ScrapedData",
    "Section",
]
