"""HTML parsing utilities for SiteHarvest.

Parsing is best effort: :func:`parse_html` accepts any bytes or text and
always returns a traversable :class:`~bs4.BeautifulSoup` tree, malformed
markup included. When ``html.parser`` rejects a document outright (a broken
``<![`` marked section, for instance), those openers are escaped to text and
the document is parsed again; if that fails too, the page yields an empty tree.

Text helpers
------------
* :func:`normalize_text` collapses whitespace runs to a single space and
  trims the result. It is idempotent.
* :func:`element_text` joins every text node below an element with a single
  space and normalizes the result.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Optional, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from site_harvest.logger import logger

__all__: Sequence[str] = ("parse_html", "find_main_region", "normalize_text", "element_text")

MAIN_REGION_TAG = "main"

_MARKED_SECTION = re.compile(r"<!\[")
_MARKED_SECTION_BYTES = re.compile(rb"<!\[")


def _soup(body: Union[bytes, str], encoding: Optional[str]) -> BeautifulSoup:
    if encoding and isinstance(body, bytes):
        return BeautifulSoup(body, "html.parser", from_encoding=encoding)
    return BeautifulSoup(body, "html.parser")


def _escape_marked_sections(body: Union[bytes, str]) -> Union[bytes, str]:
    if isinstance(body, bytes):
        return _MARKED_SECTION_BYTES.sub(b"&lt;![", body)
    return _MARKED_SECTION.sub("&lt;![", body)


def parse_html(body: Union[bytes, str], encoding: Optional[str] = None) -> BeautifulSoup:
    """
    Parse *body* with the stdlib-backed ``html.parser`` tree builder.

    *encoding* is the charset announced by the server; without it bs4 detects
    the encoding from the body. Never raises.
    """
    try:
        return _soup(body, encoding)
    except ParserRejectedMarkup as exc:
        logger.debug("Markup rejected, retrying with escaped '<![': %s", exc)
    try:
        return _soup(_escape_marked_sections(body), encoding)
    except ParserRejectedMarkup as exc:
        logger.warning("Unparseable markup, using an empty document: %s", exc)
        return BeautifulSoup("", "html.parser")


def find_main_region(document: BeautifulSoup) -> Optional[Tag]:
    """Return the first ``<main>`` element, or None when the page has none."""
    region = document.find(MAIN_REGION_TAG)
    return region if isinstance(region, Tag) else None


def normalize_text(text: str) -> str:
    return " ".join(text.split())


def element_text(element: Tag) -> str:
    return normalize_text(" ".join(element.strings))
