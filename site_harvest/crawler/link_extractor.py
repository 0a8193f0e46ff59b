"""
Link extraction and URL normalization utilities for SiteHarvest.
"""
from __future__ import annotations

import posixpath
from typing import Optional, Set
from urllib.parse import SplitResult, urljoin, urlsplit, urlunsplit

from bs4.element import Tag
from requests.utils import requote_uri

from site_harvest.errors import ResolutionError
from site_harvest.logger import logger

__all__ = ("DENIED_PATH_KEYWORDS", "normalize_url", "resolve_url", "is_in_scope", "extract_links")

#: path substrings that mark legal/boilerplate pages
DENIED_PATH_KEYWORDS = ("policy", "terms", "cookie", "privacy", "license")

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _netloc(parts: SplitResult) -> str:
    host = parts.hostname
    if host is None:
        return parts.netloc.lower()
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is None or _DEFAULT_PORTS.get(parts.scheme.lower()) == port:
        return host
    return f"{host}:{port}"


def _canonical_path(path: str) -> str:
    if not path:
        return "/"
    norm = posixpath.normpath(path)
    if path.endswith(("/", "/.", "/..")) and not norm.endswith("/"):
        norm += "/"
    if not norm.startswith("/"):
        norm = "/" + norm
    return requote_uri(norm)


def normalize_url(url: str) -> str:
    """
    Normalize URL to scheme + host + path + query.

    Lowercases scheme and host, drops default ports, user info and the
    fragment. For http(s) URLs the path loses its dot segments and gets one
    percent-escaping, so ``/a b`` and ``/a%20b`` name the same page; an empty
    path becomes ``/``.
    Raises ValueError on malformed hosts or ports.
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    path, query = parts.path, parts.query
    if scheme in _DEFAULT_PORTS:
        path = _canonical_path(path)
        query = requote_uri(query)
    return urlunsplit((scheme, _netloc(parts), path, query, ""))


def resolve_url(base_url: str, href: str) -> str:
    """Resolve *href* against *base_url* and normalize the result."""
    try:
        return normalize_url(urljoin(base_url, href.strip()))
    except ValueError as exc:
        raise ResolutionError(base_url, href, exc) from exc


def is_in_scope(resolved_url: str, base_url: str) -> bool:
    """
    True when *resolved_url* is an http(s) URL on exactly the host of
    *base_url* (subdomains excluded) whose lowercased path contains none of
    :data:`DENIED_PATH_KEYWORDS`.
    """
    try:
        target = urlsplit(resolved_url)
        base_host = urlsplit(base_url).hostname
    except ValueError:
        return False
    if target.scheme not in _DEFAULT_PORTS:
        return False
    if not target.hostname or target.hostname != base_host:
        return False
    path = target.path.lower()
    return not any(keyword in path for keyword in DENIED_PATH_KEYWORDS)


def extract_links(main_region: Optional[Tag], base_url: str) -> Set[str]:
    """
    Collect the in-scope links of every ``<a href>`` inside *main_region*.

    Unresolvable hrefs are skipped; the result is deduplicated.
    """
    links: Set[str] = set()
    if main_region is None:
        return links
    for tag in main_region.find_all("a", href=True):
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        try:
            resolved = resolve_url(base_url, href)
        except ResolutionError as exc:
            logger.debug("Skipping link: %s", exc)
            continue
        if is_in_scope(resolved, base_url):
            links.add(resolved)
    return links
