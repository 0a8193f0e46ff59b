"""site_harvest.errors: ошибки, которые возникают при обработке одной страницы или записи отчёта."""

from __future__ import annotations

from pathlib import Path
from typing import Union

__all__ = [
    "HarvestError",
    "TransportError",
    "HttpStatusError",
    "ResolutionError",
    "SerializationError",
]


class HarvestError(Exception):
    """Base class for all SiteHarvest errors."""


class TransportError(HarvestError):
    """Connection, DNS or timeout failure while fetching *url*."""

    def __init__(self, url: str, reason: object) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"request to {url} failed: {reason}")


class HttpStatusError(HarvestError):
    """The server answered *url* with a non-2xx status."""

    def __init__(self, url: str, status: int) -> None:
        self.url = url
        self.status = status
        super().__init__(f"non-success status {status} for {url}")


class ResolutionError(HarvestError):
    """*href* cannot be resolved against *base* into an absolute URL."""

    def __init__(self, base: str, href: str, reason: object = None) -> None:
        self.base = base
        self.href = href
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"cannot resolve {href!r} against {base}{detail}")


class SerializationError(HarvestError):
    """Writing a report to *path* failed."""

    def __init__(self, path: Union[str, Path], reason: object) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot write {self.path}: {reason}")
