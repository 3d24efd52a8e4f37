"""Request routing against the catalog index."""
from __future__ import annotations

from dataclasses import dataclass

from src.catalog.index import CatalogIndex
from src.config.settings import settings


@dataclass(frozen=True)
class RouteResult:
    """Outcome of a catalog lookup."""

    status: int
    body: str | None = None

    @property
    def found(self) -> bool:
        return self.body is not None


NOT_FOUND = RouteResult(status=404)


def strip_locale_suffix(segment: str, suffix_length: int) -> str:
    """Drop exactly suffix_length trailing characters ("en.json" -> "en")."""
    return segment[: max(len(segment) - suffix_length, 0)]


def route(
    index: CatalogIndex,
    catalog_type: str,
    locale_with_suffix: str,
    suffix_length: int | None = None,
) -> RouteResult:
    """Resolve /{catalog_type}/{locale_with_suffix} to a precomputed document.

    Unknown catalog types and unsupported locales are misses; there is no
    fallback to a default locale.
    """
    if suffix_length is None:
        suffix_length = settings.server.locale_suffix_length

    locale = strip_locale_suffix(locale_with_suffix, suffix_length)
    body = index.get(catalog_type, locale)
    if body is None:
        return NOT_FOUND
    return RouteResult(status=200, body=body)
