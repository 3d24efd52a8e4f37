"""Errors raised while constructing the resource server."""
from __future__ import annotations


class ResourceServerError(Exception):
    """Base class for fatal construction errors."""


class ConfigurationError(ResourceServerError):
    """Translations or server configuration are missing or malformed."""


class AssemblyError(ResourceServerError):
    """A catalog assembler failed for one (catalog type, locale) cell."""

    def __init__(self, catalog_type: str, locale: str | None, message: str):
        self.catalog_type = catalog_type
        self.locale = locale
        where = catalog_type if locale is None else f"{catalog_type}/{locale}"
        super().__init__(f"Failed to assemble {where}: {message}")
