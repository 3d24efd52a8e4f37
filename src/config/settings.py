"""Centralized configuration settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class ServerSettings:
    """Settings for the resource server."""
    host: str = "0.0.0.0"
    port: int = 20120
    # Fixed at build time, never discovered from the user-data directory
    locales: tuple[str, ...] = ("en", "zh-cn")
    translations_file: str = "locales.json"
    # Catalog URLs end with ".json"; the locale is the segment minus this many chars
    locale_suffix_length: int = 5
    startup_timeout: float = 10.0  # seconds
    index_workers: int = 1


@dataclass
class CORSSettings:
    """Cross-origin headers added to every response."""
    allow_origin: str = "*"
    allow_headers: tuple[str, ...] = (
        "Origin",
        "X-Requested-With",
        "Content-Type",
        "Accept",
    )


@dataclass
class Settings:
    """Main application settings container."""
    server: ServerSettings = field(default_factory=ServerSettings)
    cors: CORSSettings = field(default_factory=CORSSettings)

    debug: bool = False

    def __post_init__(self):
        """Load settings from environment variables."""
        self.debug = os.environ.get("RESOURCE_SERVER_DEBUG", "").lower() in ("true", "1", "yes")

        if host := os.environ.get("RESOURCE_SERVER_HOST"):
            self.server.host = host
        if port := os.environ.get("RESOURCE_SERVER_PORT"):
            self.server.port = int(port)
        if workers := os.environ.get("RESOURCE_SERVER_INDEX_WORKERS"):
            self.server.index_workers = int(workers)


# Global settings instance
settings = Settings()
