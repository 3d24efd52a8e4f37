"""Resource server lifecycle: construct once, then listen."""
from __future__ import annotations

import logging
import socket
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import uvicorn
from fastapi import FastAPI

from app.main import create_app
from src.catalog.assemblers import default_assemblers
from src.catalog.base import BaseAssembler
from src.catalog.index import CatalogIndex, build_index
from src.config.settings import Settings, settings as default_settings
from src.errors import ConfigurationError
from src.i18n.translator import TranslationTable, load_translations

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListenResult:
    """Outcome of ResourceServer.listen()."""

    status: Literal["ready", "error"]
    port: int
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ready"


class ResourceServer:
    """Serves localized catalogs and user-data assets over HTTP.

    Construction loads translations and builds the catalog index; it raises
    ConfigurationError or AssemblyError instead of returning a server with
    an incomplete index. Nothing is bound until listen() is called.

    Usage:
        server = ResourceServer("/path/to/user-data")
        result = server.listen()
        if result.ok:
            server.wait()
    """

    def __init__(
        self,
        user_data_path: str | Path,
        settings: Settings | None = None,
        assemblers: Sequence[BaseAssembler] | None = None,
    ):
        self.settings = settings or default_settings
        self.user_data_path = Path(user_data_path)
        if not self.user_data_path.is_dir():
            raise ConfigurationError(f"User data directory not found: {self.user_data_path}")

        self.assemblers = list(assemblers) if assemblers is not None else default_assemblers()
        self.translations: TranslationTable = load_translations(
            self.user_data_path / self.settings.server.translations_file,
            self.settings.server.locales,
        )
        self.index: CatalogIndex = build_index(
            self.user_data_path,
            self.assemblers,
            self.settings.server.locales,
            self.translations,
            max_workers=self.settings.server.index_workers,
        )

        self.app: FastAPI = create_app(self.index, self.user_data_path, self.settings)

        self.port = self.settings.server.port
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None
        self._socket: socket.socket | None = None

    @property
    def is_listening(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def listen(self, port: int | None = None, host: str | None = None) -> ListenResult:
        """Bind the port and start serving in a background thread.

        Args:
            port: TCP port; defaults to the configured port, 0 picks a free one
            host: Interface to bind; defaults to the configured host

        Returns:
            ListenResult with status "ready", or "error" when the port could
            not be bound. Binding is not retried.
        """
        if self.is_listening:
            raise RuntimeError(f"Already listening on port {self.port}")

        if port is not None:
            self.port = port
        host = host or self.settings.server.host

        try:
            sock = self._bind(host, self.port)
        except OSError as e:
            info = f"Error while trying to listen port {self.port}: {e}"
            logger.error(info)
            return ListenResult(status="error", port=self.port, error=info)

        self.port = sock.getsockname()[1]
        config = uvicorn.Config(
            self.app,
            log_config=None,
            log_level="debug" if self.settings.debug else "info",
            lifespan="off",
        )
        server = uvicorn.Server(config)
        thread = threading.Thread(
            target=server.run,
            kwargs={"sockets": [sock]},
            name=f"resource-server-{self.port}",
            daemon=True,
        )
        self._server, self._thread, self._socket = server, thread, sock
        thread.start()

        deadline = time.monotonic() + self.settings.server.startup_timeout
        while not server.started:
            if not thread.is_alive() or time.monotonic() > deadline:
                self.close()
                info = f"Error while trying to listen port {self.port}: server did not start"
                logger.error(info)
                return ListenResult(status="error", port=self.port, error=info)
            time.sleep(0.01)

        logger.info("Resource server listening: http://%s:%d", host, self.port)
        return ListenResult(status="ready", port=self.port)

    def wait(self) -> None:
        """Block until the server thread exits."""
        if self._thread is not None:
            self._thread.join()

    def close(self) -> None:
        """Stop serving and release the port."""
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=self.settings.server.startup_timeout)
        if self._socket is not None:
            self._socket.close()
        self._server = self._thread = self._socket = None

    @staticmethod
    def _bind(host: str, port: int) -> socket.socket:
        family = socket.AF_INET6 if ":" in host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
            sock.listen(128)
        except OSError:
            sock.close()
            raise
        return sock
