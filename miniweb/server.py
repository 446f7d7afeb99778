"""A threaded TCP server that hands each accepted connection to a handler."""

from __future__ import annotations

import socket
import threading
from typing import Callable

from miniweb.logger import Logger, LogLevel, log_message

DEFAULT_PORT = 8080
BUFFER_SIZE = 4096
MAX_CLIENTS = 100

_POLL_INTERVAL = 0.2

ClientHandler = Callable[[socket.socket], None]


class Server:
    """Listens on all interfaces and serves every connection in its own thread.

    The handler receives the connected client socket; the server closes the
    socket once the handler returns.
    """

    def __init__(
        self,
        handler: ClientHandler,
        port: int = DEFAULT_PORT,
        logger: Logger | None = None,
    ) -> None:
        self._handler = handler
        self._requested_port = port
        self._logger = logger
        self._sock: socket.socket | None = None
        self._stopped = threading.Event()

    def _log(self, level: LogLevel, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message)
        else:
            log_message(level, message)

    @property
    def port(self) -> int:
        """The port actually bound, or the requested one before ``start``."""
        if self._sock is None:
            return self._requested_port
        return self._sock.getsockname()[1]

    def start(self) -> None:
        """Create, bind and listen on the server socket; raises ``OSError`` on failure."""
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError:
            self._log(LogLevel.ERROR, "Failed to create socket")
            raise
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        except OSError:
            self._log(LogLevel.WARNING, "Failed to set socket options")
        try:
            sock.bind(("", self._requested_port))
        except OSError:
            self._log(LogLevel.ERROR, "Failed to bind socket")
            sock.close()
            raise
        try:
            sock.listen(MAX_CLIENTS)
        except OSError:
            self._log(LogLevel.ERROR, "Failed to listen on socket")
            sock.close()
            raise
        self._stopped.clear()
        self._sock = sock

    def _serve_client(self, client: socket.socket) -> None:
        with client:
            try:
                self._handler(client)
            except OSError as error:
                self._log(LogLevel.ERROR, f"Connection error: {error}")

    def serve_forever(self) -> None:
        """Accept connections until ``close`` is called."""
        if self._sock is None:
            raise RuntimeError("Server has not been started")
        sock = self._sock
        sock.settimeout(_POLL_INTERVAL)
        while not self._stopped.is_set():
            try:
                client, address = sock.accept()
            except TimeoutError:
                continue
            except OSError:
                if self._stopped.is_set():
                    break
                self._log(LogLevel.ERROR, "Failed to accept connection")
                continue
            client.settimeout(None)
            self._log(LogLevel.INFO, f"New connection from {address[0]}")
            try:
                thread = threading.Thread(
                    target=self._serve_client, args=(client,), daemon=True
                )
                thread.start()
            except RuntimeError:
                self._log(LogLevel.ERROR, "Failed to create thread")
                client.close()

    def close(self) -> None:
        """Stop serving and close the listening socket."""
        self._stopped.set()
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> Server:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()