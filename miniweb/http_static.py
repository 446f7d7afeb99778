"""HTTP handler that serves files from a document root for GET requests."""

from __future__ import annotations

import os
import socket
from email.utils import formatdate

from miniweb.file_utils import get_content_type, read_file
from miniweb.logger import Logger, LogLevel, log_message
from miniweb.server import BUFFER_SIZE

SERVER_NAME = "Simple C Server"
NOT_FOUND_PAGE = b"<html><body><h1>404 Not Found</h1></body></html>"


def format_response(status: str, content_type: str, body: bytes) -> bytes:
    """Encode a complete HTTP/1.1 message; ``status`` is e.g. ``"200 OK"``."""
    header = (
        f"HTTP/1.1 {status}\r\n"
        f"Date: {formatdate(usegmt=True)}\r\n"
        f"Server: {SERVER_NAME}\r\n"
        f"Content-Type: {content_type}\r\n"
        f"Content-Length: {len(body)}\r\n"
        "Connection: close\r\n"
        "\r\n"
    )
    return header.encode("utf-8") + body


class StaticHandler:
    """Serves files below ``root``; by default the ``www`` folder of the working directory."""

    def __init__(self, root: str | None = None, logger: Logger | None = None) -> None:
        self._root = root
        self._logger = logger

    def _log(self, level: LogLevel, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message)
        else:
            log_message(level, message)

    @property
    def root(self) -> str:
        if self._root is not None:
            return self._root
        return os.path.join(os.getcwd(), "www")

    def handle_request(self, data: bytes) -> bytes:
        """Return the response bytes for one raw request."""
        text = data.decode("utf-8", errors="replace")
        tokens = text.split(maxsplit=3)[:3]
        if len(tokens) < 3:
            return format_response("400 Bad Request", "text/plain", b"Bad Request")
        method, path, _version = tokens

        self._log(LogLevel.INFO, f"{method} {path}")

        if method != "GET":
            return format_response(
                "405 Method Not Allowed", "text/plain", b"Method Not Allowed"
            )
        if path == "/":
            path = "/index.html"
        if ".." in path:
            return format_response("403 Forbidden", "text/plain", b"Forbidden")

        full_path = f"{self.root}{path}"
        try:
            content = read_file(full_path)
        except OSError:
            self._log(LogLevel.WARNING, f"File not found: {full_path}")
            return format_response("404 Not Found", "text/html", NOT_FOUND_PAGE)
        return format_response("200 OK", get_content_type(path), content)

    def __call__(self, client: socket.socket) -> None:
        data = client.recv(BUFFER_SIZE - 1)
        if not data:
            return
        client.sendall(self.handle_request(data))