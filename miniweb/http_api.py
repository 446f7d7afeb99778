"""HTTP front end for the router: request parsing, CORS and response encoding."""

from __future__ import annotations

import socket
from email.utils import formatdate

from miniweb.logger import Logger, LogLevel, log_message
from miniweb.router import Request, Response, Router, parse_method
from miniweb.server import BUFFER_SIZE

SERVER_NAME = "Simple C Server"

STATUS_TEXT = {
    200: "OK",
    201: "Created",
    400: "Bad Request",
    404: "Not Found",
    500: "Internal Server Error",
}

CORS_RESPONSE = (
    b"HTTP/1.1 200 OK\r\n"
    b"Access-Control-Allow-Origin: *\r\n"
    b"Access-Control-Allow-Methods: GET, POST, PUT, DELETE, OPTIONS\r\n"
    b"Access-Control-Allow-Headers: Content-Type\r\n"
    b"Content-Length: 0\r\n"
    b"\r\n"
)


def format_response(res: Response) -> bytes:
    """Encode ``res`` as a complete HTTP/1.1 message with CORS headers."""
    status_text = STATUS_TEXT.get(res.status_code, "OK")
    body = res.body.encode("utf-8")
    header = (
        f"HTTP/1.1 {res.status_code} {status_text}\r\n"
        f"Date: {formatdate(usegmt=True)}\r\n"
        f"Server: {SERVER_NAME}\r\n"
        f"Content-Type: {res.content_type}\r\n"
        f"Content-Length: {len(body)}\r\n"
        "Access-Control-Allow-Origin: *\r\n"
        "Access-Control-Allow-Methods: GET, POST, PUT, DELETE, OPTIONS\r\n"
        "Access-Control-Allow-Headers: Content-Type\r\n"
        "Connection: close\r\n"
        f"{res.headers}"
        "\r\n"
    )
    return header.encode("utf-8") + body


class ApiHandler:
    """Turns raw requests into router calls and encodes the answers."""

    def __init__(self, router: Router, logger: Logger | None = None) -> None:
        self._router = router
        self._logger = logger

    def _log(self, level: LogLevel, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message)
        else:
            log_message(level, message)

    def handle_request(self, data: bytes) -> bytes | None:
        """Return the response bytes for one request, or ``None`` if it cannot be parsed."""
        text = data.decode("utf-8", errors="replace")
        tokens = text.split(maxsplit=3)[:3]
        if len(tokens) < 3:
            return None
        method, target, _version = tokens

        if method == "OPTIONS":
            return CORS_RESPONSE

        self._log(LogLevel.INFO, f"{method} {target}")

        req = Request(method=parse_method(method), headers=text)
        path, question, query = target.partition("?")
        if question:
            req.query_string = query
            req.parse_query(query)
        req.path = path

        separator = text.find("\r\n\r\n")
        if separator >= 0:
            req.body = text[separator + 4 :]

        res = Response()
        self._router.handle(req, res)
        return format_response(res)

    def __call__(self, client: socket.socket) -> None:
        data = client.recv(BUFFER_SIZE - 1)
        if not data:
            return
        response = self.handle_request(data)
        if response is not None:
            client.sendall(response)