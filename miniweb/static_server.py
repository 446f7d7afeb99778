"""Command that runs the static file server."""

from __future__ import annotations

import re
import signal
import sys

from miniweb.http_static import StaticHandler
from miniweb.logger import LogLevel, close_logger, init_logger
from miniweb.server import DEFAULT_PORT, Server

LOG_FILE = "server.log"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(text: str) -> int:
    """Read a leading integer the lenient way; text without one reads as 0."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_port(argv: list[str]) -> int:
    """Return the port named by the first argument, or the default port."""
    if not argv:
        return DEFAULT_PORT
    return _to_int(argv[0])


def _interrupt(signum, frame) -> None:
    raise KeyboardInterrupt


def main(argv: list[str] | None = None) -> int:
    """Run the static server until interrupted; return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    port = parse_port(argv)

    previous_term = signal.signal(signal.SIGTERM, _interrupt)
    logger = init_logger(LOG_FILE)
    server = Server(StaticHandler(logger=logger), port, logger)
    try:
        try:
            server.start()
        except OSError:
            logger.log(LogLevel.ERROR, "Failed to start server")
            return 1

        logger.log(LogLevel.INFO, f"Server started on port {port}")
        print(f"Web server running on http://localhost:{port}")
        print("Press Ctrl+C to stop")

        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.log(LogLevel.INFO, "Shutting down server...")
        return 0
    finally:
        server.close()
        close_logger()
        signal.signal(signal.SIGTERM, previous_term)


if __name__ == "__main__":
    sys.exit(main())