import socket

import pytest

from miniweb.http_static import NOT_FOUND_PAGE, StaticHandler, format_response
from miniweb.logger import Logger

INDEX = b"<html><body>index</body></html>"
STYLE = b"body { color: red; }"


def _split(raw):
    head, _, body = raw.partition(b"\r\n\r\n")
    lines = head.decode("utf-8").split("\r\n")
    headers = dict(line.split(": ", 1) for line in lines[1:])
    return lines[0], headers, body


@pytest.fixture
def handler(tmp_path):
    root = tmp_path / "www"
    root.mkdir()
    (root / "index.html").write_bytes(INDEX)
    (root / "style.css").write_bytes(STYLE)
    return StaticHandler(str(root), Logger())


def test_format_response_layout():
    status, headers, body = _split(format_response("200 OK", "text/plain", b"abc"))
    assert status == "HTTP/1.1 200 OK"
    assert headers["Content-Type"] == "text/plain"
    assert headers["Content-Length"] == str(len(b"abc"))
    assert headers["Connection"] == "close"
    assert body == b"abc"


def test_root_path_serves_index(handler):
    status, headers, body = _split(handler.handle_request(b"GET / HTTP/1.1\r\n\r\n"))
    assert status == "HTTP/1.1 200 OK"
    assert headers["Content-Type"] == "text/html; charset=utf-8"
    assert body == INDEX


def test_serves_file_with_its_content_type(handler):
    status, headers, body = _split(handler.handle_request(b"GET /style.css HTTP/1.1\r\n\r\n"))
    assert status == "HTTP/1.1 200 OK"
    assert headers["Content-Type"] == "text/css"
    assert body == STYLE


def test_missing_file_is_404(handler):
    status, headers, body = _split(handler.handle_request(b"GET /nope.html HTTP/1.1\r\n\r\n"))
    assert status == "HTTP/1.1 404 Not Found"
    assert headers["Content-Type"] == "text/html"
    assert body == NOT_FOUND_PAGE


def test_only_get_is_allowed(handler):
    status, _, body = _split(handler.handle_request(b"POST / HTTP/1.1\r\n\r\n"))
    assert status == "HTTP/1.1 405 Method Not Allowed"
    assert body == b"Method Not Allowed"


def test_path_traversal_is_forbidden(handler):
    status, _, body = _split(handler.handle_request(b"GET /../secret.txt HTTP/1.1\r\n\r\n"))
    assert status == "HTTP/1.1 403 Forbidden"
    assert body == b"Forbidden"


def test_malformed_request_is_400(handler):
    status, _, body = _split(handler.handle_request(b"GET /\r\n"))
    assert status == "HTTP/1.1 400 Bad Request"
    assert body == b"Bad Request"


def test_default_root_is_www_in_working_directory(tmp_path, monkeypatch):
    (tmp_path / "www").mkdir()
    (tmp_path / "www" / "index.html").write_bytes(INDEX)
    monkeypatch.chdir(tmp_path)
    _, _, body = _split(StaticHandler(logger=Logger()).handle_request(b"GET / HTTP/1.1\r\n\r\n"))
    assert body == INDEX


def test_call_over_socket(handler):
    server_side, client_side = socket.socketpair()
    with server_side, client_side:
        client_side.sendall(b"GET /style.css HTTP/1.1\r\n\r\n")
        handler(server_side)
        server_side.shutdown(socket.SHUT_WR)
        reply = client_side.recv(65536)
    _, _, body = _split(reply)
    assert body == STYLE