import socket

import pytest

from miniweb.static_server import main, parse_port


@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        ([], 8080),
        (["9000"], 9000),
        (["9001", "extra"], 9001),
        (["123abc"], 123),
        (["abc"], 0),
    ],
)
def test_parse_port(argv, expected):
    assert parse_port(argv) == expected


def test_main_fails_when_port_is_taken(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    blocker = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        blocker.bind(("", 0))
        blocker.listen(1)
        port = blocker.getsockname()[1]
        assert main([str(port)]) == 1
    finally:
        blocker.close()
    log_text = (tmp_path / "server.log").read_text(encoding="utf-8")
    assert "Failed to start server" in log_text
    assert "[ERROR]" in log_text