"""Demo API application: an in-memory user list, server time and an index page."""

from __future__ import annotations

import re
import signal
import sys
import time
from dataclasses import dataclass

from miniweb.http_api import ApiHandler
from miniweb.jsonlite import JsonBuilder, get_value, parse_simple
from miniweb.logger import Logger, LogLevel, close_logger, init_logger
from miniweb.router import HttpMethod, Request, Response, Router
from miniweb.server import Server
from miniweb.static_server import parse_port

LOG_FILE = "server.log"
MAX_USERS = 100
MAX_BODY_PAIRS = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_ENDPOINTS = (
    ("GET /api/time", "Get current server time", ""),
    ("GET /api/users", "Get all users", ""),
    ("GET /api/users/:id", "Get specific user", ""),
    (
        "POST /api/users",
        "Create new user",
        'Body: <code>{"name": "John", "email": "john@example.com"}</code>',
    ),
)

_STYLE = (
    "body { font-family: Arial; margin: 40px; }\n"
    ".endpoint { background: #f0f0f0; padding: 10px; margin: 10px 0; border-radius: 5px; }\n"
    "code { background: #e0e0e0; padding: 2px 5px; }\n"
    "#time-display { background: #333; color: #0f0; padding: 10px; margin: 20px 0;"
    " font-family: monospace; font-size: 18px; border-radius: 5px; }\n"
    "#api-result { margin-top: 20px; padding: 10px; background: #f5f5f5;"
    " border-radius: 5px; display: none; }"
)

_SCRIPT = """const byId = id => document.getElementById(id);
const getJson = url => fetch(url).then(r => r.json());
function showResult(data) {
  byId('api-result').style.display = 'block';
  byId('result-content').textContent = JSON.stringify(data, null, 2);
}
function updateTime() {
  getJson('/api/time')
    .then(data => { byId('time-display').textContent = 'Server Time: ' + data.time; })
    .catch(() => { byId('time-display').textContent = 'Error loading time'; });
}
function fetchTime() {
  getJson('/api/time').then(showResult).catch(err => showResult({error: err.message}));
}
function fetchUsers() {
  getJson('/api/users').then(showResult).catch(err => showResult({error: err.message}));
}
updateTime();
setInterval(updateTime, 1000);"""


def _endpoint_html(route: str, summary: str, extra: str) -> str:
    tail = f"<br>\n{extra}" if extra else ""
    return f"<div class='endpoint'><strong>{route}</strong> - {summary}{tail}</div>"


def _render_home_page() -> str:
    endpoints = "\n".join(_endpoint_html(*entry) for entry in _ENDPOINTS)
    parts = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        "<title>C Web Framework Demo</title>",
        f"<style>\n{_STYLE}\n</style>",
        "</head>",
        "<body>",
        "<h1>C Web Framework Demo</h1>",
        "<div id='time-display'>Loading server time...</div>",
        "<h2>Available API Endpoints:</h2>",
        endpoints,
        "<h2>Test API:</h2>",
        "<button onclick='fetchTime()'>Get Current Time</button>",
        "<button onclick='fetchUsers()'>Get All Users</button>",
        "<div id='api-result'><h3>API Response:</h3><pre id='result-content'></pre></div>",
        f"<script>\n{_SCRIPT}\n</script>",
        "</body>",
        "</html>",
    ]
    return "\n".join(parts)


HOME_PAGE = _render_home_page()


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


@dataclass
class User:
    """One entry of the in-memory user store."""

    id: int
    name: str
    email: str

    def to_json(self) -> str:
        builder = JsonBuilder()
        builder.add_number("id", self.id)
        builder.add_string("name", self.name)
        builder.add_string("email", self.email)
        return builder.to_string()


class ExampleApp:
    """Route handlers for the demo API, backed by an in-memory user list."""

    def __init__(self) -> None:
        self.users: list[User] = [
            User(1, "Alice", "alice@example.com"),
            User(2, "Bob", "bob@example.com"),
        ]

    def get_users(self, req: Request, res: Response) -> None:
        """GET /api/users: list every user."""
        members = ",".join(
            f'{{"id":{user.id},"name":"{user.name}","email":"{user.email}"}}'
            for user in self.users
        )
        res.set_json(200, f'{{"users":[{members}]}}')

    def get_user(self, req: Request, res: Response) -> None:
        """GET /api/users/:id: return one user by id."""
        id_str = req.get_param("id")
        if id_str is None:
            res.set_json(400, '{"error":"Missing user ID"}')
            return
        user_id = _to_int(id_str)
        user = next((user for user in self.users if user.id == user_id), None)
        if user is None:
            res.set_json(404, '{"error":"User not found"}')
            return
        res.set_json(200, user.to_json())

    def create_user(self, req: Request, res: Response) -> None:
        """POST /api/users: add a user from a flat JSON body."""
        if not req.body:
            res.set_json(400, '{"error":"Missing request body"}')
            return
        pairs = parse_simple(req.body, MAX_BODY_PAIRS)
        name = get_value(pairs, "name")
        email = get_value(pairs, "email")
        if name is None or email is None:
            res.set_json(400, '{"error":"Missing name or email"}')
            return
        if len(self.users) >= MAX_USERS:
            res.set_json(500, '{"error":"User store is full"}')
            return
        user = User(len(self.users) + 1, name, email)
        self.users.append(user)
        res.set_json(201, user.to_json())

    def get_time(self, req: Request, res: Response) -> None:
        """GET /api/time: local server time and Unix timestamp."""
        now = time.time()
        builder = JsonBuilder()
        builder.add_string("time", time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(now)))
        builder.add_number("timestamp", int(now))
        res.set_json(200, builder.to_string())

    def home_page(self, req: Request, res: Response) -> None:
        """GET /: the HTML documentation page."""
        res.set(200, "text/html", HOME_PAGE)

    def build_router(self, logger: Logger | None = None) -> Router:
        """Return a router with every demo route registered."""
        router = Router(logger)
        router.add(HttpMethod.GET, "/", self.home_page)
        router.add(HttpMethod.GET, "/api/time", self.get_time)
        router.add(HttpMethod.GET, "/api/users", self.get_users)
        router.add(HttpMethod.GET, "/api/users/:id", self.get_user)
        router.add(HttpMethod.POST, "/api/users", self.create_user)
        return router


def _interrupt(signum, frame) -> None:
    raise KeyboardInterrupt


def main(argv: list[str] | None = None) -> int:
    """Run the demo API server until interrupted; return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    port = parse_port(argv)

    previous_term = signal.signal(signal.SIGTERM, _interrupt)
    logger = init_logger(LOG_FILE)
    app = ExampleApp()
    router = app.build_router(logger)
    server = Server(ApiHandler(router, logger), port, logger)
    try:
        try:
            server.start()
        except OSError:
            logger.log(LogLevel.ERROR, "Failed to start server")
            return 1

        logger.log(LogLevel.INFO, f"API Server started on port {port}")
        print(f"API Server running on http://localhost:{port}")
        print(f"Visit http://localhost:{port} for API documentation")
        print("Press Ctrl+C to stop")

        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.log(LogLevel.INFO, "Shutting down server...")
        return 0
    finally:
        server.close()
        router.clear()
        close_logger()
        signal.signal(signal.SIGTERM, previous_term)


if __name__ == "__main__":
    sys.exit(main())