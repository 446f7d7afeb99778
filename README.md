# miniweb

A small HTTP server with no third-party dependencies, built on plain sockets
and threads. It comes in two flavours:

* a **static file server** that serves files from a `www` directory, and
* a **tiny API framework** with a router, path parameters, query strings,
  a minimal JSON builder and an example application.

Each connection is handled in its own thread, responses are sent with
`Connection: close`, and every request is logged as
`[YYYY-MM-DD HH:MM:SS] [LEVEL] message` both to the console and to
`server.log` in the current directory.

## Installation

```
pip install .
```

## Static file server

```
miniweb-static [port]
```

The default port is 8080. Files are served from `www/` under the current
directory; a request for `/` returns `www/index.html`. Only `GET` is
accepted (other methods get `405 Method Not Allowed`), paths containing `..`
are refused with `403 Forbidden`, a request line that cannot be parsed gets
`400 Bad Request`, and missing files produce a small `404 Not Found` HTML
page. The content type is chosen from the file extension (`.html`, `.htm`,
`.css`, `.js`, `.json`, `.png`, `.jpg`, `.jpeg`, `.gif`, `.txt`; anything
else is `application/octet-stream`).

The handler is `miniweb.http_static.StaticHandler`; pass `root=` to serve a
directory other than `./www`.

## Example API server

```
miniweb-api [port]
```

Also listens on 8080 by default. Every response carries CORS headers, and
preflight `OPTIONS` requests are answered with `200 OK`. It exposes:

| Method | Path              | Description                               |
|--------|-------------------|-------------------------------------------|
| GET    | `/`               | HTML page describing the API              |
| GET    | `/api/time`       | Local server time and Unix timestamp      |
| GET    | `/api/users`      | All users                                 |
| GET    | `/api/users/:id`  | A single user, or 404                     |
| POST   | `/api/users`      | Create a user from `{"name": ..., "email": ...}` (201) |

Two users, Alice and Bob, exist at start-up. A POST body lacking `name` or
`email` gets `400`; once 100 users exist, further creations get `500`.
For example:

```
curl -X POST -d '{"name": "Carol", "email": "carol@example.com"}' \
     http://localhost:8080/api/users
```

## Building your own API

```python
from miniweb.logger import Logger
from miniweb.router import HttpMethod, Router
from miniweb.jsonlite import JsonBuilder
from miniweb.http_api import ApiHandler
from miniweb.server import Server


def hello(req, res):
    json = JsonBuilder()
    json.add_string("greeting", "hello")
    json.add_string("name", req.get_param("name") or "world")
    res.set_json(200, json.to_string())


with Logger("server.log") as logger:
    router = Router(logger)
    router.add(HttpMethod.GET, "/hello/:name", hello)
    with Server(ApiHandler(router, logger), 8080, logger) as server:
        server.start()
        server.serve_forever()
```

Routes are tried in the order they were added; the first one whose method
and pattern match is run. Patterns match segment by segment, a trailing
slash being ignored; a segment starting with `:` captures the corresponding
part of the path, readable with `Request.get_param`. Query string parameters
are read the same way, but only on routes whose pattern equals the path
exactly: matching a pattern with parameters replaces them with the captured
path parameters. Unmatched requests get a `404` JSON response
`{"error":"Not Found"}`. A router holds at most 100 routes; adding more
raises `RuntimeError`.

`miniweb.jsonlite` offers `JsonBuilder` (`add_string`, `add_number`,
`add_bool`, `start_array`, `end_array`, `to_string`) and `parse_simple`
with `get_value` for flat bodies. Keys and strings are written without
escaping, and `parse_simple` splits at every comma, so values holding commas
or nested objects are not understood.

## What it does not do

* Each request is read with a single `recv` of at most 4095 bytes; larger
  requests or bodies arriving in several packets are not reassembled.
* There is no keep-alive, chunked encoding or TLS.
* The example application keeps its users in memory only; they are lost when
  the server stops.

## Running the tests

```
pip install ".[test]"
pytest
```