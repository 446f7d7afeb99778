import json
import re
import time

import pytest

from miniweb.example_app import HOME_PAGE, MAX_USERS, ExampleApp, User
from miniweb.http_api import ApiHandler
from miniweb.logger import Logger
from miniweb.router import HttpMethod, Request, Response


@pytest.fixture
def app():
    return ExampleApp()


@pytest.fixture
def router(app):
    return app.build_router(Logger())


def call(handler, **request_fields):
    res = Response()
    handler(Request(**request_fields), res)
    return res


def test_initial_users(app):
    res = call(app.get_users)
    assert res.status_code == 200
    assert res.content_type == "application/json"
    data = json.loads(res.body)
    assert [u["name"] for u in data["users"]] == ["Alice", "Bob"]
    assert [u["id"] for u in data["users"]] == [1, 2]
    assert data["users"][0]["email"] == "alice@example.com"


def test_get_user_found(app):
    res = call(app.get_user, params=[("id", "2")])
    assert res.status_code == 200
    assert json.loads(res.body) == {"id": 2, "name": "Bob", "email": "bob@example.com"}


def test_get_user_missing_id(app):
    res = call(app.get_user)
    assert res.status_code == 400
    assert res.body == '{"error":"Missing user ID"}'


@pytest.mark.parametrize("user_id", ["99", "abc", "0"])
def test_get_user_not_found(app, user_id):
    res = call(app.get_user, params=[("id", user_id)])
    assert res.status_code == 404
    assert res.body == '{"error":"User not found"}'


def test_create_user_empty_body(app):
    res = call(app.create_user, method=HttpMethod.POST, body="")
    assert res.status_code == 400
    assert res.body == '{"error":"Missing request body"}'


def test_create_user_missing_email(app):
    res = call(app.create_user, method=HttpMethod.POST, body='{"name": "Carol"}')
    assert res.status_code == 400
    assert res.body == '{"error":"Missing name or email"}'
    assert len(app.users) == 2


def test_create_user_then_list(app):
    body = '{"name": "Carol", "email": "carol@example.com"}'
    res = call(app.create_user, method=HttpMethod.POST, body=body)
    assert res.status_code == 201
    created = json.loads(res.body)
    assert created["name"] == "Carol"
    assert created["email"] == "carol@example.com"
    assert created["id"] == len(app.users)
    listed = json.loads(call(app.get_users).body)["users"]
    assert listed[-1] == created
    fetched = call(app.get_user, params=[("id", str(created["id"]))])
    assert json.loads(fetched.body) == created


def test_create_user_when_full(app):
    app.users = [User(i + 1, "n", "e@example.com") for i in range(MAX_USERS)]
    res = call(app.create_user, body='{"name":"x","email":"x@example.com"}')
    assert res.status_code == 500
    assert len(app.users) == MAX_USERS


def test_get_time(app):
    before = int(time.time())
    res = call(app.get_time)
    after = int(time.time())
    data = json.loads(res.body)
    assert res.status_code == 200
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", data["time"])
    assert before <= data["timestamp"] <= after


def test_home_page(app):
    res = call(app.home_page)
    assert res.status_code == 200
    assert res.content_type == "text/html"
    assert res.body == HOME_PAGE
    assert res.body.startswith("<!DOCTYPE html>")


def test_router_dispatches_user_by_path(router):
    res = Response()
    router.handle(Request(method=HttpMethod.GET, path="/api/users/1"), res)
    assert json.loads(res.body)["name"] == "Alice"


def test_router_unknown_path(router):
    res = Response()
    router.handle(Request(method=HttpMethod.GET, path="/nope"), res)
    assert res.status_code == 404
    assert res.body == '{"error":"Not Found"}'


def test_router_has_all_routes(router):
    assert len(router) == 5


def test_full_request_through_api_handler(app, router):
    handler = ApiHandler(router, Logger())
    raw = (
        b"POST /api/users HTTP/1.1\r\nHost: localhost\r\n"
        b"Content-Type: application/json\r\n\r\n"
        b'{"name":"Dave","email":"dave@example.com"}'
    )
    reply = handler.handle_request(raw)
    head, _, body = reply.partition(b"\r\n\r\n")
    assert head.startswith(b"HTTP/1.1 201 Created\r\n")
    assert json.loads(body)["email"] == "dave@example.com"
    assert app.users[-1].name == "Dave"