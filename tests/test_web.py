import json

import pytest

from hrportal.web import (
    VERSION,
    Response,
    Router,
    UserController,
    build_router,
    make_wsgi_app,
)


def test_show_returns_greeting():
    response = UserController().show({"id": "1"})
    assert response.status == 200
    assert json.loads(response.body) == {"Hello": "Goravel"}
    assert response.content_type.startswith("application/json")


def test_dispatch_user_route():
    response = build_router().dispatch("GET", "/users/7")
    assert response.status == 200
    assert json.loads(response.body) == {"Hello": "Goravel"}


def test_dispatch_unknown_path():
    assert build_router().dispatch("GET", "/nowhere").status == 404


def test_dispatch_wrong_method():
    assert build_router().dispatch("POST", "/users/7").status == 404


def test_empty_parameter_does_not_match():
    assert build_router().dispatch("GET", "/users/").status in (301, 404)
    assert build_router().dispatch("GET", "/users//").status == 404


def test_trailing_slash_redirect():
    response = build_router().dispatch("GET", "/users/7/")
    assert response.status == 301
    assert response.headers["Location"] == "/users/7"


def test_params_are_passed():
    captured = {}

    def handler(params):
        captured.update(params)
        return Response.text("ok")

    router = Router()
    router.get("/items/{item}/parts/{part}", handler)
    response = router.dispatch("get", "/items/abc/parts/x.y")
    assert response.body == b"ok"
    assert captured == {"item": "abc", "part": "x.y"}


def test_literal_dots_are_not_wildcards():
    router = Router()
    router.get("/a.b", lambda params: Response.text("ok"))
    assert router.dispatch("GET", "/axb").status == 404
    assert router.dispatch("GET", "/a.b").status == 200


@pytest.mark.parametrize("pattern", ["no-slash", "/x/{}", "/x/{id}/{id}", "/x/{1a}"])
def test_invalid_patterns(pattern):
    with pytest.raises(ValueError):
        Router().get(pattern, lambda params: Response())


def test_welcome_page_shows_version():
    response = build_router().dispatch("GET", "/")
    assert response.status == 200
    assert VERSION in response.body.decode()
    assert response.content_type.startswith("text/html")


def test_json_round_trip():
    data = {"name": "Super Admin", "ids": [1, 2]}
    assert json.loads(Response.json(data).body) == data


def test_wsgi_app():
    app = make_wsgi_app(build_router())
    seen = {}

    def start_response(status, headers):
        seen["status"] = status
        seen["headers"] = dict(headers)

    body = b"".join(app({"REQUEST_METHOD": "GET", "PATH_INFO": "/users/1"}, start_response))
    assert seen["status"] == "200 OK"
    assert json.loads(body) == {"Hello": "Goravel"}
    assert seen["headers"]["Content-Length"] == str(len(body))


def test_wsgi_app_not_found():
    app = make_wsgi_app()
    seen = {}

    def start_response(status, headers):
        seen["status"] = status
        seen["headers"] = dict(headers)

    body = b"".join(app({"REQUEST_METHOD": "DELETE", "PATH_INFO": "/users/1"}, start_response))
    assert seen["status"] == "404 Not Found"
    assert body == build_router().dispatch("DELETE", "/users/1").body
    assert seen["headers"]["Content-Length"] == str(len(body))