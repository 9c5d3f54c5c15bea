"""Tests for tandem.routing.mux: method + path Router."""

import pytest

from tandem.errors import NotFound
from tandem.http.request import Request
from tandem.http.response import Response, json_response
from tandem.routing.mux import Router
from tandem.server.sender import send_response
from tandem.testing import TestClient


def _return_ok(request: Request) -> Response:
    return Response("", status=200)


class TestEndpoints:
    async def test_registers_handler_for_path_and_method(self) -> None:
        router = Router()
        router.handle_endpoint("/test314", "POST", _return_ok)

        response = await TestClient(router).post("/test314")
        assert response.status == 200

    async def test_wrong_method(self) -> None:
        router = Router()
        router.handle_endpoint("/test314", "POST", _return_ok)

        response = await TestClient(router).get("/test314")
        assert response.status == 405
        assert response.header("allow") == "POST"

    async def test_wrong_method_head_has_no_body(self) -> None:
        router = Router()
        router.handle_endpoint("/items", "POST", _return_ok)

        response = await TestClient(router).head("/items")
        assert response.status == 405
        assert response.header("allow") == "POST"
        assert response.body == b""

    async def test_unknown_path(self) -> None:
        router = Router()
        router.handle_endpoint("/test314", "GET", _return_ok)

        response = await TestClient(router).get("/outside")
        assert response.status == 404
        assert response.text == "404 page not found\n"

    async def test_async_handler(self) -> None:
        router = Router()

        async def create(request: Request) -> Response:
            data = await request.json()
            return json_response({"created": data["name"]}, status=201)

        router.handle_endpoint("/users", "POST", create)
        response = await TestClient(router).post("/users", json={"name": "ada"})

        assert response.status == 201
        assert response.json() == {"created": "ada"}

    async def test_string_result_becomes_html(self) -> None:
        router = Router()
        router.handle_endpoint("/", "GET", lambda request: "<h1>hi</h1>")

        response = await TestClient(router).get("/")
        assert response.text == "<h1>hi</h1>"
        assert response.content_type == "text/html; charset=utf-8"

    async def test_bad_return_type(self) -> None:
        router = Router()
        router.handle_endpoint("/", "GET", lambda request: 42)

        with pytest.raises(TypeError, match="int"):
            await TestClient(router).get("/")

    async def test_http_error_becomes_response(self) -> None:
        router = Router()

        def missing(request: Request) -> Response:
            raise NotFound("no such user")

        router.handle_endpoint("/users/{id}", "GET", missing)
        response = await TestClient(router).get("/users/7")
        assert response.status == 404
        assert response.text == "no such user\n"

    async def test_route_decorator(self) -> None:
        router = Router()

        @router.route("/ping", methods=("GET", "POST"))
        def ping(request: Request) -> Response:
            return Response("pong")

        client = TestClient(router)
        assert (await client.get("/ping")).text == "pong"
        assert (await client.post("/ping")).text == "pong"


class TestParams:
    async def test_path_params(self) -> None:
        router = Router()
        seen: list[dict[str, str]] = []

        def show(request: Request) -> Response:
            seen.append(router.path_params(request))
            return Response("")

        router.handle_endpoint("/users/{id:int}/posts/{slug}", "GET", show)
        await TestClient(router).get("/users/42/posts/hello")

        assert seen == [{"id": "42", "slug": "hello"}]

    async def test_query_string(self) -> None:
        router = Router()
        router.handle_endpoint("/search", "GET", lambda request: Response(request.query.get("q", "")))

        response = await TestClient(router).get("/search?q=tandem")
        assert response.text == "tandem"


class TestPrefixes:
    async def test_handles_sub_paths(self) -> None:
        router = Router()
        seen: list[str] = []

        async def app(scope, receive, send) -> None:
            seen.append(scope["path"])
            await send_response(Response(""), send)

        router.handle_prefix("/prefix314", app)
        client = TestClient(router)

        response = await client.get("/prefix314/subpath/banana")
        assert response.status == 200
        assert seen == ["/prefix314/subpath/banana"]

        response = await client.get("/outside")
        assert response.status == 404

    async def test_endpoints_win_over_prefixes(self) -> None:
        router = Router()

        async def app(scope, receive, send) -> None:
            await send_response(Response("prefix"), send)

        router.handle_prefix("/", app)
        router.handle_endpoint("/exact", "GET", lambda request: Response("exact"))
        client = TestClient(router)

        assert (await client.get("/exact")).text == "exact"
        assert (await client.get("/other")).text == "prefix"

    async def test_first_registered_prefix_wins(self) -> None:
        router = Router()

        def responder(body: str):
            async def app(scope, receive, send) -> None:
                await send_response(Response(body), send)

            return app

        router.handle_prefix("/static", responder("first"))
        router.handle_prefix("/", responder("second"))

        assert (await TestClient(router).get("/static/app.js")).text == "first"
