import io
import socket

import pytest

from helixkit.gateway.router import HandlerInput, HelixRouter
from helixkit.protocol.http import Request, Response


def _read_all(sock: socket.socket) -> bytes:
    sock.settimeout(2)
    chunks = []
    while True:
        chunk = sock.recv(1024)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def _success(_input, response):
    response.status = 200
    response.body = b"Success"
    response.headers["Content-Type"] = "text/plain"


def test_router_integration():
    router = HelixRouter()
    router.add_route("GET", "/test", _success)
    graph = object()

    client, server = socket.socketpair()
    with client, server:
        client.sendall(b"GET /test HTTP/1.1\r\nHost: localhost\r\n\r\n")
        with server.makefile("rb") as reader:
            request = Request.from_stream(reader)
        response = Response()
        router.handle(graph, request, response)
        with server.makefile("wb") as writer:
            response.send(writer)
        server.close()
        text = _read_all(client).decode()

    assert request.method == "GET"
    assert request.path == "/test"
    assert request.headers == {"host": "localhost"}
    assert response.status == 200
    assert response.body == b"Success"
    assert "HTTP/1.1 200 OK" in text
    assert "Content-Type: text/plain" in text
    assert "Success" in text


def test_missing_route_sets_404():
    router = HelixRouter()
    response = Response()
    router.handle(None, Request(method="GET", path="/nowhere"), response)
    assert response.status == 404
    assert response.body == b"404 - Not Found"


def test_add_route_uppercases_method():
    router = HelixRouter()
    router.add_route("post", "/x", _success)
    assert list(router.routes) == [("POST", "/x")]
    response = Response()
    router.handle(None, Request(method="POST", path="/x"), response)
    assert response.body == b"Success"


def test_request_method_is_matched_as_given():
    router = HelixRouter()
    router.add_route("get", "/x", _success)
    response = Response()
    router.handle(None, Request(method="get", path="/x"), response)
    assert response.status == 404


def test_routes_given_to_constructor():
    router = HelixRouter({("GET", "/a"): _success})
    response = Response()
    router.handle(None, Request(method="GET", path="/a"), response)
    assert response.body == b"Success"


def test_handler_receives_graph_and_request():
    seen = []

    def handler(handler_input, response):
        seen.append(handler_input)
        response.body = handler_input.request.body

    router = HelixRouter()
    router.add_route("POST", "/echo", handler)
    graph = {"name": "graph"}
    request = Request.from_stream(
        io.BytesIO(b"POST /echo HTTP/1.1\r\nContent-Length: 3\r\n\r\nabc")
    )
    response = Response()
    router.handle(graph, request, response)
    assert response.body == b"abc"
    assert seen == [HandlerInput(request=request, graph=graph)]


def test_handler_error_propagates():
    def failing(_input, _response):
        raise RuntimeError("boom")

    router = HelixRouter()
    router.add_route("GET", "/fail", failing)
    with pytest.raises(RuntimeError, match="boom"):
        router.handle(None, Request(method="GET", path="/fail"), Response())