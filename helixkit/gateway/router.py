"""Routing of requests to handlers by method and path."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from helixkit.protocol.http import Request, Response


@dataclass
class HandlerInput:
    """What a handler receives: the request and the graph it works on."""

    request: Request
    graph: Any


Handler = Callable[[HandlerInput, Response], None]


class HelixRouter:
    """Maps ``(METHOD, path)`` pairs to handlers."""

    def __init__(self, routes: Mapping[tuple[str, str], Handler] | None = None) -> None:
        self.routes: dict[tuple[str, str], Handler] = dict(routes or {})

    def add_route(self, method: str, path: str, handler: Handler) -> None:
        """Register a handler; the method is upper-cased."""
        self.routes[(method.upper(), path)] = handler

    def handle(self, graph: Any, request: Request, response: Response) -> None:
        """Run the handler for the request, or set a 404 when there is none.

        Exceptions raised by the handler propagate to the caller.
        """
        handler = self.routes.get((request.method, request.path))
        if handler is None:
            response.status = 404
            response.body = b"404 - Not Found"
            return
        handler(HandlerInput(request=request, graph=graph), response)