"""The listening side of the gateway: accepting clients and dispatching them."""

from __future__ import annotations

import socket
import threading
import uuid
from collections.abc import Mapping
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from helixkit.errors import GraphConnectionError
from helixkit.gateway.router import Handler, HelixRouter
from helixkit.gateway.thread_pool import ThreadPool

DEFAULT_POOL_SIZE = 10

_POLL_INTERVAL = 0.1


def _split_address(address: str) -> tuple[int, str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise OSError(f"invalid socket address: {address!r}")
    family = socket.AF_INET
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
        family = socket.AF_INET6
    number = int(port)
    if number > 65535:
        raise OSError(f"invalid port: {number}")
    return family, host, number


def _bind(address: str) -> socket.socket:
    try:
        family, host, port = _split_address(address)
        return socket.create_server((host, port), family=family)
    except OSError as exc:
        raise GraphConnectionError("Failed to bind", exc) from exc


@dataclass
class ClientConnection:
    """A client accepted by the gateway."""

    id: str
    stream: socket.socket
    last_active: datetime


class ConnectionHandler:
    """Listens on an address and hands each accepted client to a thread pool."""

    def __init__(self, address: str, graph: Any, size: int, router: HelixRouter) -> None:
        self.listener = _bind(address)
        self.listener.settimeout(_POLL_INTERVAL)
        self.active_connections: dict[str, ClientConnection] = {}
        self._lock = threading.Lock()
        self._closed = threading.Event()
        try:
            self.thread_pool = ThreadPool(size, graph, router)
        except ValueError:
            self.listener.close()
            raise

    def accept_conns(self) -> Future[None]:
        """Accept clients on a background thread.

        The returned future completes when the handler is closed, or fails
        with ``GraphConnectionError`` if accepting a client fails.
        """
        result: Future[None] = Future()
        result.set_running_or_notify_cancel()

        def loop() -> None:
            while True:
                try:
                    conn, _ = self.listener.accept()
                except TimeoutError:
                    if self._closed.is_set():
                        result.set_result(None)
                        return
                    continue
                except OSError as exc:
                    if self._closed.is_set():
                        result.set_result(None)
                    else:
                        result.set_exception(
                            GraphConnectionError("Failed to accept connection", exc)
                        )
                    return
                conn.settimeout(None)
                client = ClientConnection(
                    id=str(uuid.uuid4()),
                    stream=conn,
                    last_active=datetime.now(timezone.utc),
                )
                with self._lock:
                    self.active_connections[client.id] = client
                self.thread_pool.submit(conn)

        threading.Thread(target=loop, name="helix-accept", daemon=True).start()
        return result

    def close(self) -> None:
        """Stop listening and stop the worker threads."""
        if self._closed.is_set():
            return
        self._closed.set()
        self.listener.close()
        self.thread_pool.shutdown()

    def __enter__(self) -> ConnectionHandler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class HelixGateway:
    """A router and a connection handler bound together on one address."""

    def __init__(
        self,
        address: str,
        graph: Any,
        size: int = DEFAULT_POOL_SIZE,
        routes: Mapping[tuple[str, str], Handler] | None = None,
    ) -> None:
        router = HelixRouter(routes)
        self.connection_handler = ConnectionHandler(address, graph, size, router)