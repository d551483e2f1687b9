"""A fixed set of worker threads serving connections handed to them."""

from __future__ import annotations

import logging
import queue
import socket
import threading
from typing import Any

from helixkit.gateway.router import HelixRouter
from helixkit.protocol.http import Request, Response

log = logging.getLogger(__name__)


def _serve_connection(conn: socket.socket, graph: Any, router: HelixRouter) -> None:
    """Read one request from ``conn``, route it, answer and close the connection."""
    with conn:
        try:
            with conn.makefile("rb") as reader:
                request = Request.from_stream(reader)
        except (OSError, ValueError, EOFError) as exc:
            log.error("Error reading request: %r", exc)
            return

        response = Response()
        try:
            router.handle(graph, request, response)
        except Exception as exc:
            log.error("Error handling request: %r", exc)
            response.status = 500

        try:
            with conn.makefile("wb") as writer:
                response.send(writer)
        except BrokenPipeError:
            log.error("Client disconnected before response could be sent")
        except ConnectionResetError:
            log.error("Connection was reset by peer")
        except OSError as exc:
            log.error("Unexpected error sending response: %r", exc)


class Worker:
    """A thread taking connections from a shared queue until told to stop."""

    def __init__(
        self,
        worker_id: int,
        graph: Any,
        router: HelixRouter,
        jobs: queue.Queue[socket.socket | None],
    ) -> None:
        self.id = worker_id
        self._graph = graph
        self._router = router
        self._jobs = jobs
        self.thread = threading.Thread(
            target=self._run, name=f"helix-worker-{worker_id}", daemon=True
        )
        self.thread.start()

    def _run(self) -> None:
        while True:
            conn = self._jobs.get()
            if conn is None:
                return
            _serve_connection(conn, self._graph, self._router)


class ThreadPool:
    """Worker threads sharing one queue of connections."""

    def __init__(self, size: int, graph: Any, router: HelixRouter) -> None:
        if size <= 0:
            raise ValueError(
                f"Expected number of threads in thread pool to be more than 0, got {size}"
            )
        self._jobs: queue.Queue[socket.socket | None] = queue.Queue()
        self.workers = [Worker(i, graph, router, self._jobs) for i in range(size)]
        self.num_unused_workers = len(self.workers)
        self.num_used_workers = 0

    def submit(self, conn: socket.socket) -> None:
        """Queue a connection for the next free worker."""
        self._jobs.put(conn)

    def shutdown(self) -> None:
        """Stop every worker once the queued connections are served, and wait."""
        for _ in self.workers:
            self._jobs.put(None)
        for worker in self.workers:
            worker.thread.join()

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()