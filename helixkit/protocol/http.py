"""Minimal HTTP/1.1 request parsing and response writing."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import BinaryIO

_CONTENT_LENGTH = re.compile(r"\+?[0-9]+")

_STATUS = {
    200: ("OK", None),
    404: ("Not Found", b"404 - Route Not Found\n"),
    500: ("Internal Server Error", b"500 - Internal Server Error\n"),
}


def _read_text_line(stream: BinaryIO) -> str:
    return stream.readline().decode("utf-8")


@dataclass
class Request:
    """A parsed request: method, path, lower-cased headers and raw body."""

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> Request:
        """Read one request from a binary stream.

        Raises ``ValueError`` when the request line lacks a method or a path,
        and ``EOFError`` when the stream ends before the announced body.
        """
        parts = _read_text_line(stream).split()
        if not parts:
            raise ValueError("Missing HTTP method")
        if len(parts) < 2:
            raise ValueError("Missing path")
        method, path = parts[0], parts[1]

        headers: dict[str, str] = {}
        while True:
            line = _read_text_line(stream)
            if not line or line in ("\r\n", "\n"):
                break
            key, sep, value = line.strip().partition(":")
            if sep:
                headers[key.strip().lower()] = value.strip()

        body = b""
        length = headers.get("content-length")
        if length is not None and _CONTENT_LENGTH.fullmatch(length):
            size = int(length)
            body = stream.read(size) if size else b""
            if len(body) < size:
                raise EOFError("failed to fill whole buffer")

        return cls(method=method, path=path, headers=headers, body=body)


@dataclass
class Response:
    """A response with a status, headers and body, sent as HTTP/1.1."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=lambda: {"Content-Type": "text/plain"})
    body: bytes = b""

    def send(self, stream: BinaryIO) -> None:
        """Write the response to a binary stream and flush it.

        A 404 or 500 status replaces the body with a standard message.
        """
        reason, replacement = _STATUS.get(self.status, ("Unknown", None))
        if replacement is not None:
            self.body = replacement

        head = [f"HTTP/1.1 {self.status} {reason}\r\n"]
        head.extend(f"{name}: {value}\r\n" for name, value in self.headers.items())
        head.append(f"Content-Length: {len(self.body)}\r\n")
        head.append("\r\n")

        stream.write("".join(head).encode("utf-8"))
        stream.write(self.body)
        stream.flush()