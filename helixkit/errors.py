"""Exceptions raised by the query parser, the router and the gateway."""

from __future__ import annotations


class _PrefixedError(Exception):
    """An error whose text is a fixed prefix followed by a message."""

    prefix = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class ParseError(_PrefixedError):
    """The query source does not match the grammar."""

    prefix = "Parse error"


class LexError(_PrefixedError):
    """The query source matched the grammar but could not be turned into an AST."""

    prefix = "Lex error"


class RouterError(_PrefixedError):
    """A request could not be routed or handled."""

    prefix = "Graph error"


class RouterIOError(RouterError):
    """An I/O failure while routing a request."""

    prefix = "IO error"

    def __init__(self, error: OSError) -> None:
        super().__init__(str(error))
        self.error = error


class GraphConnectionError(ConnectionError):
    """The gateway failed to bind or to accept a connection."""

    def __init__(self, message: str, cause: OSError | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"