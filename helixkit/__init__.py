"""Graph protocol types, a threaded HTTP gateway, traversal code generation and error types."""

__version__ = "0.1.0"