"""Shared error helpers."""


class InvalidToolIdError(ValueError):
    """Raised when a tool lookup is given an empty or missing identifier."""


class ToolListEncodingError(Exception):
    """Raised when the tool list response body cannot be encoded."""
