from .errors import InvalidToolIdError, ToolListEncodingError
from .logging import get_logger, request_id_var, setup_logging

__all__ = [
    "InvalidToolIdError",
    "ToolListEncodingError",
    "get_logger",
    "request_id_var",
    "setup_logging",
]
