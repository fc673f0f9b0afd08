"""API middleware."""

from idistr.api.middleware.error_handler import ErrorHandlerMiddleware
from idistr.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
