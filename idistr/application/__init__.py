"""
Application layer - sessions, use cases, DTOs and service factories.

Use cases are the only entry point for API handlers.
"""

from idistr.application.services import get_session_registry, reset_services
from idistr.application.session import PosSession, SessionRegistry

__all__ = [
    "PosSession",
    "SessionRegistry",
    "get_session_registry",
    "reset_services",
]
