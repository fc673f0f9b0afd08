"""
Service factory functions for dependency injection.

Wires infrastructure implementations to the application services.
"""

from idistr.application.session import SessionRegistry

# Singleton instances
_session_registry: SessionRegistry | None = None


def get_session_registry() -> SessionRegistry:
    """Get or create the process-wide session registry."""
    global _session_registry
    if _session_registry is None:
        _session_registry = SessionRegistry()
    return _session_registry


def reset_services() -> None:
    """Reset all singleton instances (for testing)."""
    global _session_registry
    _session_registry = None
