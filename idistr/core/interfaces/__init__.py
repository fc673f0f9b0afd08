"""Core interfaces (ports) for dependency injection."""

from idistr.core.interfaces.gateway import (
    CreateOrderPayload,
    IOrderGateway,
    ProductPage,
    RepProfile,
)
from idistr.core.interfaces.receipt import IPrintSurface, IReceiptRenderer
from idistr.core.interfaces.state_store import IStateStore

__all__ = [
    # Backend interfaces
    "IOrderGateway",
    "RepProfile",
    "ProductPage",
    "CreateOrderPayload",
    # Storage interfaces
    "IStateStore",
    # Receipt interfaces
    "IReceiptRenderer",
    "IPrintSurface",
]
