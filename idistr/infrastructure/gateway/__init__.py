"""Backend gateway implementations."""

from idistr.core.interfaces import IOrderGateway
from idistr.infrastructure.gateway.http_gateway import HttpOrderGateway, extract_detail

_gateway: IOrderGateway | None = None


def get_order_gateway() -> IOrderGateway:
    """Get singleton gateway instance."""
    global _gateway
    if _gateway is None:
        _gateway = HttpOrderGateway()
    return _gateway


def reset_order_gateway() -> None:
    global _gateway
    _gateway = None


__all__ = ["HttpOrderGateway", "extract_detail", "get_order_gateway", "reset_order_gateway"]
