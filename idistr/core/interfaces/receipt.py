"""Abstract interfaces for receipt rendering and printing."""

from abc import ABC, abstractmethod

from idistr.core.entities import Receipt


class IReceiptRenderer(ABC):
    """Interface for receipt document rendering implementations."""

    media_type: str = "application/octet-stream"

    @abstractmethod
    def render(self, receipt: Receipt) -> bytes:
        """Render a receipt into a self-contained document."""
        ...


class IPrintSurface(ABC):
    """
    A place a rendered receipt is opened for printing.

    ``open`` may fail (e.g. no browser available); callers treat that as
    non-fatal since the order is already recorded on the server.
    """

    @abstractmethod
    def open(self, receipt: Receipt) -> None:
        """Present the rendered receipt and trigger printing."""
        ...
