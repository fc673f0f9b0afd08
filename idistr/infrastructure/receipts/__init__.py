"""Receipt rendering and print surfaces."""

from idistr.config import get_settings
from idistr.core.interfaces.receipt import IPrintSurface, IReceiptRenderer
from idistr.infrastructure.receipts.html_renderer import HtmlReceiptRenderer
from idistr.infrastructure.receipts.pdf_renderer import PdfReceiptRenderer
from idistr.infrastructure.receipts.surfaces import BrowserPrintSurface, ReceiptOutbox

_outbox: ReceiptOutbox | None = None


def get_receipt_renderer() -> IReceiptRenderer:
    """Renderer for the configured receipt format."""
    settings = get_settings().receipt
    if settings.format == "pdf":
        return PdfReceiptRenderer(settings)
    return HtmlReceiptRenderer(settings)


def get_receipt_outbox() -> ReceiptOutbox:
    """Get singleton receipt outbox."""
    global _outbox
    if _outbox is None:
        _outbox = ReceiptOutbox(get_settings().receipt.outbox_size)
    return _outbox


def get_print_surface() -> IPrintSurface:
    """Print surface for the configured mode."""
    settings = get_settings().receipt
    if settings.surface == "browser":
        return BrowserPrintSurface(settings.print_dir)
    return get_receipt_outbox()


def reset_receipts() -> None:
    global _outbox
    _outbox = None


__all__ = [
    "BrowserPrintSurface",
    "HtmlReceiptRenderer",
    "PdfReceiptRenderer",
    "ReceiptOutbox",
    "get_print_surface",
    "get_receipt_outbox",
    "get_receipt_renderer",
    "reset_receipts",
]
