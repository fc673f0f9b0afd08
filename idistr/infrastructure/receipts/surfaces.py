"""
Print surfaces for rendered receipts.

``ReceiptOutbox`` keeps the most recent receipts in memory so the API can
serve them to the client for printing. ``BrowserPrintSurface`` writes the
document to a temporary file and opens it in the local browser.
"""

import tempfile
import webbrowser
from collections import OrderedDict
from pathlib import Path

from idistr.config import get_logger
from idistr.core.entities import Receipt
from idistr.core.interfaces.receipt import IPrintSurface

logger = get_logger(__name__)


class ReceiptOutbox(IPrintSurface):
    """Bounded in-memory store of issued receipts, keyed by order id."""

    def __init__(self, max_size: int = 100) -> None:
        self._max_size = max(1, max_size)
        self._receipts: OrderedDict[str, Receipt] = OrderedDict()

    def open(self, receipt: Receipt) -> None:
        self._receipts[receipt.order_id] = receipt
        self._receipts.move_to_end(receipt.order_id)
        while len(self._receipts) > self._max_size:
            evicted, _ = self._receipts.popitem(last=False)
            logger.debug("receipt_evicted", order_id=evicted)

    def get(self, order_id: str) -> Receipt | None:
        return self._receipts.get(order_id)

    def __len__(self) -> int:
        return len(self._receipts)


class BrowserPrintSurface(IPrintSurface):
    """Opens receipts in the default browser of the host machine."""

    def __init__(self, directory: Path | None = None) -> None:
        self._directory = directory

    def open(self, receipt: Receipt) -> None:
        suffix = ".pdf" if receipt.media_type == "application/pdf" else ".html"
        if self._directory is not None:
            self._directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            prefix=f"receipt-{receipt.order_id}-",
            suffix=suffix,
            dir=self._directory,
            delete=False,
        ) as f:
            f.write(receipt.content)
            path = Path(f.name)

        if not webbrowser.open(path.as_uri()):
            raise RuntimeError(f"No browser available to open {path}")
        logger.info("receipt_opened", order_id=receipt.order_id, path=str(path))
