"""
Cart ledger: the persisted collection of cart lines.

Owns add/update/remove/clear and the reconciliation pass against the
catalog. The cart, the recently added product ids and the selected store
are persistent fields under one namespace; the order note lives in memory
only.
"""

import math
from typing import Any

from idistr.config import get_logger
from idistr.core.entities import CartLine, Product
from idistr.core.interfaces.state_store import IStateStore
from idistr.core.services.catalog_cache import CatalogCache, ReconcileReport
from idistr.core.services.persistent_field import PersistentField

logger = get_logger(__name__)

DEFAULT_NAMESPACE = "idistr"
RECENTS_LIMIT = 10


def coerce_quantity(value: Any) -> int:
    """
    Coerce UI input to a quantity of at least 1.

    Malformed input (empty, non-numeric, NaN, zero, negative) becomes 1;
    fractional values are truncated. Never raises.
    """
    if isinstance(value, bool):
        return 1
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(number):
        return 1
    return max(1, int(number))


class CartLedger:
    """
    Persisted cart lines keyed by product id.

    Invariant: at most one line per product id. Every mutation builds a new
    line list and stores it in one write, so a failure never leaves the
    cart half-updated.
    """

    def __init__(
        self,
        store: IStateStore,
        namespace: str = DEFAULT_NAMESPACE,
        recents_limit: int = RECENTS_LIMIT,
    ):
        self._state_store = store
        self.namespace = namespace
        self._recents_limit = recents_limit
        self._lines: PersistentField[list[CartLine]] = PersistentField(
            store, f"{namespace}.cart", [], list[CartLine]
        )
        self._recents: PersistentField[list[str]] = PersistentField(
            store, f"{namespace}.recents", [], list[str]
        )
        self._store_id: PersistentField[str] = PersistentField(
            store, f"{namespace}.store", "", str
        )
        self._note = ""

    async def load(self) -> None:
        """Rehydrate cart, recents and store selection from durable state."""
        await self._lines.load()
        await self._recents.load()
        await self._store_id.load()
        logger.info(
            "cart_rehydrated",
            namespace=self.namespace,
            lines=len(self._lines.value),
            store_id=self._store_id.value or None,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.value)

    def get(self, product_id: str) -> CartLine | None:
        for line in self._lines.value:
            if line.id == product_id:
                return line
        return None

    def total(self) -> float:
        """Sum of price x quantity over all lines; 0 for an empty cart."""
        return sum((line.price * line.qty for line in self._lines.value), 0.0)

    @property
    def recent_ids(self) -> list[str]:
        return list(self._recents.value)

    @property
    def selected_store_id(self) -> str:
        return self._store_id.value

    @property
    def note(self) -> str:
        return self._note

    def set_note(self, note: str | None) -> None:
        self._note = note or ""

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add(self, product: Product, quantity: Any = 1) -> CartLine:
        """Add a product; an existing line accumulates quantity."""
        qty = coerce_quantity(quantity)
        await self._push_recent(product.id)

        lines = self._lines.value
        existing = self.get(product.id)
        if existing is not None:
            updated = existing.model_copy(update={"qty": existing.qty + qty})
            new_lines = [updated if line.id == product.id else line for line in lines]
        else:
            updated = CartLine(
                id=product.id,
                title=product.title,
                sku=product.sku,
                price=float(product.price),
                qty=qty,
            )
            new_lines = [*lines, updated]

        await self._lines.set(new_lines)
        logger.debug("cart_line_added", product_id=product.id, qty=updated.qty)
        return updated

    async def set_quantity(self, product_id: str, quantity: Any) -> CartLine | None:
        """Set a line's quantity, clamped to at least 1. Unknown ids are ignored."""
        qty = coerce_quantity(quantity)
        if self.get(product_id) is None:
            return None

        new_lines = [
            line.model_copy(update={"qty": qty}) if line.id == product_id else line
            for line in self._lines.value
        ]
        await self._lines.set(new_lines)
        return self.get(product_id)

    async def remove(self, product_id: str) -> bool:
        """Remove the line for a product; absent ids are a no-op."""
        lines = self._lines.value
        new_lines = [line for line in lines if line.id != product_id]
        if len(new_lines) == len(lines):
            return False
        await self._lines.set(new_lines)
        return True

    async def remove_at(self, index: int) -> bool:
        """Remove a line by position (the only handle on a line without an id)."""
        lines = self._lines.value
        if not 0 <= index < len(lines):
            return False
        await self._lines.set(lines[:index] + lines[index + 1 :])
        return True

    async def clear(self) -> None:
        """Empty the cart and the note."""
        await self._lines.set([])
        self._note = ""

    async def select_store(self, store_id: str | None) -> None:
        await self._store_id.set(store_id or "")

    async def reconcile(self, catalog: CatalogCache) -> ReconcileReport:
        """Repair line ids against the catalog and persist any change."""
        report = catalog.reconcile(self._lines.value)
        if report.changed:
            await self._lines.set(report.lines)
        return report

    async def reset(self) -> None:
        """Wipe every persisted key of this namespace and restore defaults."""
        try:
            removed = await self._state_store.delete_prefix(f"{self.namespace}.")
        except Exception as e:
            logger.warning("local_state_wipe_failed", namespace=self.namespace, error=str(e))
            removed = 0
        for persisted in (self._lines, self._recents, self._store_id):
            await persisted.reset()
        self._note = ""
        logger.info("local_state_reset", namespace=self.namespace, keys=removed)

    async def _push_recent(self, product_id: str) -> None:
        recents = [product_id, *(x for x in self._recents.value if x != product_id)]
        await self._recents.set(recents[: self._recents_limit])
