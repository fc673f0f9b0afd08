"""
Catalog cache and cart reconciliation.

Holds the stores and products fetched once per session and repairs cart
lines whose product reference is missing or stale (carts persisted under
an older catalog or by a different session).
"""

from dataclasses import dataclass, field

from idistr.config import get_logger
from idistr.core.entities import CartLine, Product, Store

logger = get_logger(__name__)

ALL_CATEGORIES = "Все"


def _includes(haystack: str | None, needle: str | None) -> bool:
    """Case-insensitive substring test; an empty needle matches everything."""
    if not needle:
        return True
    return needle.lower() in (haystack or "").lower()


@dataclass
class ReconcileReport:
    """Outcome of one reconciliation pass."""

    lines: list[CartLine]
    repaired: dict[str, str] = field(default_factory=dict)  # sku/title -> product id
    unresolved: list[CartLine] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.repaired)


class CatalogCache:
    """
    In-memory stores and products for the current session.

    Populated once after the backend calls complete; read-only afterwards.
    """

    def __init__(self) -> None:
        self._stores: list[Store] = []
        self._products: list[Product] = []
        self._stores_by_id: dict[str, Store] = {}
        self._products_by_id: dict[str, Product] = {}
        self._loaded = False

    def populate(self, stores: list[Store], products: list[Product]) -> None:
        """Replace the cached catalog."""
        self._stores = list(stores)
        self._products = list(products)
        self._stores_by_id = {s.id: s for s in self._stores}
        self._products_by_id = {p.id: p for p in self._products}
        self._loaded = True
        logger.info(
            "catalog_populated",
            stores=len(self._stores),
            products=len(self._products),
        )

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def stores(self) -> list[Store]:
        return list(self._stores)

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_store(self, store_id: str | None) -> Store | None:
        if not store_id:
            return None
        return self._stores_by_id.get(store_id)

    def get_product(self, product_id: str | None) -> Product | None:
        if not product_id:
            return None
        return self._products_by_id.get(product_id)

    def has_product(self, product_id: str | None) -> bool:
        return self.get_product(product_id) is not None

    def find_by_reference(self, sku: str | None, title: str | None) -> Product | None:
        """Find a product by SKU first, then by exact title."""
        if sku:
            for product in self._products:
                if product.sku == sku:
                    return product
        if title:
            for product in self._products:
                if product.title == title:
                    return product
        return None

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order, led by the catch-all entry."""
        seen: list[str] = []
        for product in self._products:
            if product.category and product.category not in seen:
                seen.append(product.category)
        return [ALL_CATEGORIES, *seen]

    def search(self, query: str = "", category: str | None = None) -> list[Product]:
        """Products whose title or SKU contains the query, optionally in one category."""
        return [
            p
            for p in self._products
            if (not category or category == ALL_CATEGORIES or p.category == category)
            and (_includes(p.title, query) or _includes(p.sku, query))
        ]

    def search_stores(self, query: str = "") -> list[Store]:
        """Stores matching the query on name, address, registration number or phone."""
        return [
            s
            for s in self._stores
            if _includes(s.name, query)
            or _includes(s.address, query)
            or _includes(s.bin_iin, query)
            or _includes(s.phone, query)
        ]

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def reconcile(self, lines: list[CartLine]) -> ReconcileReport:
        """
        Resolve lines lacking a valid product id against the catalog.

        Matching is by SKU, then by exact title. Only the id is rewritten:
        quantity and the snapshotted price stay as they are, and no line is
        ever dropped. A match already carried by another line is skipped so
        the cart keeps one line per product; such a line stays unresolved.
        Running it again on the result changes nothing.
        """
        if not self._products:
            return ReconcileReport(lines=list(lines))

        taken = {line.id for line in lines if self.has_product(line.id)}
        result: list[CartLine] = []
        report = ReconcileReport(lines=result)

        for line in lines:
            if self.has_product(line.id):
                result.append(line)
                continue

            match = self.find_by_reference(line.sku, line.title)
            if match is None or match.id in taken:
                result.append(line)
                report.unresolved.append(line)
                continue

            taken.add(match.id)
            result.append(line.model_copy(update={"id": match.id}))
            report.repaired[line.sku or line.title] = match.id

        if report.changed or report.unresolved:
            logger.info(
                "cart_reconciled",
                repaired=len(report.repaired),
                unresolved=len(report.unresolved),
            )
        return report
