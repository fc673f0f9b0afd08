"""Core domain services."""

from idistr.core.services.cart_ledger import CartLedger, coerce_quantity
from idistr.core.services.catalog_cache import ALL_CATEGORIES, CatalogCache, ReconcileReport
from idistr.core.services.operator_resolver import HostContext, OperatorResolver
from idistr.core.services.order_assembler import OrderAssembler
from idistr.core.services.persistent_field import PersistentField
from idistr.core.services.receipt_generator import ReceiptGenerator

__all__ = [
    "PersistentField",
    "CatalogCache",
    "ReconcileReport",
    "ALL_CATEGORIES",
    "CartLedger",
    "coerce_quantity",
    "OrderAssembler",
    "HostContext",
    "OperatorResolver",
    "ReceiptGenerator",
]
