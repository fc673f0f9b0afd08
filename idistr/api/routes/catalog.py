"""Catalog browsing endpoints for the started session."""

from fastapi import APIRouter, Depends, Query

from idistr.api.dependencies import get_session
from idistr.application.dto.responses import ProductResponse, StoreResponse
from idistr.application.session import PosSession
from idistr.core.entities import Product

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def _product_to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        title=product.title,
        sku=product.sku,
        unit=product.unit,
        category=product.category,
        price=product.price,
        pack_size=product.pack_size,
        image_url=product.image_or_fallback,
    )


@router.get("/products", response_model=list[ProductResponse])
async def list_products(
    q: str = Query(default="", description="Substring of title or SKU"),
    category: str | None = Query(default=None, description="Category filter"),
    session: PosSession = Depends(get_session),
) -> list[ProductResponse]:
    """Search the loaded catalog."""
    return [_product_to_response(p) for p in session.catalog.search(q, category)]


@router.get("/stores", response_model=list[StoreResponse])
async def list_stores(
    q: str = Query(default="", description="Substring of name, address, BIN or phone"),
    session: PosSession = Depends(get_session),
) -> list[StoreResponse]:
    """Search the rep's stores."""
    return [StoreResponse(**s.model_dump()) for s in session.catalog.search_stores(q)]


@router.get("/categories", response_model=list[str])
async def list_categories(session: PosSession = Depends(get_session)) -> list[str]:
    """Product categories, led by the catch-all entry."""
    return session.catalog.categories()


@router.get("/recent", response_model=list[ProductResponse])
async def list_recent(session: PosSession = Depends(get_session)) -> list[ProductResponse]:
    """Recently added products, most recent first; ids no longer in the catalog are skipped."""
    products = (session.catalog.get_product(pid) for pid in session.ledger.recent_ids)
    return [_product_to_response(p) for p in products if p is not None]
