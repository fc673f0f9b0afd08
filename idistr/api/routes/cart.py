"""Cart endpoints."""

from fastapi import APIRouter, Depends, status

from idistr.api.dependencies import get_manage_cart_use_case
from idistr.application.dto.requests import (
    AddCartItemRequest,
    SelectStoreRequest,
    UpdateCartItemRequest,
    UpdateNoteRequest,
)
from idistr.application.dto.responses import CartResponse, ErrorResponse
from idistr.application.use_cases import ManageCartUseCase

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=CartResponse)
async def get_cart(
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    """Current cart with total."""
    return use_case.to_response()


@router.post(
    "/items",
    response_model=CartResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def add_item(
    request: AddCartItemRequest,
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    """Add a product; adding it again accumulates the quantity."""
    await use_case.add_item(request.product_id, request.qty)
    return use_case.to_response()


@router.patch(
    "/items/{product_id}",
    response_model=CartResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_item(
    product_id: str,
    request: UpdateCartItemRequest,
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    """Set a line's quantity (clamped to at least 1)."""
    await use_case.update_item(product_id, request.qty)
    return use_case.to_response()


@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_item(
    product_id: str,
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    """Remove a product's line; absent ids are ignored."""
    await use_case.remove_item(product_id)
    return use_case.to_response()


@router.delete("/lines/{index}", response_model=CartResponse)
async def remove_line(
    index: int,
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    """Remove a line by position, e.g. one that could not be resolved."""
    await use_case.remove_line(index)
    return use_case.to_response()


@router.delete("", response_model=CartResponse)
async def clear_cart(
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    """Empty the cart."""
    await use_case.clear()
    return use_case.to_response()


@router.put(
    "/store",
    response_model=CartResponse,
    responses={400: {"model": ErrorResponse}},
)
async def select_store(
    request: SelectStoreRequest,
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    """Select the store the order is for."""
    await use_case.select_store(request.store_id)
    return use_case.to_response()


@router.put("/note", response_model=CartResponse)
async def set_note(
    request: UpdateNoteRequest,
    use_case: ManageCartUseCase = Depends(get_manage_cart_use_case),
) -> CartResponse:
    """Attach a note to the order."""
    use_case.set_note(request.note)
    return use_case.to_response()
