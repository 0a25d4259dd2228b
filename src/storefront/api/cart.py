"""Cart endpoints for the signed-in user."""

import json

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_user_id
from storefront.api.schemas import (
    AddToCartRequest,
    CartCountResponse,
    CartResponse,
    CartValidationResponse,
    MergeCartRequest,
    MergeCartResponse,
    UpdateCartItemRequest,
)
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from storefront.ordering.cart.merge import MergeGuestCart
from storefront.ordering.cart.stock import validate_cart_stock
from storefront.ordering.cart.summary import summarize_cart

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _cart(user_id) -> Cart:
    """The user's cart; an unsaved empty one when they never had one."""
    return current_domain.repository_for(Cart).get_or_create(user_id)


def _cart_response(user_id) -> CartResponse:
    return CartResponse(**summarize_cart(_cart(user_id)))


@router.get("", response_model=CartResponse)
async def get_cart(user_id: str = Depends(current_user_id)) -> CartResponse:
    return _cart_response(user_id)


@router.get("/count", response_model=CartCountResponse)
async def cart_count(user_id: str = Depends(current_user_id)) -> CartCountResponse:
    cart = _cart(user_id)
    return CartCountResponse(
        total_items=len(cart.items),
        total_quantity=cart.total_quantity,
        is_empty=cart.is_empty,
    )


@router.post("/items", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, user_id: str = Depends(current_user_id)) -> CartResponse:
    command = AddToCart(user_id=user_id, product_id=body.product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(user_id)


@router.put("/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str, body: UpdateCartItemRequest, user_id: str = Depends(current_user_id)
) -> CartResponse:
    command = UpdateCartItem(user_id=user_id, item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(user_id)


@router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_from_cart(item_id: str, user_id: str = Depends(current_user_id)) -> CartResponse:
    current_domain.process(RemoveFromCart(user_id=user_id, item_id=item_id), asynchronous=False)
    return _cart_response(user_id)


@router.delete("", response_model=CartResponse)
async def clear_cart(user_id: str = Depends(current_user_id)) -> CartResponse:
    current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    return _cart_response(user_id)


@router.post("/merge", response_model=MergeCartResponse)
async def merge_guest_cart(body: MergeCartRequest, user_id: str = Depends(current_user_id)) -> MergeCartResponse:
    command = MergeGuestCart(
        user_id=user_id,
        items=json.dumps([line.model_dump() for line in body.items]),
    )
    merged = current_domain.process(command, asynchronous=False)
    return MergeCartResponse(merged=merged, cart=_cart_response(user_id))


@router.post("/validate", response_model=CartValidationResponse)
async def validate_cart(user_id: str = Depends(current_user_id)):
    """400 with the list of problems when the cart cannot be checked out as-is."""
    cart = _cart(user_id)
    errors = validate_cart_stock(cart)
    result = CartValidationResponse(is_valid=not errors, errors=errors, cart=CartResponse(**summarize_cart(cart)))
    if errors:
        return JSONResponse(status_code=400, content=result.model_dump(mode="json"))
    return result
