"""Order endpoints: checkout, history and tracking for shoppers; status updates for admins."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import admin_user, current_user_id
from storefront.api.schemas import (
    OrderAddressResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderNumberResponse,
    OrderResponse,
    OrderStatsResponse,
    PlaceOrderRequest,
    StatusResponse,
    TrackingResponse,
    UpdateOrderStatusRequest,
)
from storefront.ordering.order.cancellation import CancelOrder, owned_order
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import PlaceOrder
from storefront.ordering.order.status import UpdateOrderStatus
from storefront.ordering.order.tracking import order_statistics, tracking_info

router = APIRouter(prefix="/api/orders", tags=["orders"])


def _address_response(address) -> OrderAddressResponse:
    return OrderAddressResponse(
        first_name=address.first_name,
        last_name=address.last_name,
        street=address.street,
        city=address.city,
        zip_code=address.zip_code,
        country=address.country,
        phone=address.phone,
        formatted=address.formatted,
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        order_number=order.order_number,
        status=order.status,
        total_price=order.total_price,
        total_items=order.total_items,
        total_quantity=order.total_quantity,
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                product_name=item.product_name,
                unit_price=item.unit_price,
                quantity=item.quantity,
                total_price=item.total_price,
            )
            for item in order.items
        ],
        shipping_address=_address_response(order.shipping_address),
        billing_address=_address_response(order.billing_address),
        notes=order.notes,
        can_be_cancelled=order.can_be_cancelled,
        is_completed=order.is_completed,
        created_at=order.created_at,
        shipped_at=order.shipped_at,
        delivered_at=order.delivered_at,
    )


@router.get("", response_model=OrderListResponse)
async def list_orders(user_id: str = Depends(current_user_id)) -> OrderListResponse:
    orders = current_domain.repository_for(Order).for_user(user_id)
    return OrderListResponse(orders=[_order_response(o) for o in orders])


@router.post("", status_code=201, response_model=OrderNumberResponse)
async def place_order(body: PlaceOrderRequest, user_id: str = Depends(current_user_id)) -> OrderNumberResponse:
    command = PlaceOrder(
        user_id=user_id,
        shipping_address_id=body.shipping_address_id,
        billing_address_id=body.billing_address_id,
        notes=body.notes,
    )
    order_number = current_domain.process(command, asynchronous=False)
    return OrderNumberResponse(order_number=order_number)


@router.get("/stats", response_model=OrderStatsResponse)
async def order_stats(user_id: str = Depends(current_user_id)) -> OrderStatsResponse:
    orders = current_domain.repository_for(Order).for_user(user_id)
    return OrderStatsResponse(**order_statistics(orders))


@router.get("/{order_number}", response_model=OrderResponse)
async def get_order(order_number: str, user_id: str = Depends(current_user_id)) -> OrderResponse:
    return _order_response(owned_order(order_number, user_id))


@router.get("/{order_number}/track", response_model=TrackingResponse)
async def track_order(order_number: str, user_id: str = Depends(current_user_id)) -> TrackingResponse:
    return TrackingResponse(**tracking_info(owned_order(order_number, user_id)))


@router.post("/{order_number}/cancel", response_model=StatusResponse)
async def cancel_order(order_number: str, user_id: str = Depends(current_user_id)) -> StatusResponse:
    current_domain.process(CancelOrder(user_id=user_id, order_number=order_number), asynchronous=False)
    return StatusResponse(message="Order cancelled")


@router.put("/{order_number}/status", response_model=StatusResponse, dependencies=[Depends(admin_user)])
async def update_order_status(order_number: str, body: UpdateOrderStatusRequest) -> StatusResponse:
    status = current_domain.process(
        UpdateOrderStatus(order_number=order_number, status=body.status),
        asynchronous=False,
    )
    return StatusResponse(message=f"Order is {status}")
