"""Order API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from app.models.order import Order
from app.schemas.order import (
    OrderCreate,
    OrderItemCreate,
    OrderItemResponse,
    OrderMenuItemResponse,
    OrderModifierResponse,
    OrderStaffResponse,
    OrderResponse,
)
from app.services import order_service
from app.services.access import RequestContext
from app.services.aggregator import (
    cart_lines_for_order,
    format_price,
    line_total,
    order_total,
    summarize_items,
)
from app.api.auth import get_request_context

router = APIRouter()


def _order_response(order: Order) -> OrderResponse:
    """Render an order with its computed totals and item summary"""
    total = order_total(cart_lines_for_order(order))
    user = order.staff.user
    return OrderResponse(
        id=order.id,
        restaurant_id=order.restaurant_id,
        location=order.location,
        table_number=order.table_number,
        name=order.name,
        phone=order.phone,
        staff=OrderStaffResponse(id=order.staff.id, name=user.full_name, email=user.email),
        items=[
            OrderItemResponse(
                id=item.id,
                menu_item=OrderMenuItemResponse(
                    id=item.menu_item.id,
                    name=item.menu_item.name,
                    price_cents=item.menu_item.price_cents,
                    description=item.menu_item.description,
                ),
                special_instructions=item.special_instructions,
                modifiers=[
                    OrderModifierResponse(
                        id=modifier.id,
                        name=modifier.name,
                        price_adjustment_cents=modifier.price_adjustment_cents,
                    )
                    for modifier in item.modifiers
                ],
                line_total_cents=line_total(item.menu_item, [modifier.id for modifier in item.modifiers]),
                created_at=item.created_at,
            )
            for item in order.items
        ],
        total_cents=total,
        total_display=format_price(total),
        summary=summarize_items(order.items),
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


@router.get("/restaurants/{restaurant_id}/orders", response_model=List[OrderResponse])
async def list_orders(
    restaurant_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
):
    """Order history for a restaurant, newest first"""
    orders = await order_service.get_orders(ctx, restaurant_id)
    return [_order_response(order) for order in orders]


@router.post("/restaurants/{restaurant_id}/orders", response_model=OrderResponse, status_code=201)
async def place_order(
    restaurant_id: UUID,
    order_data: OrderCreate,
    ctx: RequestContext = Depends(get_request_context),
):
    """Place an order from a cart"""
    order = await order_service.place_order(ctx, restaurant_id, order_data)
    return _order_response(order)


@router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
):
    """Get order details"""
    order = await order_service.get_order(ctx, order_id)
    return _order_response(order)


@router.post("/orders/{order_id}/items", response_model=OrderResponse, status_code=201)
async def add_order_item(
    order_id: UUID,
    item_data: OrderItemCreate,
    ctx: RequestContext = Depends(get_request_context),
):
    """Add one line to an existing order"""
    order = await order_service.add_order_item(ctx, order_id, item_data)
    return _order_response(order)
