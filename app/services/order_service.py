"""
Order placement and history.

Placing an order writes the order row, one row per cart line and one join
row per selected modifier in a single transaction.
"""

from typing import Dict, List, Sequence
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.models.menu import Menu, MenuSection, MenuItem
from app.models.order import Order, OrderItem, OrderItemModifier, OrderLocation
from app.models.restaurant import RestaurantStaff
from app.schemas.order import OrderCreate, OrderItemCreate
from app.services.access import (
    ALL_ROLES,
    ORDER_TAKERS,
    EntityKind,
    EntityRef,
    RequestContext,
    authorize,
    check_access,
    require_membership,
    resolve_restaurant_id,
)
from app.services.aggregator import cart_lines_for_order, order_total
from app.services.errors import UnprocessableError, guarded

logger = structlog.get_logger()


def _order_loader():
    return (
        selectinload(Order.staff).selectinload(RestaurantStaff.user),
        selectinload(Order.items).selectinload(OrderItem.menu_item).selectinload(MenuItem.modifiers),
        selectinload(Order.items).selectinload(OrderItem.selections).selectinload(OrderItemModifier.modifier),
    )


async def _load_order(ctx: RequestContext, order_id: UUID) -> Order:
    result = await ctx.db.execute(
        select(Order)
        .where(Order.id == order_id)
        .options(*_order_loader())
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


def _check_location(data: OrderCreate) -> None:
    if data.location == OrderLocation.TABLE:
        if data.table_number is None:
            raise UnprocessableError("if location table, must have table number")
    elif data.location == OrderLocation.TO_GO:
        if not data.name or not data.phone:
            raise UnprocessableError("if location to_go, must have name and phone")


async def _menu_items_for(
    ctx: RequestContext,
    restaurant_id: UUID,
    lines: Sequence[OrderItemCreate],
) -> Dict[UUID, MenuItem]:
    """Load the lines' menu items, checking each belongs to the restaurant
    and each selected modifier belongs to its item"""
    item_ids = {line.menu_item_id for line in lines}
    result = await ctx.db.execute(
        select(MenuItem)
        .join(MenuSection, MenuSection.id == MenuItem.section_id)
        .join(Menu, Menu.id == MenuSection.menu_id)
        .where(MenuItem.id.in_(item_ids), Menu.restaurant_id == restaurant_id)
        .options(selectinload(MenuItem.modifiers))
    )
    items = {item.id: item for item in result.scalars().all()}

    for line in lines:
        item = items.get(line.menu_item_id)
        if item is None:
            raise UnprocessableError(f"Menu item {line.menu_item_id} is not on this restaurant's menu")
        if len(set(line.modifier_ids)) != len(line.modifier_ids):
            raise UnprocessableError(f"Modifier selected twice for {item.name}")
        known = {modifier.id for modifier in item.modifiers}
        unknown = [modifier_id for modifier_id in line.modifier_ids if modifier_id not in known]
        if unknown:
            raise UnprocessableError(f"Modifier {unknown[0]} does not belong to {item.name}")
    return items


def _build_order_item(line: OrderItemCreate, item: MenuItem, membership: RestaurantStaff) -> OrderItem:
    modifiers = {modifier.id: modifier for modifier in item.modifiers}
    return OrderItem(
        menu_item=item,
        restaurant_staff_id=membership.id,
        special_instructions=line.special_instructions,
        selections=[
            OrderItemModifier(modifier=modifiers[modifier_id], position=position)
            for position, modifier_id in enumerate(line.modifier_ids)
        ],
    )


@guarded("Failed to create order")
async def place_order(ctx: RequestContext, restaurant_id: UUID, data: OrderCreate) -> Order:
    """Validate and persist a cart as one order, all or nothing"""
    membership = await require_membership(ctx, restaurant_id, ORDER_TAKERS)
    _check_location(data)
    if not data.items:
        raise UnprocessableError("An order needs at least one item")

    items = await _menu_items_for(ctx, restaurant_id, data.items)

    order = Order(
        restaurant_id=restaurant_id,
        restaurant_staff_id=membership.id,
        location=data.location,
        table_number=data.table_number,
        name=data.name,
        phone=data.phone,
        items=[_build_order_item(line, items[line.menu_item_id], membership) for line in data.items],
    )
    ctx.db.add(order)
    await ctx.db.commit()

    order = await _load_order(ctx, order.id)
    logger.info(
        "Order placed",
        restaurant_id=str(restaurant_id),
        order_id=str(order.id),
        items=len(order.items),
        total_cents=order_total(cart_lines_for_order(order)),
    )
    return order


@guarded("Failed to add order item")
async def add_order_item(ctx: RequestContext, order_id: UUID, line: OrderItemCreate) -> Order:
    restaurant_id = await resolve_restaurant_id(ctx.db, EntityRef(EntityKind.ORDER, order_id))
    membership = await require_membership(ctx, restaurant_id, ORDER_TAKERS)

    items = await _menu_items_for(ctx, restaurant_id, [line])
    order_item = _build_order_item(line, items[line.menu_item_id], membership)
    order_item.order_id = order_id
    ctx.db.add(order_item)
    await ctx.db.commit()

    logger.info("Order item added", order_id=str(order_id), order_item_id=str(order_item.id))
    return await _load_order(ctx, order_id)


@guarded("Failed to fetch orders")
async def get_orders(ctx: RequestContext, restaurant_id: UUID) -> List[Order]:
    """Order history, newest first"""
    await check_access(ctx, restaurant_id, ALL_ROLES)
    result = await ctx.db.execute(
        select(Order)
        .where(Order.restaurant_id == restaurant_id)
        .options(*_order_loader())
        .order_by(Order.created_at.desc())
    )
    return result.scalars().all()


@guarded("Failed to fetch order")
async def get_order(ctx: RequestContext, order_id: UUID) -> Order:
    await authorize(ctx, EntityRef(EntityKind.ORDER, order_id), ALL_ROLES)
    return await _load_order(ctx, order_id)
