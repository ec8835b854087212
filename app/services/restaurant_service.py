"""Restaurant operations"""

from typing import List, Tuple
from uuid import UUID

import structlog
from sqlalchemy import select

from app.models.restaurant import Restaurant, RestaurantStaff, StaffRole
from app.schemas.restaurant import RestaurantCreate, RestaurantUpdate
from app.services.access import MENU_EDITORS, RequestContext, check_access
from app.services.errors import NotFoundError, guarded

logger = structlog.get_logger()


async def _load_restaurant(ctx: RequestContext, restaurant_id: UUID) -> Restaurant:
    result = await ctx.db.execute(select(Restaurant).where(Restaurant.id == restaurant_id))
    restaurant = result.scalar_one_or_none()
    if not restaurant:
        raise NotFoundError("Restaurant not found")
    return restaurant


@guarded("Failed to fetch restaurants")
async def list_restaurants(ctx: RequestContext) -> List[Tuple[Restaurant, RestaurantStaff]]:
    """Restaurants the caller is staff of, with their membership, by name"""
    result = await ctx.db.execute(
        select(Restaurant, RestaurantStaff)
        .join(RestaurantStaff, RestaurantStaff.restaurant_id == Restaurant.id)
        .where(RestaurantStaff.user_id == ctx.user_id)
        .order_by(Restaurant.name)
    )
    return [(restaurant, membership) for restaurant, membership in result.all()]


@guarded("Failed to fetch restaurant details")
async def get_restaurant(ctx: RequestContext, restaurant_id: UUID) -> Tuple[Restaurant, StaffRole]:
    role = await check_access(ctx, restaurant_id)
    restaurant = await _load_restaurant(ctx, restaurant_id)
    return restaurant, role


@guarded("Failed to create restaurant")
async def create_restaurant(ctx: RequestContext, data: RestaurantCreate) -> Restaurant:
    """Create a restaurant and make the caller its owner, atomically"""
    restaurant = Restaurant(created_by_id=ctx.user_id, **data.model_dump())
    ctx.db.add(restaurant)
    await ctx.db.flush()

    ctx.db.add(
        RestaurantStaff(
            restaurant_id=restaurant.id,
            user_id=ctx.user_id,
            role=StaffRole.OWNER,
            activated=True,
        )
    )
    await ctx.db.commit()

    logger.info("Restaurant created", restaurant_id=str(restaurant.id), user_id=str(ctx.user_id))
    return restaurant


@guarded("Failed to update restaurant")
async def update_restaurant(
    ctx: RequestContext,
    restaurant_id: UUID,
    data: RestaurantUpdate,
) -> Tuple[Restaurant, StaffRole]:
    role = await check_access(ctx, restaurant_id, MENU_EDITORS)
    restaurant = await _load_restaurant(ctx, restaurant_id)

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(restaurant, field, value)

    await ctx.db.commit()
    logger.info("Restaurant updated", restaurant_id=str(restaurant_id), user_id=str(ctx.user_id))
    return restaurant, role
