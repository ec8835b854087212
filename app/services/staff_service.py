"""Staff membership operations"""

from typing import List, Tuple
from uuid import UUID

import structlog
from sqlalchemy import func, select

from app.models.restaurant import RestaurantStaff, StaffRole
from app.models.user import User
from app.schemas.restaurant import StaffCreate, StaffUpdate
from app.services.access import (
    MENU_EDITORS,
    EntityKind,
    EntityRef,
    RequestContext,
    authorize,
    check_access,
)
from app.services.errors import ForbiddenError, NotFoundError, UnprocessableError, guarded

logger = structlog.get_logger()


@guarded("Failed to fetch staff")
async def list_staff(ctx: RequestContext, restaurant_id: UUID) -> List[Tuple[RestaurantStaff, User]]:
    await check_access(ctx, restaurant_id)
    result = await ctx.db.execute(
        select(RestaurantStaff, User)
        .join(User, User.id == RestaurantStaff.user_id)
        .where(RestaurantStaff.restaurant_id == restaurant_id)
        .order_by(RestaurantStaff.created_at)
    )
    return [(membership, user) for membership, user in result.all()]


@guarded("Failed to add staff member")
async def add_staff(
    ctx: RequestContext,
    restaurant_id: UUID,
    data: StaffCreate,
) -> Tuple[RestaurantStaff, User]:
    """Give an existing user a role in the restaurant.

    A user holds at most one membership per restaurant.
    """
    role = await check_access(ctx, restaurant_id, MENU_EDITORS)
    if data.role == StaffRole.OWNER and role != StaffRole.OWNER:
        raise ForbiddenError("Only an owner can grant the owner role")

    result = await ctx.db.execute(select(User).where(User.email == data.email))
    user = result.scalar_one_or_none()
    if not user:
        raise NotFoundError("User not found")

    result = await ctx.db.execute(
        select(RestaurantStaff.id).where(
            RestaurantStaff.restaurant_id == restaurant_id,
            RestaurantStaff.user_id == user.id,
        )
    )
    if result.first() is not None:
        raise UnprocessableError("User is already a staff member of this restaurant")

    membership = RestaurantStaff(
        restaurant_id=restaurant_id,
        user_id=user.id,
        role=data.role,
        activated=data.activated,
    )
    ctx.db.add(membership)
    await ctx.db.commit()

    logger.info(
        "Staff member added",
        restaurant_id=str(restaurant_id),
        staff_id=str(membership.id),
        role=data.role.value,
    )
    return membership, user


@guarded("Failed to update staff member")
async def modify_staff(
    ctx: RequestContext,
    staff_id: UUID,
    data: StaffUpdate,
) -> Tuple[RestaurantStaff, User]:
    restaurant_id, role = await authorize(ctx, EntityRef(EntityKind.STAFF, staff_id), MENU_EDITORS)

    result = await ctx.db.execute(
        select(RestaurantStaff, User)
        .join(User, User.id == RestaurantStaff.user_id)
        .where(RestaurantStaff.id == staff_id)
    )
    membership, user = result.one()

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    touches_owner = membership.role == StaffRole.OWNER or changes.get("role") == StaffRole.OWNER
    if touches_owner and role != StaffRole.OWNER:
        raise ForbiddenError("Only an owner can grant or change the owner role")

    loses_owner = membership.role == StaffRole.OWNER and membership.activated and (
        changes.get("role", StaffRole.OWNER) != StaffRole.OWNER
        or changes.get("activated", True) is False
    )
    if loses_owner:
        result = await ctx.db.execute(
            select(func.count(RestaurantStaff.id)).where(
                RestaurantStaff.restaurant_id == restaurant_id,
                RestaurantStaff.role == StaffRole.OWNER,
                RestaurantStaff.activated.is_(True),
            )
        )
        if result.scalar() <= 1:
            raise UnprocessableError("A restaurant must keep at least one active owner")

    for field, value in changes.items():
        setattr(membership, field, value)

    await ctx.db.commit()
    logger.info(
        "Staff member updated",
        restaurant_id=str(restaurant_id),
        staff_id=str(staff_id),
        role=membership.role.value,
        activated=membership.activated,
    )
    return membership, user
