"""
Access resolution for restaurant-scoped operations.

Every entity below a restaurant (menu, section, item, modifier, order, staff
membership) is walked up to its owning restaurant, then the acting user's
membership in that restaurant is checked against the roles the operation
accepts.
"""

import enum
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Tuple
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.menu import Menu, MenuSection, MenuItem, ItemModifier
from app.models.order import Order
from app.models.restaurant import Restaurant, RestaurantStaff, StaffRole
from app.services.errors import ForbiddenError, NotFoundError

logger = structlog.get_logger()


ALL_ROLES: FrozenSet[StaffRole] = frozenset(StaffRole)
MENU_EDITORS: FrozenSet[StaffRole] = frozenset({StaffRole.OWNER, StaffRole.MANAGER})
ORDER_TAKERS: FrozenSet[StaffRole] = frozenset({StaffRole.OWNER, StaffRole.MANAGER, StaffRole.SERVER})


@dataclass
class RequestContext:
    """Acting user and database session for one unit of work"""
    user_id: UUID
    db: AsyncSession


class EntityKind(str, enum.Enum):
    RESTAURANT = "restaurant"
    MENU = "menu"
    SECTION = "section"
    ITEM = "item"
    MODIFIER = "modifier"
    ORDER = "order"
    STAFF = "staff"


@dataclass(frozen=True)
class EntityRef:
    kind: EntityKind
    id: UUID


# kind -> (model, parent column, parent kind, not-found message)
_PARENT_LINKS = {
    EntityKind.MODIFIER: (ItemModifier, ItemModifier.menu_item_id, EntityKind.ITEM, "Modifier not found"),
    EntityKind.ITEM: (MenuItem, MenuItem.section_id, EntityKind.SECTION, "Menu item not found"),
    EntityKind.SECTION: (MenuSection, MenuSection.menu_id, EntityKind.MENU, "Section not found"),
    EntityKind.MENU: (Menu, Menu.restaurant_id, EntityKind.RESTAURANT, "Menu not found"),
    EntityKind.ORDER: (Order, Order.restaurant_id, EntityKind.RESTAURANT, "Order not found"),
    EntityKind.STAFF: (RestaurantStaff, RestaurantStaff.restaurant_id, EntityKind.RESTAURANT, "Staff member not found"),
}


async def resolve_restaurant_id(db: AsyncSession, ref: EntityRef) -> UUID:
    """Walk parent references from ``ref`` up to the owning restaurant id.

    Raises NotFoundError naming the first link that does not resolve.
    """
    current = ref
    while current.kind != EntityKind.RESTAURANT:
        model, parent_column, parent_kind, missing = _PARENT_LINKS[current.kind]
        result = await db.execute(select(parent_column).where(model.id == current.id))
        parent_id = result.scalar_one_or_none()
        if parent_id is None:
            raise NotFoundError(missing)
        current = EntityRef(parent_kind, parent_id)

    result = await db.execute(select(Restaurant.id).where(Restaurant.id == current.id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Restaurant not found")
    return current.id


async def require_membership(
    ctx: RequestContext,
    restaurant_id: UUID,
    required_roles: Iterable[StaffRole] = ALL_ROLES,
) -> RestaurantStaff:
    """Return the caller's activated membership if its role is accepted"""
    result = await ctx.db.execute(
        select(RestaurantStaff).where(
            RestaurantStaff.user_id == ctx.user_id,
            RestaurantStaff.restaurant_id == restaurant_id,
        )
    )
    memberships = result.scalars().all()
    if len(memberships) > 1:
        # uq_restaurant_staff_member was bypassed
        logger.error("Duplicate staff membership", user_id=str(ctx.user_id), restaurant_id=str(restaurant_id))
        raise ForbiddenError()

    # An unactivated membership looks exactly like no membership.
    if not memberships or not memberships[0].activated:
        raise ForbiddenError("You don't have access to this restaurant")

    membership = memberships[0]
    if membership.role not in frozenset(required_roles):
        raise ForbiddenError("You don't have permission to perform this action")
    return membership


async def check_access(
    ctx: RequestContext,
    restaurant_id: UUID,
    required_roles: Iterable[StaffRole] = ALL_ROLES,
) -> StaffRole:
    """Check the caller may act on ``restaurant_id``; return their role"""
    membership = await require_membership(ctx, restaurant_id, required_roles)
    return membership.role


async def authorize(
    ctx: RequestContext,
    ref: EntityRef,
    required_roles: Iterable[StaffRole] = ALL_ROLES,
) -> Tuple[UUID, StaffRole]:
    """Resolve the owning restaurant of ``ref`` and check access to it"""
    restaurant_id = await resolve_restaurant_id(ctx.db, ref)
    role = await check_access(ctx, restaurant_id, required_roles)
    return restaurant_id, role
