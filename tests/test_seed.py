"""Tests for the demo seed script"""

import pytest
from sqlalchemy import func, select

from app.models.menu import MenuItem, ItemModifier
from app.models.restaurant import RestaurantStaff, StaffRole
from scripts.seed_demo import MENU, seed_demo_data


@pytest.mark.asyncio
async def test_seed_builds_demo_restaurant(test_db):
    restaurant = await seed_demo_data(test_db)

    assert restaurant is not None
    result = await test_db.execute(
        select(RestaurantStaff.role).where(RestaurantStaff.restaurant_id == restaurant.id)
    )
    assert sorted(role.value for role in result.scalars()) == [StaffRole.OWNER.value, StaffRole.SERVER.value]

    result = await test_db.execute(select(func.count()).select_from(MenuItem))
    assert result.scalar() == sum(len(items) for items in MENU.values())
    result = await test_db.execute(select(func.count()).select_from(ItemModifier))
    assert result.scalar() == sum(
        len(modifiers) for items in MENU.values() for _, modifiers in items
    )


@pytest.mark.asyncio
async def test_seed_is_idempotent(test_db):
    await seed_demo_data(test_db)

    assert await seed_demo_data(test_db) is None
