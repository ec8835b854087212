"""Tests for restaurant and staff operations"""

import pytest
from sqlalchemy import func, select
from uuid import uuid4

from app.models.restaurant import Restaurant, RestaurantStaff, StaffRole
from app.schemas.restaurant import RestaurantCreate, RestaurantUpdate, StaffCreate, StaffUpdate
from app.services import restaurant_service, staff_service
from app.services.errors import ForbiddenError, InternalError, NotFoundError, UnprocessableError

from conftest import add_member, make_user


def new_restaurant(**overrides) -> RestaurantCreate:
    fields = {
        "name": "Corner Cafe",
        "type": "Cafe",
        "address": "1 Main St",
        "phone": "5551112222",
        "email": "cafe@example.com",
        "tax_rate": 8.25,
    }
    fields.update(overrides)
    return RestaurantCreate(**fields)


@pytest.mark.asyncio
async def test_create_makes_caller_activated_owner(context_for, test_db, outsider):
    restaurant = await restaurant_service.create_restaurant(context_for(outsider), new_restaurant())

    result = await test_db.execute(
        select(RestaurantStaff).where(RestaurantStaff.restaurant_id == restaurant.id)
    )
    memberships = result.scalars().all()
    assert len(memberships) == 1
    assert memberships[0].user_id == outsider.id
    assert memberships[0].role == StaffRole.OWNER
    assert memberships[0].activated is True
    assert restaurant.created_by_id == outsider.id
    assert restaurant.opening_hours["monday"] == []


@pytest.mark.asyncio
async def test_list_only_own_restaurants_by_name(context_for, test_restaurant, outsider):
    ctx = context_for(outsider)
    await restaurant_service.create_restaurant(ctx, new_restaurant(name="Zeta Diner"))
    await restaurant_service.create_restaurant(ctx, new_restaurant(name="Alpha Grill"))

    listed = await restaurant_service.list_restaurants(context_for(outsider))

    assert [restaurant.name for restaurant, _ in listed] == ["Alpha Grill", "Zeta Diner"]
    assert all(membership.role == StaffRole.OWNER for _, membership in listed)


@pytest.mark.asyncio
async def test_get_restaurant_returns_role(context_for, test_restaurant, staff_user):
    kitchen = await staff_user(StaffRole.KITCHEN)

    restaurant, role = await restaurant_service.get_restaurant(context_for(kitchen), test_restaurant.id)

    assert restaurant.name == "Test Restaurant"
    assert role == StaffRole.KITCHEN


@pytest.mark.asyncio
async def test_get_unknown_restaurant_is_forbidden(context_for, owner):
    with pytest.raises(ForbiddenError):
        await restaurant_service.get_restaurant(context_for(owner), uuid4())


@pytest.mark.asyncio
async def test_update_is_partial(context_for, test_restaurant, owner):
    restaurant, role = await restaurant_service.update_restaurant(
        context_for(owner), test_restaurant.id, RestaurantUpdate(tax_rate=9.5)
    )

    assert role == StaffRole.OWNER
    assert restaurant.tax_rate == 9.5
    assert restaurant.name == "Test Restaurant"
    assert restaurant.address == "123 Test St"


@pytest.mark.asyncio
async def test_update_ignores_null_fields(context_for, test_restaurant, owner):
    restaurant, _ = await restaurant_service.update_restaurant(
        context_for(owner), test_restaurant.id, RestaurantUpdate(name=None, type=None, tax_rate=7.0)
    )

    assert (restaurant.name, restaurant.type, restaurant.tax_rate) == ("Test Restaurant", "Bistro", 7.0)


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [StaffRole.SERVER, StaffRole.KITCHEN])
async def test_update_requires_manager(context_for, test_restaurant, staff_user, role):
    user = await staff_user(role)

    with pytest.raises(ForbiddenError, match="permission"):
        await restaurant_service.update_restaurant(
            context_for(user), test_restaurant.id, RestaurantUpdate(name="Renamed")
        )


@pytest.mark.asyncio
async def test_add_staff_by_email(context_for, test_restaurant, owner, outsider):
    membership, user = await staff_service.add_staff(
        context_for(owner), test_restaurant.id, StaffCreate(email=outsider.email, role=StaffRole.KITCHEN)
    )

    assert user.id == outsider.id
    assert (membership.role, membership.activated) == (StaffRole.KITCHEN, True)

    staff = await staff_service.list_staff(context_for(outsider), test_restaurant.id)
    assert {user.email for _, user in staff} == {owner.email, outsider.email}


@pytest.mark.asyncio
async def test_add_staff_twice_rejected(context_for, test_restaurant, owner, outsider):
    data = StaffCreate(email=outsider.email)
    await staff_service.add_staff(context_for(owner), test_restaurant.id, data)

    with pytest.raises(UnprocessableError, match="already a staff member"):
        await staff_service.add_staff(context_for(owner), test_restaurant.id, data)


@pytest.mark.asyncio
async def test_add_unknown_user(context_for, test_restaurant, owner):
    with pytest.raises(NotFoundError, match="User not found"):
        await staff_service.add_staff(
            context_for(owner), test_restaurant.id, StaffCreate(email="nobody@example.com")
        )


@pytest.mark.asyncio
async def test_manager_cannot_grant_owner(context_for, test_restaurant, staff_user, outsider):
    manager = await staff_user(StaffRole.MANAGER)

    with pytest.raises(ForbiddenError, match="Only an owner"):
        await staff_service.add_staff(
            context_for(manager), test_restaurant.id, StaffCreate(email=outsider.email, role=StaffRole.OWNER)
        )


@pytest.mark.asyncio
async def test_activate_pending_member(context_for, test_db, test_restaurant, owner):
    pending = await make_user(test_db, "pending@example.com")
    membership = await add_member(test_db, test_restaurant, pending, StaffRole.SERVER, activated=False)

    with pytest.raises(ForbiddenError):
        await restaurant_service.get_restaurant(context_for(pending), test_restaurant.id)

    await staff_service.modify_staff(context_for(owner), membership.id, StaffUpdate(activated=True))

    _, role = await restaurant_service.get_restaurant(context_for(pending), test_restaurant.id)
    assert role == StaffRole.SERVER


@pytest.mark.asyncio
async def test_last_owner_is_kept(context_for, test_db, test_restaurant, owner):
    result = await test_db.execute(
        select(RestaurantStaff).where(RestaurantStaff.user_id == owner.id)
    )
    membership = result.scalar_one()

    with pytest.raises(UnprocessableError, match="at least one active owner"):
        await staff_service.modify_staff(
            context_for(owner), membership.id, StaffUpdate(role=StaffRole.MANAGER)
        )


@pytest.mark.asyncio
async def test_manager_cannot_demote_owner(context_for, test_db, test_restaurant, owner, staff_user):
    manager = await staff_user(StaffRole.MANAGER)
    result = await test_db.execute(
        select(RestaurantStaff).where(RestaurantStaff.user_id == owner.id)
    )
    membership = result.scalar_one()

    with pytest.raises(ForbiddenError):
        await staff_service.modify_staff(
            context_for(manager), membership.id, StaffUpdate(activated=False)
        )


@pytest.mark.asyncio
async def test_failed_create_leaves_no_rows(failing_context_for, test_db, outsider):
    with pytest.raises(InternalError, match="Failed to create restaurant"):
        await restaurant_service.create_restaurant(failing_context_for(outsider), new_restaurant())

    for model in (Restaurant, RestaurantStaff):
        result = await test_db.execute(select(func.count()).select_from(model))
        assert result.scalar() == 0
