"""Restaurant and staff API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.models.restaurant import Restaurant, RestaurantStaff, StaffRole
from app.models.user import User
from app.schemas.restaurant import (
    RestaurantCreate,
    RestaurantUpdate,
    RestaurantResponse,
    RestaurantWithRole,
    StaffCreate,
    StaffUpdate,
    StaffResponse,
)
from app.services import restaurant_service, staff_service
from app.services.access import RequestContext
from app.api.auth import get_request_context

router = APIRouter()
staff_router = APIRouter()


def _with_role(restaurant: Restaurant, role, membership: RestaurantStaff = None) -> RestaurantWithRole:
    return RestaurantWithRole(
        **RestaurantResponse.model_validate(restaurant).model_dump(),
        role=role,
        staff_id=membership.id if membership else None,
        activated=membership.activated if membership else None,
    )


def _staff(membership: RestaurantStaff, user: User) -> StaffResponse:
    return StaffResponse(
        id=membership.id,
        restaurant_id=membership.restaurant_id,
        user_id=user.id,
        email=user.email,
        full_name=user.full_name,
        role=membership.role,
        activated=membership.activated,
        created_at=membership.created_at,
    )


@router.get("", response_model=List[RestaurantWithRole])
async def list_restaurants(ctx: RequestContext = Depends(get_request_context)):
    """Restaurants the current user belongs to"""
    rows = await restaurant_service.list_restaurants(ctx)
    return [_with_role(restaurant, membership.role, membership) for restaurant, membership in rows]


@router.post("", response_model=RestaurantWithRole, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    restaurant_data: RestaurantCreate,
    ctx: RequestContext = Depends(get_request_context),
):
    """Create a restaurant owned by the current user"""
    restaurant = await restaurant_service.create_restaurant(ctx, restaurant_data)
    return _with_role(restaurant, StaffRole.OWNER)


@router.get("/{restaurant_id}", response_model=RestaurantWithRole)
async def get_restaurant(
    restaurant_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
):
    """Get restaurant details with the caller's role"""
    restaurant, role = await restaurant_service.get_restaurant(ctx, restaurant_id)
    return _with_role(restaurant, role)


@router.put("/{restaurant_id}", response_model=RestaurantWithRole)
async def update_restaurant(
    restaurant_id: UUID,
    restaurant_data: RestaurantUpdate,
    ctx: RequestContext = Depends(get_request_context),
):
    """Update restaurant (owner or manager)"""
    restaurant, role = await restaurant_service.update_restaurant(ctx, restaurant_id, restaurant_data)
    return _with_role(restaurant, role)


@router.get("/{restaurant_id}/staff", response_model=List[StaffResponse])
async def list_staff(
    restaurant_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
):
    """List staff memberships"""
    rows = await staff_service.list_staff(ctx, restaurant_id)
    return [_staff(membership, user) for membership, user in rows]


@router.post("/{restaurant_id}/staff", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
async def add_staff(
    restaurant_id: UUID,
    staff_data: StaffCreate,
    ctx: RequestContext = Depends(get_request_context),
):
    """Add an existing user to the restaurant staff"""
    membership, user = await staff_service.add_staff(ctx, restaurant_id, staff_data)
    return _staff(membership, user)


@staff_router.put("/{staff_id}", response_model=StaffResponse)
async def update_staff(
    staff_id: UUID,
    staff_data: StaffUpdate,
    ctx: RequestContext = Depends(get_request_context),
):
    """Change a member's role or activation"""
    membership, user = await staff_service.modify_staff(ctx, staff_id, staff_data)
    return _staff(membership, user)
