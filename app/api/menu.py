"""Menu management API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from app.schemas.menu import (
    MenuCreate,
    MenuUpdate,
    MenuSummary,
    MenuResponse,
    SectionCreate,
    SectionUpdate,
    SectionResponse,
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemResponse,
    ModifierCreate,
    ModifierUpdate,
    ModifierResponse,
)
from app.services import menu_service
from app.services.access import RequestContext
from app.api.auth import get_request_context

router = APIRouter()


@router.get("/restaurants/{restaurant_id}/menus", response_model=List[MenuSummary])
async def list_menus(
    restaurant_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
):
    """List a restaurant's menus"""
    return await menu_service.list_menus(ctx, restaurant_id)


@router.post("/restaurants/{restaurant_id}/menus", response_model=MenuSummary, status_code=201)
async def add_menu(
    restaurant_id: UUID,
    menu_data: MenuCreate,
    ctx: RequestContext = Depends(get_request_context),
):
    """Create a menu"""
    return await menu_service.add_menu(ctx, restaurant_id, menu_data)


@router.get("/menus/{menu_id}", response_model=MenuResponse)
async def get_menu(
    menu_id: UUID,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
):
    """Get a menu with its sections, items and modifiers"""
    menu, role = await menu_service.get_menu(ctx, menu_id)
    response.headers["X-Staff-Role"] = role.value
    return menu


@router.put("/menus/{menu_id}", response_model=MenuSummary)
async def modify_menu(
    menu_id: UUID,
    menu_data: MenuUpdate,
    ctx: RequestContext = Depends(get_request_context),
):
    """Update a menu"""
    return await menu_service.modify_menu(ctx, menu_id, menu_data)


@router.delete("/menus/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu(
    menu_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
):
    """Delete a menu with all its sections, items and modifiers"""
    await menu_service.delete_menu(ctx, menu_id)


@router.post("/menus/{menu_id}/sections", response_model=SectionResponse, status_code=201)
async def add_section(
    menu_id: UUID,
    section_data: SectionCreate,
    ctx: RequestContext = Depends(get_request_context),
):
    return await menu_service.add_section(ctx, menu_id, section_data)


@router.put("/sections/{section_id}", response_model=SectionResponse)
async def modify_section(
    section_id: UUID,
    section_data: SectionUpdate,
    ctx: RequestContext = Depends(get_request_context),
):
    return await menu_service.modify_section(ctx, section_id, section_data)


@router.delete("/sections/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_section(
    section_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
):
    """Delete a section with its items and modifiers"""
    await menu_service.remove_section(ctx, section_id)


@router.post("/sections/{section_id}/items", response_model=MenuItemResponse, status_code=201)
async def add_item(
    section_id: UUID,
    item_data: MenuItemCreate,
    ctx: RequestContext = Depends(get_request_context),
):
    return await menu_service.add_item(ctx, section_id, item_data)


@router.get("/items/{item_id}", response_model=MenuItemResponse)
async def get_item(
    item_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
):
    return await menu_service.get_item(ctx, item_id)


@router.put("/items/{item_id}", response_model=MenuItemResponse)
async def modify_item(
    item_id: UUID,
    item_data: MenuItemUpdate,
    ctx: RequestContext = Depends(get_request_context),
):
    return await menu_service.modify_item(ctx, item_id, item_data)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_item(
    item_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
):
    """Delete a menu item with its modifiers"""
    await menu_service.remove_item(ctx, item_id)


@router.post("/items/{item_id}/modifiers", response_model=ModifierResponse, status_code=201)
async def add_modifier(
    item_id: UUID,
    modifier_data: ModifierCreate,
    ctx: RequestContext = Depends(get_request_context),
):
    return await menu_service.add_modifier(ctx, item_id, modifier_data)


@router.put("/modifiers/{modifier_id}", response_model=ModifierResponse)
async def modify_modifier(
    modifier_id: UUID,
    modifier_data: ModifierUpdate,
    ctx: RequestContext = Depends(get_request_context),
):
    return await menu_service.modify_modifier(ctx, modifier_id, modifier_data)


@router.delete("/modifiers/{modifier_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_modifier(
    modifier_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
):
    await menu_service.remove_modifier(ctx, modifier_id)
