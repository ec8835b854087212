"""
Menu operations: menus, sections, items and modifiers.

Reads accept any activated staff role; structural writes need an owner or
manager. Deletes cascade down the hierarchy, except that items and modifiers
referenced by placed orders are never removed; such deletes are refused.
"""

from typing import List, Sequence, Tuple
from uuid import UUID

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.orm import selectinload

from app.models.menu import Menu, MenuSection, MenuItem, ItemModifier
from app.models.order import OrderItem, order_item_modifiers
from app.models.restaurant import StaffRole
from app.schemas.menu import (
    MenuCreate,
    MenuUpdate,
    SectionCreate,
    SectionUpdate,
    MenuItemCreate,
    MenuItemUpdate,
    ModifierCreate,
    ModifierUpdate,
)
from app.services.access import (
    ALL_ROLES,
    MENU_EDITORS,
    EntityKind,
    EntityRef,
    RequestContext,
    authorize,
    check_access,
)
from app.services.errors import UnprocessableError, guarded

logger = structlog.get_logger()


def _apply(entity, data) -> None:
    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(entity, field, value)


async def _load_menu(ctx: RequestContext, menu_id: UUID, with_sections: bool = False) -> Menu:
    query = select(Menu).where(Menu.id == menu_id)
    if with_sections:
        query = query.options(
            selectinload(Menu.sections)
            .selectinload(MenuSection.items)
            .selectinload(MenuItem.modifiers)
        ).execution_options(populate_existing=True)
    result = await ctx.db.execute(query)
    return result.scalar_one()


async def _load_section(ctx: RequestContext, section_id: UUID) -> MenuSection:
    result = await ctx.db.execute(
        select(MenuSection)
        .where(MenuSection.id == section_id)
        .options(selectinload(MenuSection.items).selectinload(MenuItem.modifiers))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def _load_item(ctx: RequestContext, item_id: UUID) -> MenuItem:
    result = await ctx.db.execute(
        select(MenuItem)
        .where(MenuItem.id == item_id)
        .options(selectinload(MenuItem.modifiers))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def _load_modifier(ctx: RequestContext, modifier_id: UUID) -> ItemModifier:
    result = await ctx.db.execute(select(ItemModifier).where(ItemModifier.id == modifier_id))
    return result.scalar_one()


async def _delete_items(ctx: RequestContext, item_ids: Sequence[UUID]) -> None:
    """Delete items and their modifiers; refuse if any item was ordered"""
    if not item_ids:
        return
    result = await ctx.db.execute(
        select(func.count(OrderItem.id)).where(OrderItem.menu_item_id.in_(item_ids))
    )
    if result.scalar():
        raise UnprocessableError("Menu items that appear in placed orders cannot be removed")

    await ctx.db.execute(delete(ItemModifier).where(ItemModifier.menu_item_id.in_(item_ids)))
    await ctx.db.execute(delete(MenuItem).where(MenuItem.id.in_(item_ids)))


async def _delete_sections(ctx: RequestContext, section_ids: Sequence[UUID]) -> None:
    if not section_ids:
        return
    result = await ctx.db.execute(select(MenuItem.id).where(MenuItem.section_id.in_(section_ids)))
    await _delete_items(ctx, result.scalars().all())
    await ctx.db.execute(delete(MenuSection).where(MenuSection.id.in_(section_ids)))


# Menus

@guarded("Failed to fetch menus")
async def list_menus(ctx: RequestContext, restaurant_id: UUID) -> List[Menu]:
    await check_access(ctx, restaurant_id, ALL_ROLES)
    result = await ctx.db.execute(
        select(Menu).where(Menu.restaurant_id == restaurant_id).order_by(Menu.name)
    )
    return result.scalars().all()


@guarded("Failed to fetch menu")
async def get_menu(ctx: RequestContext, menu_id: UUID) -> Tuple[Menu, StaffRole]:
    """Menu with sections, items and modifiers in display order"""
    _, role = await authorize(ctx, EntityRef(EntityKind.MENU, menu_id), ALL_ROLES)
    return await _load_menu(ctx, menu_id, with_sections=True), role


@guarded("Failed to create menu")
async def add_menu(ctx: RequestContext, restaurant_id: UUID, data: MenuCreate) -> Menu:
    await check_access(ctx, restaurant_id, MENU_EDITORS)
    menu = Menu(restaurant_id=restaurant_id, **data.model_dump())
    ctx.db.add(menu)
    await ctx.db.commit()
    logger.info("Menu created", restaurant_id=str(restaurant_id), menu_id=str(menu.id))
    return menu


@guarded("Failed to update menu")
async def modify_menu(ctx: RequestContext, menu_id: UUID, data: MenuUpdate) -> Menu:
    await authorize(ctx, EntityRef(EntityKind.MENU, menu_id), MENU_EDITORS)
    menu = await _load_menu(ctx, menu_id)
    _apply(menu, data)
    await ctx.db.commit()
    return menu


@guarded("Failed to delete menu")
async def delete_menu(ctx: RequestContext, menu_id: UUID) -> None:
    restaurant_id, _ = await authorize(ctx, EntityRef(EntityKind.MENU, menu_id), MENU_EDITORS)
    result = await ctx.db.execute(select(MenuSection.id).where(MenuSection.menu_id == menu_id))
    await _delete_sections(ctx, result.scalars().all())
    await ctx.db.execute(delete(Menu).where(Menu.id == menu_id))
    await ctx.db.commit()
    logger.info("Menu deleted", restaurant_id=str(restaurant_id), menu_id=str(menu_id))


# Sections

@guarded("Failed to create section")
async def add_section(ctx: RequestContext, menu_id: UUID, data: SectionCreate) -> MenuSection:
    await authorize(ctx, EntityRef(EntityKind.MENU, menu_id), MENU_EDITORS)
    section = MenuSection(menu_id=menu_id, **data.model_dump())
    ctx.db.add(section)
    await ctx.db.commit()
    return await _load_section(ctx, section.id)


@guarded("Failed to update section")
async def modify_section(ctx: RequestContext, section_id: UUID, data: SectionUpdate) -> MenuSection:
    await authorize(ctx, EntityRef(EntityKind.SECTION, section_id), MENU_EDITORS)
    section = await _load_section(ctx, section_id)
    _apply(section, data)
    await ctx.db.commit()
    return section


@guarded("Failed to remove section")
async def remove_section(ctx: RequestContext, section_id: UUID) -> None:
    await authorize(ctx, EntityRef(EntityKind.SECTION, section_id), MENU_EDITORS)
    await _delete_sections(ctx, [section_id])
    await ctx.db.commit()
    logger.info("Section removed", section_id=str(section_id))


# Items

@guarded("Failed to fetch menu item")
async def get_item(ctx: RequestContext, item_id: UUID) -> MenuItem:
    await authorize(ctx, EntityRef(EntityKind.ITEM, item_id), ALL_ROLES)
    return await _load_item(ctx, item_id)


@guarded("Failed to create menu item")
async def add_item(ctx: RequestContext, section_id: UUID, data: MenuItemCreate) -> MenuItem:
    await authorize(ctx, EntityRef(EntityKind.SECTION, section_id), MENU_EDITORS)
    item = MenuItem(section_id=section_id, **data.model_dump())
    ctx.db.add(item)
    await ctx.db.commit()
    return await _load_item(ctx, item.id)


@guarded("Failed to update menu item")
async def modify_item(ctx: RequestContext, item_id: UUID, data: MenuItemUpdate) -> MenuItem:
    await authorize(ctx, EntityRef(EntityKind.ITEM, item_id), MENU_EDITORS)
    item = await _load_item(ctx, item_id)
    _apply(item, data)
    await ctx.db.commit()
    return item


@guarded("Failed to remove menu item")
async def remove_item(ctx: RequestContext, item_id: UUID) -> None:
    await authorize(ctx, EntityRef(EntityKind.ITEM, item_id), MENU_EDITORS)
    await _delete_items(ctx, [item_id])
    await ctx.db.commit()
    logger.info("Menu item removed", item_id=str(item_id))


# Modifiers

@guarded("Failed to create modifier")
async def add_modifier(ctx: RequestContext, item_id: UUID, data: ModifierCreate) -> ItemModifier:
    await authorize(ctx, EntityRef(EntityKind.ITEM, item_id), MENU_EDITORS)
    modifier = ItemModifier(menu_item_id=item_id, **data.model_dump())
    ctx.db.add(modifier)
    await ctx.db.commit()
    return modifier


@guarded("Failed to update modifier")
async def modify_modifier(ctx: RequestContext, modifier_id: UUID, data: ModifierUpdate) -> ItemModifier:
    await authorize(ctx, EntityRef(EntityKind.MODIFIER, modifier_id), MENU_EDITORS)
    modifier = await _load_modifier(ctx, modifier_id)
    _apply(modifier, data)
    await ctx.db.commit()
    return modifier


@guarded("Failed to remove modifier")
async def remove_modifier(ctx: RequestContext, modifier_id: UUID) -> None:
    await authorize(ctx, EntityRef(EntityKind.MODIFIER, modifier_id), MENU_EDITORS)
    result = await ctx.db.execute(
        select(func.count()).select_from(order_item_modifiers).where(
            order_item_modifiers.c.modifier_id == modifier_id
        )
    )
    if result.scalar():
        raise UnprocessableError("Modifiers that appear in placed orders cannot be removed")
    await ctx.db.execute(delete(ItemModifier).where(ItemModifier.id == modifier_id))
    await ctx.db.commit()
