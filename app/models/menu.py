"""Menu-related models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, JSON, Text, Uuid
from sqlalchemy.orm import relationship

from app.database import Base


class Menu(Base):
    """A named menu of a restaurant"""
    __tablename__ = "menus"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(Uuid, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    hours_active = Column(JSON)  # same shape as Restaurant.opening_hours
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    restaurant = relationship("Restaurant", back_populates="menus")
    sections = relationship(
        "MenuSection",
        back_populates="menu",
        passive_deletes=True,
        order_by="[MenuSection.display_order, MenuSection.name, MenuSection.created_at]",
    )


class MenuSection(Base):
    """Section of a menu (Starters, Mains, ...)"""
    __tablename__ = "menu_sections"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    menu_id = Column(Uuid, ForeignKey("menus.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    menu = relationship("Menu", back_populates="sections")
    items = relationship(
        "MenuItem",
        back_populates="section",
        passive_deletes=True,
        order_by="[MenuItem.display_order, MenuItem.name, MenuItem.created_at]",
    )


class MenuItem(Base):
    """Menu items"""
    __tablename__ = "menu_items"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    section_id = Column(Uuid, ForeignKey("menu_sections.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price_cents = Column(Integer, nullable=False)  # Price in cents to avoid float issues
    display_order = Column(Integer, nullable=False, default=0)
    preparation_time = Column(Integer)  # minutes
    ingredients = Column(JSON, default=list)
    allergens = Column(JSON, default=list)
    # {"vegetarian": false, "vegan": false, "gluten_free": false, "dairy_free": false}
    dietary_flags = Column(JSON, default=dict)
    image = Column(String(255))
    is_available = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    section = relationship("MenuSection", back_populates="items")
    modifiers = relationship(
        "ItemModifier",
        back_populates="menu_item",
        passive_deletes=True,
        order_by="[ItemModifier.created_at, ItemModifier.name]",
    )


class ItemModifier(Base):
    """Modifiers/options for menu items"""
    __tablename__ = "item_modifiers"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    menu_item_id = Column(Uuid, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    price_adjustment_cents = Column(Integer, nullable=False, default=0)
    is_default = Column(Boolean, default=False)  # shown in the UI, never auto-selected
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    menu_item = relationship("MenuItem", back_populates="modifiers")
