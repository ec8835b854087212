"""Menu schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field

from app.schemas.restaurant import WeeklyHours


class DietaryFlags(BaseModel):
    vegetarian: bool = False
    vegan: bool = False
    gluten_free: bool = False
    dairy_free: bool = False


class ModifierCreate(BaseModel):
    """Create item modifier"""
    name: str = Field(..., min_length=1, max_length=100)
    price_adjustment_cents: int = 0
    is_default: bool = False


class ModifierUpdate(BaseModel):
    """Update item modifier"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    price_adjustment_cents: Optional[int] = None
    is_default: Optional[bool] = None


class ModifierResponse(BaseModel):
    """Item modifier response"""
    id: UUID
    menu_item_id: UUID
    name: str
    price_adjustment_cents: int
    is_default: bool

    class Config:
        from_attributes = True


class MenuItemCreate(BaseModel):
    """Create menu item request"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price_cents: int = Field(..., ge=0)
    display_order: int = Field(0, ge=0)
    preparation_time: Optional[int] = Field(None, ge=0)
    ingredients: List[str] = []
    allergens: List[str] = []
    dietary_flags: DietaryFlags = DietaryFlags()
    image: Optional[str] = None
    is_available: bool = True


class MenuItemUpdate(BaseModel):
    """Update menu item request"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price_cents: Optional[int] = Field(None, ge=0)
    display_order: Optional[int] = Field(None, ge=0)
    preparation_time: Optional[int] = Field(None, ge=0)
    ingredients: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    dietary_flags: Optional[DietaryFlags] = None
    image: Optional[str] = None
    is_available: Optional[bool] = None


class MenuItemResponse(BaseModel):
    """Menu item response"""
    id: UUID
    section_id: UUID
    name: str
    description: Optional[str]
    price_cents: int
    display_order: int
    preparation_time: Optional[int]
    ingredients: List[str]
    allergens: List[str]
    dietary_flags: DietaryFlags
    image: Optional[str]
    is_available: bool
    modifiers: List[ModifierResponse] = []

    class Config:
        from_attributes = True


class SectionCreate(BaseModel):
    """Create menu section request"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    display_order: int = Field(0, ge=0)


class SectionUpdate(BaseModel):
    """Update menu section request"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    display_order: Optional[int] = Field(None, ge=0)


class SectionResponse(BaseModel):
    """Menu section response"""
    id: UUID
    menu_id: UUID
    name: str
    description: Optional[str]
    display_order: int
    items: List[MenuItemResponse] = []

    class Config:
        from_attributes = True


class MenuCreate(BaseModel):
    """Create menu request"""
    name: str = Field(..., min_length=1, max_length=100)
    hours_active: Optional[WeeklyHours] = None


class MenuUpdate(BaseModel):
    """Update menu request"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    hours_active: Optional[WeeklyHours] = None


class MenuSummary(BaseModel):
    """Menu without its sections"""
    id: UUID
    restaurant_id: UUID
    name: str
    hours_active: Optional[WeeklyHours]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MenuResponse(MenuSummary):
    """Full menu: sections, items and modifiers in display order"""
    sections: List[SectionResponse] = []
