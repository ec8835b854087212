"""Order schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field

from app.models.order import OrderLocation


class OrderItemCreate(BaseModel):
    """One cart line"""
    menu_item_id: UUID
    modifier_ids: List[UUID] = []
    special_instructions: Optional[str] = None


class OrderCreate(BaseModel):
    """Place order request"""
    location: OrderLocation
    table_number: Optional[int] = Field(None, ge=1)
    name: Optional[str] = None
    phone: Optional[str] = Field(None, pattern=r"^[0-9]{10}$")
    items: List[OrderItemCreate]


class OrderModifierResponse(BaseModel):
    """Selected modifier on an order item"""
    id: UUID
    name: str
    price_adjustment_cents: int


class OrderMenuItemResponse(BaseModel):
    id: UUID
    name: str
    price_cents: int
    description: Optional[str]


class OrderItemResponse(BaseModel):
    """Order item in response"""
    id: UUID
    menu_item: OrderMenuItemResponse
    special_instructions: Optional[str]
    modifiers: List[OrderModifierResponse]
    line_total_cents: int
    created_at: datetime


class OrderStaffResponse(BaseModel):
    id: UUID
    name: Optional[str]
    email: str


class OrderResponse(BaseModel):
    """Order response"""
    id: UUID
    restaurant_id: UUID
    location: OrderLocation
    table_number: Optional[int]
    name: Optional[str]
    phone: Optional[str]
    staff: OrderStaffResponse
    items: List[OrderItemResponse]
    total_cents: int
    total_display: str
    summary: str
    created_at: datetime
    updated_at: datetime
