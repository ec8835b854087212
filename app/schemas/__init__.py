"""Pydantic schemas for request/response validation"""

from app.schemas.auth import (
    Token,
    TokenPayload,
    RefreshRequest,
    UserCreate,
    UserResponse,
)
from app.schemas.restaurant import (
    TimeRange,
    WeeklyHours,
    RestaurantCreate,
    RestaurantUpdate,
    RestaurantResponse,
    RestaurantWithRole,
    StaffCreate,
    StaffUpdate,
    StaffResponse,
)
from app.schemas.menu import (
    DietaryFlags,
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
from app.schemas.order import (
    OrderCreate,
    OrderItemCreate,
    OrderItemResponse,
    OrderResponse,
)

__all__ = [
    "Token",
    "TokenPayload",
    "RefreshRequest",
    "UserCreate",
    "UserResponse",
    "TimeRange",
    "WeeklyHours",
    "RestaurantCreate",
    "RestaurantUpdate",
    "RestaurantResponse",
    "RestaurantWithRole",
    "StaffCreate",
    "StaffUpdate",
    "StaffResponse",
    "DietaryFlags",
    "MenuCreate",
    "MenuUpdate",
    "MenuSummary",
    "MenuResponse",
    "SectionCreate",
    "SectionUpdate",
    "SectionResponse",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuItemResponse",
    "ModifierCreate",
    "ModifierUpdate",
    "ModifierResponse",
    "OrderCreate",
    "OrderItemCreate",
    "OrderItemResponse",
    "OrderResponse",
]
