"""Database models"""

from app.models.user import User
from app.models.restaurant import Restaurant, RestaurantStaff, StaffRole
from app.models.menu import Menu, MenuSection, MenuItem, ItemModifier
from app.models.order import Order, OrderItem, OrderItemModifier, OrderLocation, order_item_modifiers

__all__ = [
    "User",
    "Restaurant",
    "RestaurantStaff",
    "StaffRole",
    "Menu",
    "MenuSection",
    "MenuItem",
    "ItemModifier",
    "Order",
    "OrderItem",
    "OrderItemModifier",
    "OrderLocation",
    "order_item_modifiers",
]
