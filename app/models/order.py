"""Order models"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Enum, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from app.database import Base


class OrderLocation(str, enum.Enum):
    """Where the order is served"""
    TABLE = "table"
    TO_GO = "to_go"


class Order(Base):
    """Orders taken by restaurant staff"""
    __tablename__ = "orders"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(Uuid, ForeignKey("restaurants.id"), nullable=False, index=True)
    restaurant_staff_id = Column(Uuid, ForeignKey("restaurant_staff.id"), nullable=False)
    
    location = Column(Enum(OrderLocation), nullable=False)
    table_number = Column(Integer)
    
    # To-go customer
    name = Column(String(255))
    phone = Column(String(20))
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    restaurant = relationship("Restaurant", back_populates="orders")
    staff = relationship("RestaurantStaff")
    items = relationship("OrderItem", back_populates="order", order_by="OrderItem.created_at")


class OrderItem(Base):
    """One menu item within an order, with its selected modifiers"""
    __tablename__ = "order_items"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_item_id = Column(Uuid, ForeignKey("menu_items.id"), nullable=False)
    restaurant_staff_id = Column(Uuid, ForeignKey("restaurant_staff.id"), nullable=False)
    special_instructions = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    order = relationship("Order", back_populates="items")
    menu_item = relationship("MenuItem")
    selections = relationship(
        "OrderItemModifier",
        back_populates="order_item",
        cascade="all, delete-orphan",
        order_by="OrderItemModifier.position",
    )

    @property
    def modifiers(self):
        """Selected modifiers in the order they were chosen"""
        return [selection.modifier for selection in self.selections]


class OrderItemModifier(Base):
    """A modifier selected on an order item"""
    __tablename__ = "order_item_modifiers"
    
    order_item_id = Column(Uuid, ForeignKey("order_items.id", ondelete="CASCADE"), primary_key=True)
    modifier_id = Column(Uuid, ForeignKey("item_modifiers.id"), primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    
    order_item = relationship("OrderItem", back_populates="selections")
    modifier = relationship("ItemModifier")


order_item_modifiers = OrderItemModifier.__table__
