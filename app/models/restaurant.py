"""Restaurant and staff membership models"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    JSON,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from app.database import Base


WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def closed_all_week() -> dict:
    return {day: [] for day in WEEKDAYS}


class StaffRole(str, enum.Enum):
    """Per-restaurant roles"""
    OWNER = "owner"
    MANAGER = "manager"
    SERVER = "server"
    KITCHEN = "kitchen"


class Restaurant(Base):
    """A restaurant, owned by the user who created it"""
    __tablename__ = "restaurants"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(100))
    address = Column(Text)
    phone = Column(String(20))
    email = Column(String(255))
    tax_rate = Column(Float, default=0.0)
    
    # {"monday": [{"open_hour": 9, "open_minute": 0, "close_hour": 17, "close_minute": 30}], ...}
    # An empty list means closed that day.
    opening_hours = Column(JSON, default=closed_all_week)
    
    created_by_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    staff = relationship("RestaurantStaff", back_populates="restaurant")
    menus = relationship("Menu", back_populates="restaurant")
    orders = relationship("Order", back_populates="restaurant")


class RestaurantStaff(Base):
    """Membership granting a user a role within one restaurant"""
    __tablename__ = "restaurant_staff"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "user_id", name="uq_restaurant_staff_member"),
    )
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(Uuid, ForeignKey("restaurants.id"), nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    role = Column(Enum(StaffRole), nullable=False, default=StaffRole.SERVER)
    activated = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    restaurant = relationship("Restaurant", back_populates="staff")
    user = relationship("User", back_populates="memberships")
