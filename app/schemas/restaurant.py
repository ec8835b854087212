"""Restaurant and staff schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field, model_validator

from app.models.restaurant import StaffRole


class TimeRange(BaseModel):
    """One open period within a day"""
    open_hour: int = Field(..., ge=0, le=23)
    open_minute: int = Field(..., ge=0, le=59)
    close_hour: int = Field(..., ge=0, le=23)
    close_minute: int = Field(..., ge=0, le=59)


class WeeklyHours(BaseModel):
    """Opening hours per weekday; an empty list means closed"""
    monday: List[TimeRange] = []
    tuesday: List[TimeRange] = []
    wednesday: List[TimeRange] = []
    thursday: List[TimeRange] = []
    friday: List[TimeRange] = []
    saturday: List[TimeRange] = []
    sunday: List[TimeRange] = []


class RestaurantCreate(BaseModel):
    """Create restaurant request"""
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1)
    phone: str = Field(..., pattern=r"^[0-9]{10}$")
    email: EmailStr
    tax_rate: float = Field(0.0, ge=0)
    opening_hours: WeeklyHours = WeeklyHours()


class RestaurantUpdate(BaseModel):
    """Update restaurant request; only supplied fields change"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, pattern=r"^[0-9]{10}$")
    email: Optional[EmailStr] = None
    tax_rate: Optional[float] = Field(None, ge=0)
    opening_hours: Optional[WeeklyHours] = None


class RestaurantResponse(BaseModel):
    """Restaurant response"""
    id: UUID
    name: str
    type: Optional[str]
    address: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    tax_rate: float
    opening_hours: WeeklyHours
    created_by_id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RestaurantWithRole(RestaurantResponse):
    """Restaurant seen through the caller's membership"""
    role: StaffRole
    staff_id: Optional[UUID] = None
    activated: Optional[bool] = None


class StaffCreate(BaseModel):
    """Add a user to a restaurant's staff"""
    email: EmailStr
    role: StaffRole = StaffRole.SERVER
    activated: bool = True


class StaffUpdate(BaseModel):
    """Update a staff membership"""
    role: Optional[StaffRole] = None
    activated: Optional[bool] = None

    @model_validator(mode="after")
    def require_change(self):
        if self.role is None and self.activated is None:
            raise ValueError("Nothing to update")
        return self


class StaffResponse(BaseModel):
    """Staff membership response"""
    id: UUID
    restaurant_id: UUID
    user_id: UUID
    email: str
    full_name: Optional[str]
    role: StaffRole
    activated: bool
    created_at: datetime
