"""
Esquemas para leads, testimonios, clientes y notificaciones.
"""
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from vitrina.api.schemas.common import LocalizedText

LeadStatus = Literal["new", "called", "rejected", "interested"]


class LeadCreate(BaseModel):
    name: str = Field(min_length=1)
    text: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    status: LeadStatus = "new"
    is_active: bool = True


class LeadUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    text: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    status: Optional[LeadStatus] = None
    is_active: Optional[bool] = None


class TestimonialCreate(BaseModel):
    fullname: Optional[LocalizedText] = None
    title: Optional[LocalizedText] = None
    content: Optional[LocalizedText] = None
    image: Optional[str] = None
    rate: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: bool = True


class TestimonialUpdate(BaseModel):
    fullname: Optional[LocalizedText] = None
    title: Optional[LocalizedText] = None
    content: Optional[LocalizedText] = None
    image: Optional[str] = None
    rate: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: Optional[bool] = None


class ClientCreate(BaseModel):
    name: Optional[LocalizedText] = None
    image: Optional[str] = None
    brand: Optional[str] = None
    is_active: bool = True


class ClientUpdate(BaseModel):
    name: Optional[LocalizedText] = None
    image: Optional[str] = None
    brand: Optional[str] = None
    is_active: Optional[bool] = None


class NotificationCreate(BaseModel):
    message: str = Field(min_length=1)


class NotificationUpdate(BaseModel):
    message: Optional[str] = Field(default=None, min_length=1)
