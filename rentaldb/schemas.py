from datetime import date
from decimal import Decimal
from typing import Optional, List

from pydantic import BaseModel, EmailStr, Field, model_validator

from .models import UserRole, BookingStatus, PaymentMethodType, PaymentStatus

# ==== Lookup tables ====

class LocationCreate(BaseModel):
    city: str = Field(..., min_length=1, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)

class PropertyTypeCreate(BaseModel):
    type_name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None

class AmenityCreate(BaseModel):
    amenity_name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

# ==== Core entities ====

class UserCreate(BaseModel):
    id: Optional[str] = None
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)
    phone_number: Optional[str] = Field(None, max_length=30)
    role: UserRole = UserRole.GUEST

class PropertyCreate(BaseModel):
    id: Optional[str] = None
    owner_id: str
    location_id: str
    property_type_id: str
    name: str = Field(..., min_length=1, max_length=200)
    description: str
    price_per_night: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    amenity_ids: List[str] = Field(default_factory=list)

class BookingCreate(BaseModel):
    id: Optional[str] = None
    property_id: str
    user_id: str
    start_date: date
    end_date: date
    total_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    status: BookingStatus = BookingStatus.PENDING

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self

class PaymentMethodCreate(BaseModel):
    id: Optional[str] = None
    user_id: str
    method_type: PaymentMethodType
    is_default: bool = False

class PaymentCreate(BaseModel):
    id: Optional[str] = None
    booking_id: str
    payment_method_id: str
    amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    status: PaymentStatus = PaymentStatus.COMPLETED
    transaction_id: Optional[str] = Field(None, max_length=100)

class ReviewCreate(BaseModel):
    id: Optional[str] = None
    property_id: str
    user_id: str
    booking_id: Optional[str] = None
    rating: int = Field(..., ge=1, le=5, strict=True)
    comment: str = Field(..., min_length=1)

class MessageCreate(BaseModel):
    id: Optional[str] = None
    sender_id: str
    recipient_id: str
    booking_id: Optional[str] = None
    review_id: Optional[str] = None
    subject: Optional[str] = Field(None, max_length=200)
    message_body: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_parties(self):
        if self.sender_id == self.recipient_id:
            raise ValueError("sender and recipient must differ")
        return self
