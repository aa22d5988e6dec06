# campsite_booking/schemas.py
from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Any, List, Optional
from datetime import date, datetime

class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str
    is_owner: bool = False

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None

class UserProfile(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    is_owner: bool

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserProfile

class SpotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    price: Optional[float] = None
    owner_id: Optional[int] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    image_url: Optional[str] = None

class BookingSummary(BaseModel):
    id: int
    spot_id: int
    title: Optional[str] = None
    location: Optional[str] = None
    start_date: date
    end_date: date

class BookedRange(BaseModel):
    start_date: date
    end_date: date

class AvailabilityDay(BaseModel):
    date: date
    is_available: bool

class ReviewCreate(BaseModel):
    # Left unparsed so JSON true or "5" reach the rating check as they were sent
    rating: Any = None
    comment: Optional[str] = ""

class ReviewResponse(BaseModel):
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    reviewer: Optional[str] = None

class SpotReviews(BaseModel):
    average_rating: float
    reviews: List[ReviewResponse]
