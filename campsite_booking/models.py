# campsite_booking/models.py
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Date, Numeric, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from campsite_booking.database import Base
import datetime


def utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String)
    email = Column(String, unique=True, index=True)
    password = Column(String)  # bcrypt hash
    is_owner = Column(Boolean, default=False, nullable=False)

class CampingSpot(Base):
    __tablename__ = "camping_spots"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    price = Column(Numeric(10, 2))
    owner_id = Column(Integer, ForeignKey("users.id"), index=True)
    address = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)
    city = Column(String, nullable=True)
    country = Column(String, nullable=True)
    image_url = Column(String, nullable=True)

    owner = relationship("User")

class Booking(Base):
    __tablename__ = "bookings"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True)
    spot_id = Column(Integer, ForeignKey("camping_spots.id"), index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    spot = relationship("CampingSpot")

class Review(Base):
    __tablename__ = "reviews"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True)
    spot_id = Column(Integer, ForeignKey("camping_spots.id"), index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("User")

class AvailabilityEntry(Base):
    __tablename__ = "availability"
    id = Column(Integer, primary_key=True, index=True)
    spot_id = Column(Integer, ForeignKey("camping_spots.id"), nullable=False)
    date = Column(Date, nullable=False)
    is_available = Column(Boolean, nullable=False)

    __table_args__ = (
        UniqueConstraint("spot_id", "date", name="uq_availability_spot_date"),
    )
