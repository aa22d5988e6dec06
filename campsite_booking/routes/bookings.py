# campsite_booking/routes/bookings.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campsite_booking import auth, models, schemas
from campsite_booking.database import get_db
from campsite_booking.locks import SpotLocks, get_spot_locks
from campsite_booking.services.ledger import BookingLedger
from campsite_booking.services.resolver import ConflictResolver

router = APIRouter(
    prefix="/bookings",
    tags=["Bookings"]
)

# Book a camping spot for an inclusive date range
@router.post("/", status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_data: dict,
    db: Session = Depends(get_db),
    locks: SpotLocks = Depends(get_spot_locks),
    current_user: models.User = Depends(auth.get_current_user)
):
    booking_id = ConflictResolver(db, locks).create_booking(
        current_user.id,
        booking_data.get("spot_id"),
        booking_data.get("start_date"),
        booking_data.get("end_date")
    )
    return {"message": "Booking created", "booking_id": booking_id}

# Bookings made by the logged-in user, with spot title and location
@router.get("/", response_model=List[schemas.BookingSummary])
def list_my_bookings(db: Session = Depends(get_db), current_user: models.User = Depends(auth.get_current_user)):
    return BookingLedger(db).list_for_user(current_user.id)

# Public - booked ranges for a spot
@router.get("/{spot_id}", response_model=List[schemas.BookedRange])
def list_spot_bookings(spot_id: int, db: Session = Depends(get_db)):
    return BookingLedger(db).list_for_spot(spot_id)

# Cancel one of your own bookings
@router.delete("/{booking_id}")
def delete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(auth.get_current_user)
):
    BookingLedger(db).delete(booking_id, current_user.id)
    return {"message": "Booking deleted successfully"}
