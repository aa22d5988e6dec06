# campsite_booking/routes/availability.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campsite_booking import auth, models, schemas
from campsite_booking.database import get_db
from campsite_booking.services.availability import AvailabilityCalendar

router = APIRouter(
    prefix="/availability",
    tags=["Availability"]
)

# Public - every explicit availability entry for a spot
@router.get("/{spot_id}", response_model=List[schemas.AvailabilityDay])
def get_availability(spot_id: int, db: Session = Depends(get_db)):
    return AvailabilityCalendar(db).get_availability(spot_id)

# Owner only - upsert a batch of {"date", "is_available"} entries under "dates"
@router.post("/{spot_id}")
def set_availability(
    spot_id: int,
    payload: dict,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(auth.get_current_user)
):
    updated = AvailabilityCalendar(db).set_availability(spot_id, current_user.id, payload.get("dates"))
    return {"message": "Availability updated", "updated": updated}
