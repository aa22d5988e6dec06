# campsite_booking/routes/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campsite_booking import auth, models, schemas
from campsite_booking.database import get_db
from campsite_booking.locks import SpotLocks, get_spot_locks
from campsite_booking.services.accounts import Accounts
from campsite_booking.services.cascade import CascadeManager

router = APIRouter(
    prefix="/users",
    tags=["Users"]
)

@router.get("/me", response_model=schemas.UserProfile)
def read_me(db: Session = Depends(get_db), current_user: models.User = Depends(auth.get_current_user)):
    return Accounts(db).get_profile(current_user.id)

# Update name, email and (optionally) password
@router.put("/me")
def update_me(
    payload: schemas.UserUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(auth.get_current_user)
):
    Accounts(db).update_profile(current_user.id, payload.name, payload.email, payload.password)
    return {"message": "Profile updated successfully"}

# Delete your own account along with your bookings and spots
@router.delete("/me")
def delete_me(
    db: Session = Depends(get_db),
    locks: SpotLocks = Depends(get_spot_locks),
    current_user: models.User = Depends(auth.get_current_user)
):
    CascadeManager(db, locks).delete_user(current_user.id)
    return {"message": "Your account and related data have been deleted"}
