# campsite_booking/routes/spots.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from campsite_booking import auth, models, schemas
from campsite_booking.database import get_db
from campsite_booking.locks import SpotLocks, get_spot_locks
from campsite_booking.services.cascade import CascadeManager
from campsite_booking.services.spots import SpotCatalog, validate_new_spot
from campsite_booking.storage import FileStore, get_file_store

router = APIRouter(
    prefix="/spots",
    tags=["Spots"]
)

class SpotForm:
    """Multipart spot fields; every field is optional so updates can be partial."""

    def __init__(
        self,
        title: Optional[str] = Form(None),
        description: Optional[str] = Form(None),
        location: Optional[str] = Form(None),
        price: Optional[str] = Form(None),
        address: Optional[str] = Form(None),
        postal_code: Optional[str] = Form(None),
        city: Optional[str] = Form(None),
        country: Optional[str] = Form(None),
    ):
        self.fields = {
            "title": title,
            "description": description,
            "location": location,
            "price": price,
            "address": address,
            "postal_code": postal_code,
            "city": city,
            "country": country,
        }

# Owner only - create a spot, optionally with an image
@router.post("/", status_code=status.HTTP_201_CREATED)
def create_spot(
    form: SpotForm = Depends(),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: FileStore = Depends(get_file_store),
    current_user: models.User = Depends(auth.get_current_user)
):
    catalog = SpotCatalog(db)
    # Validate before anything touches the disk
    catalog.check_owner(current_user.id, "Only owners can create spots")
    validate_new_spot(form.fields)
    spot = catalog.create_spot(current_user.id, form.fields, store.save(image))
    return {"message": "Spot created", "id": spot.id}

# Public - list spots with optional location, price and free-dates filters
@router.get("/", response_model=List[schemas.SpotResponse])
def list_spots(
    location: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    db: Session = Depends(get_db)
):
    return SpotCatalog(db).list_spots(location, min_price, max_price, start_date, end_date)

# Owner only - spots owned by the logged-in user
@router.get("/owner/spots", response_model=List[schemas.SpotResponse])
def list_owner_spots(db: Session = Depends(get_db), current_user: models.User = Depends(auth.get_current_user)):
    return SpotCatalog(db).list_owner_spots(current_user.id)

# Public - a single spot
@router.get("/{spot_id}", response_model=schemas.SpotResponse)
def get_spot(spot_id: int, db: Session = Depends(get_db)):
    return SpotCatalog(db).get_spot(spot_id)

# Owner only - partial update; the image is replaced only when a new one is sent
@router.put("/{spot_id}")
def update_spot(
    spot_id: int,
    form: SpotForm = Depends(),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: FileStore = Depends(get_file_store),
    current_user: models.User = Depends(auth.get_current_user)
):
    catalog = SpotCatalog(db)
    catalog.check_owner(current_user.id, "Only owners can edit spots")
    catalog.get_owned_spot(spot_id, current_user.id)
    catalog.update_spot(spot_id, current_user.id, form.fields, store.save(image))
    return {"message": "Spot updated successfully"}

# Owner only - delete a spot and everything booked or written against it
@router.delete("/{spot_id}")
def delete_spot(
    spot_id: int,
    db: Session = Depends(get_db),
    locks: SpotLocks = Depends(get_spot_locks),
    current_user: models.User = Depends(auth.get_current_user)
):
    CascadeManager(db, locks).delete_spot(spot_id, current_user.id)
    return {"message": "Spot deleted successfully"}
