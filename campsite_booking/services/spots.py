# campsite_booking/services/spots.py
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from campsite_booking import models
from campsite_booking.database import transaction
from campsite_booking.dates import parse_date
from campsite_booking.errors import NotFoundError, ValidationError
from campsite_booking.services import load_owner
from campsite_booking.services.ledger import overlaps

logger = logging.getLogger(__name__)

SPOT_FIELDS = ("title", "description", "location", "price", "address", "postal_code", "city", "country")


def _as_price(value) -> Decimal:
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("Price must be a number")
    if not price.is_finite() or price < 0:
        raise ValidationError("Price must be a non-negative number")
    return price


def validate_new_spot(fields: dict) -> None:
    if not fields.get("title") or fields.get("price") in (None, ""):
        raise ValidationError("Title and price are required")
    _as_price(fields["price"])


class SpotCatalog:
    def __init__(self, db: Session):
        self.db = db

    def check_owner(self, owner_id: int, message: str) -> models.User:
        return load_owner(self.db, owner_id, message)

    def get_owned_spot(self, spot_id: int, owner_id: int) -> models.CampingSpot:
        spot = self.db.query(models.CampingSpot).filter(
            models.CampingSpot.id == spot_id,
            models.CampingSpot.owner_id == owner_id
        ).first()
        if not spot:
            raise NotFoundError("Spot not found or unauthorized")
        return spot

    def create_spot(self, owner_id: int, fields: dict, image_url: Optional[str] = None) -> models.CampingSpot:
        self.check_owner(owner_id, "Only owners can create spots")

        validate_new_spot(fields)

        values = {name: fields.get(name) for name in SPOT_FIELDS}
        values["price"] = _as_price(values["price"])
        spot = models.CampingSpot(owner_id=owner_id, image_url=image_url, **values)

        with transaction(self.db):
            self.db.add(spot)
        self.db.refresh(spot)
        logger.info("Spot %s created by owner %s", spot.id, owner_id)
        return spot

    def list_spots(
        self,
        location: Optional[str] = None,
        min_price=None,
        max_price=None,
        start_date=None,
        end_date=None,
    ) -> List[models.CampingSpot]:
        query = self.db.query(models.CampingSpot)

        if location:
            query = query.filter(func.lower(models.CampingSpot.location).like(f"%{location.lower()}%"))
        if min_price not in (None, ""):
            query = query.filter(models.CampingSpot.price >= _as_price(min_price))
        if max_price not in (None, ""):
            query = query.filter(models.CampingSpot.price <= _as_price(max_price))

        # Hide spots with any booking sharing a day with the requested stay
        if start_date and end_date:
            start = parse_date(start_date, "start_date")
            end = parse_date(end_date, "end_date")
            booked = select(models.Booking.spot_id).where(overlaps(start, end))
            query = query.filter(models.CampingSpot.id.not_in(booked))

        return query.order_by(models.CampingSpot.id).all()

    def get_spot(self, spot_id: int) -> models.CampingSpot:
        spot = self.db.query(models.CampingSpot).filter(models.CampingSpot.id == spot_id).first()
        if not spot:
            raise NotFoundError("Spot not found")
        return spot

    def update_spot(self, spot_id: int, owner_id: int, fields: dict, image_url: Optional[str] = None) -> models.CampingSpot:
        self.check_owner(owner_id, "Only owners can edit spots")
        spot = self.get_owned_spot(spot_id, owner_id)

        with transaction(self.db):
            for name in SPOT_FIELDS:
                value = fields.get(name)
                if value in (None, ""):
                    continue
                setattr(spot, name, _as_price(value) if name == "price" else value)
            # Keep the existing image unless a new one was uploaded
            if image_url:
                spot.image_url = image_url
        self.db.refresh(spot)
        return spot

    def list_owner_spots(self, owner_id: int) -> List[models.CampingSpot]:
        self.check_owner(owner_id, "Only owners can view their spots")
        return self.db.query(models.CampingSpot).filter(
            models.CampingSpot.owner_id == owner_id
        ).order_by(models.CampingSpot.id).all()
