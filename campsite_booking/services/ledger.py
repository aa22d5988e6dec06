# campsite_booking/services/ledger.py
import logging
from datetime import date
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from campsite_booking import models
from campsite_booking.database import transaction
from campsite_booking.errors import NotFoundError

logger = logging.getLogger(__name__)


def overlaps(start: date, end: date):
    # Inclusive ranges: sharing an endpoint day is an overlap.
    return ~or_(models.Booking.end_date < start, models.Booking.start_date > end)


class BookingLedger:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: int) -> List[dict]:
        """Renter's bookings with spot summary fields, in insertion order."""
        rows = self.db.query(
            models.Booking.id,
            models.Booking.spot_id,
            models.Booking.start_date,
            models.Booking.end_date,
            models.CampingSpot.title.label("title"),
            models.CampingSpot.location.label("location")
        ).join(models.CampingSpot, models.Booking.spot_id == models.CampingSpot.id).filter(
            models.Booking.user_id == user_id
        ).order_by(models.Booking.id).all()

        return [
            {
                "id": row.id,
                "spot_id": row.spot_id,
                "title": row.title,
                "location": row.location,
                "start_date": row.start_date,
                "end_date": row.end_date,
            }
            for row in rows
        ]

    def list_for_spot(self, spot_id: int) -> List[dict]:
        rows = self.db.query(models.Booking.start_date, models.Booking.end_date).filter(
            models.Booking.spot_id == spot_id
        ).order_by(models.Booking.id).all()
        return [{"start_date": row.start_date, "end_date": row.end_date} for row in rows]

    def has_booking(self, user_id: int, spot_id: int) -> bool:
        return self.db.query(models.Booking.id).filter(
            models.Booking.user_id == user_id,
            models.Booking.spot_id == spot_id
        ).first() is not None

    def find_overlapping(self, spot_id: int, start: date, end: date):
        """First booking on the spot whose range shares a day with ``[start, end]``, or None."""
        return self.db.query(models.Booking).filter(
            models.Booking.spot_id == spot_id,
            overlaps(start, end)
        ).order_by(models.Booking.id).first()

    def delete(self, booking_id: int, requester_id: int) -> None:
        booking = self.db.query(models.Booking).filter(
            models.Booking.id == booking_id,
            models.Booking.user_id == requester_id
        ).first()

        # Someone else's booking looks exactly like a missing one.
        if not booking:
            raise NotFoundError("Booking not found or unauthorized")

        with transaction(self.db):
            self.db.delete(booking)

        logger.info("Booking %s deleted by user %s", booking_id, requester_id)
