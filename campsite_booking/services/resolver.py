# campsite_booking/services/resolver.py
import logging
from datetime import date

from sqlalchemy.orm import Session

from campsite_booking import models
from campsite_booking.database import transaction
from campsite_booking.dates import parse_date
from campsite_booking.errors import ConflictError, NotFoundError, ValidationError
from campsite_booking.locks import SpotLocks
from campsite_booking.services.availability import AvailabilityCalendar
from campsite_booking.services.ledger import BookingLedger

logger = logging.getLogger(__name__)


def _as_id(value, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}")


class ConflictResolver:
    def __init__(self, db: Session, locks: SpotLocks):
        self.db = db
        self.locks = locks
        self.calendar = AvailabilityCalendar(db)
        self.ledger = BookingLedger(db)

    def create_booking(self, renter_id: int, spot_id, start_date, end_date) -> int:
        """Validate and insert a booking; returns the new booking id."""
        if not spot_id or not start_date or not end_date:
            raise ValidationError("Missing booking fields")

        spot_id = _as_id(spot_id, "spot_id")
        start = parse_date(start_date, "start_date")
        end = parse_date(end_date, "end_date")
        if start > end:
            raise ValidationError("start_date must be on or before end_date")

        with self.locks.hold(spot_id):
            with transaction(self.db):
                self._check(renter_id, spot_id, start, end)
                booking = models.Booking(
                    user_id=renter_id,
                    spot_id=spot_id,
                    start_date=start,
                    end_date=end
                )
                self.db.add(booking)
                self.db.flush()
                booking_id = booking.id

        logger.info("Booking %s created: user %s, spot %s, %s..%s", booking_id, renter_id, spot_id, start, end)
        return booking_id

    def _check(self, renter_id: int, spot_id: int, start: date, end: date) -> None:
        spot = self.db.query(models.CampingSpot).filter(
            models.CampingSpot.id == spot_id
        ).with_for_update().first()
        if not spot:
            raise NotFoundError("Spot not found")

        # TODO: product to confirm whether a renter may hold several non-overlapping bookings per spot
        if self.ledger.has_booking(renter_id, spot_id):
            logger.info("Booking rejected: user %s already booked spot %s", renter_id, spot_id)
            raise ConflictError("You have already booked this camping spot.")

        blocked = self.calendar.blocked_dates(spot_id, start, end)
        if blocked:
            logger.info("Booking rejected: spot %s blocked on %s", spot_id, blocked)
            raise ConflictError(
                "Some dates are unavailable for booking",
                extra={"blocked_dates": [day.isoformat() for day in blocked]}
            )

        conflict = self.ledger.find_overlapping(spot_id, start, end)
        if conflict:
            logger.info("Booking rejected: spot %s overlaps booking %s", spot_id, conflict.id)
            raise ConflictError("This spot is already booked during the selected dates.")
