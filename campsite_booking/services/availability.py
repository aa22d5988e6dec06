# campsite_booking/services/availability.py
import logging
from datetime import date
from typing import Dict, List

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from campsite_booking import models
from campsite_booking.database import transaction
from campsite_booking.dates import parse_date
from campsite_booking.errors import PermissionDenied, ValidationError
from campsite_booking.services import load_owner

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

_FALSE_STRINGS = {"", "0", "false", "no", "off"}


def _as_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


class AvailabilityCalendar:
    def __init__(self, db: Session):
        self.db = db

    def _parse_entries(self, entries) -> Dict[date, bool]:
        flags: Dict[date, bool] = {}
        for entry in entries:
            if not isinstance(entry, dict) or "date" not in entry:
                raise ValidationError("Each availability entry needs a date")
            # A date repeated in one batch resolves to its last flag.
            flags[parse_date(entry["date"])] = _as_flag(entry.get("is_available"))
        return flags

    def set_availability(self, spot_id: int, owner_id: int, entries) -> int:
        """Upsert a batch of ``{date, is_available}`` entries atomically. Returns the number of days written."""
        load_owner(self.db, owner_id, "Only owners can set availability")

        if not isinstance(entries, list):
            raise ValidationError("Dates must be an array")

        spot = self.db.query(models.CampingSpot).filter(
            models.CampingSpot.id == spot_id,
            models.CampingSpot.owner_id == owner_id
        ).first()
        if not spot:
            raise PermissionDenied("You do not own this spot")

        flags = self._parse_entries(entries)
        if not flags:
            return 0

        with transaction(self.db):
            self._upsert(spot_id, flags)

        logger.info("Availability updated for spot %s: %s day(s)", spot_id, len(flags))
        return len(flags)

    def _upsert(self, spot_id: int, flags: Dict[date, bool]) -> None:
        insert = _UPSERT_DIALECTS.get(self.db.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(models.AvailabilityEntry).values([
                {"spot_id": spot_id, "date": day, "is_available": available}
                for day, available in flags.items()
            ])
            stmt = stmt.on_conflict_do_update(
                index_elements=["spot_id", "date"],
                set_={"is_available": stmt.excluded.is_available},
            )
            self.db.execute(stmt)
            return

        existing = {
            row.date: row
            for row in self.db.query(models.AvailabilityEntry).filter(
                models.AvailabilityEntry.spot_id == spot_id,
                models.AvailabilityEntry.date.in_(list(flags))
            )
        }
        for day, available in flags.items():
            row = existing.get(day)
            if row:
                row.is_available = available
            else:
                self.db.add(models.AvailabilityEntry(spot_id=spot_id, date=day, is_available=available))

    def get_availability(self, spot_id: int) -> List[dict]:
        rows = self.db.query(models.AvailabilityEntry).filter(
            models.AvailabilityEntry.spot_id == spot_id
        ).order_by(models.AvailabilityEntry.date).all()
        return [{"date": row.date, "is_available": bool(row.is_available)} for row in rows]

    def blocked_dates(self, spot_id: int, start: date, end: date) -> List[date]:
        """Days in ``[start, end]`` that carry an explicit unavailable flag."""
        rows = self.db.query(models.AvailabilityEntry.date).filter(
            models.AvailabilityEntry.spot_id == spot_id,
            models.AvailabilityEntry.date >= start,
            models.AvailabilityEntry.date <= end,
            models.AvailabilityEntry.is_available.is_(False)
        ).order_by(models.AvailabilityEntry.date).all()
        return [row.date for row in rows]
