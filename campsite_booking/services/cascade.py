# campsite_booking/services/cascade.py
import logging
from contextlib import ExitStack
from typing import List

from sqlalchemy.orm import Session

from campsite_booking import models
from campsite_booking.database import transaction
from campsite_booking.errors import NotFoundError
from campsite_booking.locks import SpotLocks
from campsite_booking.services import load_owner

logger = logging.getLogger(__name__)


class CascadeManager:
    def __init__(self, db: Session, locks: SpotLocks):
        self.db = db
        self.locks = locks

    def _purge_spot_children(self, spot_ids: List[int]) -> None:
        if not spot_ids:
            return
        self.db.query(models.Booking).filter(
            models.Booking.spot_id.in_(spot_ids)
        ).delete(synchronize_session=False)
        self.db.query(models.AvailabilityEntry).filter(
            models.AvailabilityEntry.spot_id.in_(spot_ids)
        ).delete(synchronize_session=False)
        self.db.query(models.Review).filter(
            models.Review.spot_id.in_(spot_ids)
        ).delete(synchronize_session=False)

    def delete_spot(self, spot_id: int, owner_id: int) -> None:
        load_owner(self.db, owner_id, "Only owners can delete spots")

        with self.locks.hold(spot_id):
            with transaction(self.db):
                spot = self.db.query(models.CampingSpot).filter(
                    models.CampingSpot.id == spot_id,
                    models.CampingSpot.owner_id == owner_id
                ).with_for_update().first()
                if not spot:
                    raise NotFoundError("Spot not found or unauthorized")

                self._purge_spot_children([spot_id])
                self.db.query(models.CampingSpot).filter(
                    models.CampingSpot.id == spot_id
                ).delete(synchronize_session=False)

        logger.info("Spot %s deleted by owner %s", spot_id, owner_id)

    def delete_user(self, user_id: int) -> None:
        user = self.db.query(models.User).filter(models.User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")

        spot_ids = sorted(
            row.id for row in self.db.query(models.CampingSpot.id).filter(
                models.CampingSpot.owner_id == user_id
            )
        )

        with ExitStack() as stack:
            for spot_id in spot_ids:
                stack.enter_context(self.locks.hold(spot_id))

            with transaction(self.db):
                # 1. Bookings made by this user
                self.db.query(models.Booking).filter(
                    models.Booking.user_id == user_id
                ).delete(synchronize_session=False)

                # 2. Everything hanging off the spots this user owns, then the spots
                self._purge_spot_children(spot_ids)
                self.db.query(models.CampingSpot).filter(
                    models.CampingSpot.owner_id == user_id
                ).delete(synchronize_session=False)

                # 3. Reviews this user wrote elsewhere
                self.db.query(models.Review).filter(
                    models.Review.user_id == user_id
                ).delete(synchronize_session=False)

                # 4. Finally, the user
                self.db.query(models.User).filter(
                    models.User.id == user_id
                ).delete(synchronize_session=False)

        logger.info("User %s deleted with %s owned spot(s)", user_id, len(spot_ids))
