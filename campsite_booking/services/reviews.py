# campsite_booking/services/reviews.py
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from campsite_booking import models
from campsite_booking.database import transaction
from campsite_booking.errors import NotFoundError, ValidationError
from campsite_booking.locks import SpotLocks
from campsite_booking.models import utcnow

logger = logging.getLogger(__name__)


class ReviewAggregate:
    def __init__(self, db: Session, locks: SpotLocks):
        self.db = db
        self.locks = locks

    def upsert_review(self, user_id: int, spot_id: int, rating, comment=None) -> bool:
        """Create or overwrite the user's review of a spot. Returns True when a new row was inserted."""
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError("Rating must be between 1 and 5")

        with self.locks.hold(spot_id), transaction(self.db):
            spot = self.db.query(models.CampingSpot.id).filter(models.CampingSpot.id == spot_id).first()
            if not spot:
                raise NotFoundError("Spot not found")

            existing = self.db.query(models.Review).filter(
                models.Review.user_id == user_id,
                models.Review.spot_id == spot_id
            ).first()

            if existing:
                existing.rating = rating
                existing.comment = comment or ""
                existing.created_at = utcnow()
            else:
                self.db.add(models.Review(
                    user_id=user_id,
                    spot_id=spot_id,
                    rating=rating,
                    comment=comment or "",
                    created_at=utcnow()
                ))

        logger.info("Review %s by user %s for spot %s", "updated" if existing else "submitted", user_id, spot_id)
        return existing is None

    def get_reviews(self, spot_id: int) -> dict:
        rows = self.db.query(
            models.Review.rating,
            models.Review.comment,
            models.Review.created_at,
            models.User.name.label("reviewer")
        ).join(models.User, models.Review.user_id == models.User.id).filter(
            models.Review.spot_id == spot_id
        ).order_by(models.Review.created_at.desc(), models.Review.id.desc()).all()

        average = self.db.query(func.avg(models.Review.rating)).filter(
            models.Review.spot_id == spot_id
        ).scalar()

        return {
            "average_rating": float(average) if average is not None else 0,
            "reviews": [
                {
                    "rating": row.rating,
                    "comment": row.comment,
                    "created_at": row.created_at,
                    "reviewer": row.reviewer,
                }
                for row in rows
            ],
        }
