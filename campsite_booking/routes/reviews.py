# campsite_booking/routes/reviews.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from campsite_booking import auth, models, schemas
from campsite_booking.database import get_db
from campsite_booking.locks import SpotLocks, get_spot_locks
from campsite_booking.services.reviews import ReviewAggregate

router = APIRouter(
    prefix="/reviews",
    tags=["Reviews"]
)

# Public - reviews for a spot, newest first, plus the average rating
@router.get("/{spot_id}", response_model=schemas.SpotReviews)
def get_reviews(spot_id: int, db: Session = Depends(get_db), locks: SpotLocks = Depends(get_spot_locks)):
    return ReviewAggregate(db, locks).get_reviews(spot_id)

# Submit a review, or overwrite the one you already left
@router.post("/{spot_id}")
def upsert_review(
    spot_id: int,
    review: schemas.ReviewCreate,
    db: Session = Depends(get_db),
    locks: SpotLocks = Depends(get_spot_locks),
    current_user: models.User = Depends(auth.get_current_user)
):
    created = ReviewAggregate(db, locks).upsert_review(current_user.id, spot_id, review.rating, review.comment)
    if created:
        return JSONResponse(status_code=201, content={"message": "Review submitted"})
    return {"message": "Review updated"}
