# campsite_booking/services/__init__.py
from sqlalchemy.orm import Session

from campsite_booking import models
from campsite_booking.errors import PermissionDenied


def load_owner(db: Session, user_id: int, message: str) -> models.User:
    """Return the user if it exists and carries the owner flag, else PermissionDenied."""
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if user is None or not user.is_owner:
        raise PermissionDenied(message)
    return user
